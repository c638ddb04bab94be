"""Fixtures for REST adapter tests: an in-process Falcon fake of the RBAC service."""

import falcon
import falcon.asgi
import httpx
import pytest
import pytest_asyncio

from rbacconsole.infrastructure.http.rest_backend import HttpRBACBackend

TOKEN = "good-token"


class FakeRBACServer:
    """Mutable state of the fake service, Mongo-style ids and permission objects."""

    def __init__(self) -> None:
        self.roles = [
            {"_id": "r1", "name": "admin", "permissions": [{"name": "manage_users"}]},
            {"_id": "r2", "name": "editor", "permissions": ["edit_profile"]},
        ]
        self.users = [
            {"_id": "u1", "name": "Ada", "email": "ada@example.com", "role": self.roles[0]},
            {"_id": "u2", "name": "Bob", "email": "bob@example.com", "role": "editor"},
        ]
        self.forced: tuple[str, str, str] | None = None
        self.requests: list[tuple[str, str, object]] = []
        self._next_id = 3

    def force(self, status: str, body: str, content_type: str = falcon.MEDIA_JSON) -> None:
        """Answer every following request with a canned response."""
        self.forced = (status, body, content_type)

    def role(self, role_id: str) -> dict | None:
        return next((r for r in self.roles if r["_id"] == role_id), None)

    def user(self, user_id: str) -> dict | None:
        return next((u for u in self.users if u["_id"] == user_id), None)

    def new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}{self._next_id}"


class ServerMiddleware:
    """Records requests, enforces the bearer token and applies forced responses."""

    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        body = await req.get_media(default_when_empty=None) if req.content_length else None
        self._server.requests.append((req.method, req.path, body))
        if self._server.forced:
            status, text, content_type = self._server.forced
            resp.status = status
            resp.content_type = content_type
            resp.text = text
            resp.complete = True
            return
        if req.get_header("Authorization") != f"Bearer {TOKEN}":
            resp.status = falcon.HTTP_403
            resp.media = {"message": "Access denied"}
            resp.complete = True


class UsersResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_get(self, req, resp) -> None:
        resp.media = self._server.users


class UserResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_delete(self, req, resp, user_id: str) -> None:
        user = self._server.user(user_id)
        if user is None:
            resp.status = falcon.HTTP_404
            resp.media = {"message": "User not found"}
            return
        self._server.users.remove(user)
        resp.media = {"message": "User deleted"}


class AssignRoleResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_post(self, req, resp) -> None:
        body = await req.get_media()
        user = self._server.user(body.get("userId", ""))
        role = self._server.role(body.get("roleId", ""))
        if user is None or role is None:
            resp.status = falcon.HTTP_404
            resp.media = {"message": "User or role not found"}
            return
        user["role"] = role
        resp.media = {"message": "Role assigned", "user": user}


class RolesResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_get(self, req, resp) -> None:
        resp.media = self._server.roles

    async def on_post(self, req, resp) -> None:
        body = await req.get_media()
        if not body.get("name"):
            resp.status = falcon.HTTP_400
            resp.media = {"message": "Role name is required"}
            return
        role = {
            "_id": self._server.new_id("r"),
            "name": body["name"],
            "permissions": [{"name": p} for p in body.get("permissions", [])],
        }
        self._server.roles.append(role)
        resp.status = falcon.HTTP_201
        resp.media = {"message": "Role created", "role": role}


class RoleResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_put(self, req, resp, role_id: str) -> None:
        role = self._server.role(role_id)
        if role is None:
            raise falcon.HTTPNotFound()
        body = await req.get_media()
        role.update(name=body["name"], permissions=body["permissions"])
        resp.media = {"role": role}

    async def on_delete(self, req, resp, role_id: str) -> None:
        role = self._server.role(role_id)
        if role is None:
            resp.status = falcon.HTTP_404
            resp.media = {"message": "Role not found"}
            return
        self._server.roles.remove(role)
        resp.status = falcon.HTTP_204


class ProfileResource:
    def __init__(self, server: FakeRBACServer) -> None:
        self._server = server

    async def on_get(self, req, resp) -> None:
        resp.media = self._server.users[0]

    async def on_put(self, req, resp) -> None:
        body = await req.get_media()
        if "newPassword" in body and body.get("currentPassword") != "secret":
            resp.status = falcon.HTTP_401
            resp.media = {"message": "Current password is incorrect"}
            return
        me = self._server.users[0]
        me.update(name=body["name"], email=body["email"])
        resp.media = {"user": me}


def create_fake_app(server: FakeRBACServer) -> falcon.asgi.App:
    app = falcon.asgi.App(middleware=[ServerMiddleware(server)])
    app.add_route("/api/users", UsersResource(server))
    app.add_route("/api/users/assign-role", AssignRoleResource(server))
    app.add_route("/api/users/{user_id}", UserResource(server))
    app.add_route("/api/roles", RolesResource(server))
    app.add_route("/api/roles/{role_id}", RoleResource(server))
    app.add_route("/api/auth/profile", ProfileResource(server))
    return app


@pytest.fixture
def server() -> FakeRBACServer:
    return FakeRBACServer()


@pytest_asyncio.fixture
async def rest_backend(server: FakeRBACServer):
    """HttpRBACBackend talking to the fake service in-process."""
    transport = httpx.ASGITransport(app=create_fake_app(server))
    backend = HttpRBACBackend("http://testserver/api", transport=transport)
    yield backend
    await backend.aclose()
