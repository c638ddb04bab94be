"""Pytest fixtures for console tests."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from rbacconsole.application.caches import RoleCatalog, UserDirectory
from rbacconsole.application.dto.profile_dto import ProfileUpdateRequest
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.entities import Role, Session, UserAccount
from rbacconsole.domain.exceptions import NotFound, PermissionDenied, RBACConsoleError
from rbacconsole.infrastructure.notification.notifiers import RecordingNotifier
from rbacconsole.infrastructure.session.token_store import InMemoryTokenStore

ADMIN = Role(id="r-admin", name="admin", permissions=frozenset())
EDITOR = Role(id="r-editor", name="editor", permissions=frozenset({"view_dashboard", "edit_profile"}))
MANAGER = Role(id="r-manager", name="manager", permissions=frozenset({"manage_users"}))
VIEWER = Role(id="r-viewer", name="viewer", permissions=frozenset())


# --- Fake backend ---


class FakeBackend:
    """In-memory RBAC backend that records every call."""

    def __init__(self) -> None:
        self.roles: dict[str, Role] = {r.id: r for r in (ADMIN, EDITOR, MANAGER, VIEWER)}
        self.users: dict[str, UserAccount] = {
            "u-admin": UserAccount("u-admin", "Ada", "ada@example.com", ADMIN),
            "u-bob": UserAccount("u-bob", "Bob", "bob@example.com", EDITOR),
            "u-meg": UserAccount("u-meg", "Meg", "meg@example.com", MANAGER),
        }
        self.passwords: dict[str, str] = {"u-admin": "secret"}
        self.tokens: dict[str, str] = {"t-admin": "u-admin", "t-bob": "u-bob", "t-meg": "u-meg"}
        self.calls: list[tuple] = []
        self.failures: dict[str, RBACConsoleError] = {}
        self._next_id = 1

    def fail(self, operation: str, error: RBACConsoleError) -> None:
        """Make the next calls of operation raise error."""
        self.failures[operation] = error

    def calls_to(self, operation: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == operation]

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, *args))
        if operation in self.failures:
            raise self.failures[operation]

    def _session_for(self, token: str) -> Session:
        user_id = self.tokens.get(token)
        if user_id is None:
            raise PermissionDenied("Invalid token", status=401)
        user = self.users[user_id]
        return Session(user.id, user.name, user.email, user.role, token)

    async def list_users(self, token: str) -> list[UserAccount]:
        self._record("list_users")
        return list(self.users.values())

    async def delete_user(self, token: str, user_id: str) -> None:
        self._record("delete_user", user_id)
        if user_id not in self.users:
            raise NotFound("User", user_id, status=404)
        del self.users[user_id]

    async def assign_role(self, token: str, user_id: str, role_id: str) -> None:
        self._record("assign_role", user_id, role_id)
        if user_id not in self.users or role_id not in self.roles:
            raise NotFound("User or role", f"{user_id}/{role_id}", status=404)
        self.users[user_id].role = self.roles[role_id]

    async def list_roles(self, token: str) -> list[Role]:
        self._record("list_roles")
        return list(self.roles.values())

    async def create_role(self, token: str, name: str, permissions: Iterable[str]) -> Role:
        permissions = list(permissions)
        self._record("create_role", name, permissions)
        role = Role(id=f"r-new-{self._next_id}", name=name, permissions=frozenset(permissions))
        self._next_id += 1
        self.roles[role.id] = role
        return role

    async def update_role(
        self, token: str, role_id: str, name: str, permissions: Iterable[str]
    ) -> Role:
        permissions = list(permissions)
        self._record("update_role", role_id, name, permissions)
        if role_id not in self.roles:
            raise NotFound("Role", role_id, status=404)
        role = Role(id=role_id, name=name, permissions=frozenset(permissions))
        self.roles[role_id] = role
        return role

    async def delete_role(self, token: str, role_id: str) -> None:
        self._record("delete_role", role_id)
        if role_id not in self.roles:
            raise NotFound("Role", role_id, status=404)
        del self.roles[role_id]

    async def get_profile(self, token: str) -> Session:
        self._record("get_profile")
        return self._session_for(token)

    async def update_profile(self, token: str, request: ProfileUpdateRequest) -> Session:
        self._record("update_profile", request)
        session = self._session_for(token)
        if request.new_password:
            if self.passwords.get(session.actor_id) != request.current_password:
                raise PermissionDenied("Current password is incorrect", status=401)
            self.passwords[session.actor_id] = request.new_password
        user = self.users[session.actor_id]
        user.name = request.name
        user.email = request.email
        return Session(user.id, user.name, user.email, user.role, token)


def make_session(actor_id: str = "u-admin", role: Role | None = ADMIN, token: str = "t-admin") -> Session:
    """Session with a copy of role, so tests cannot leak role mutations."""
    if role is not None:
        role = Role(id=role.id, name=role.name, permissions=role.permissions)
    return Session(actor_id, "Ada", "ada@example.com", role, token)


# --- Fixtures ---


@pytest.fixture
def backend() -> FakeBackend:
    """Fresh in-memory backend for each test."""
    return FakeBackend()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore("t-admin")


@pytest.fixture
def admin_context(backend: FakeBackend, token_store: InMemoryTokenStore) -> SessionContext:
    """Session context of the admin user u-admin."""
    return SessionContext(make_session(), backend, token_store)


@pytest.fixture
def editor_context(backend: FakeBackend) -> SessionContext:
    """Session context of u-bob, whose role has no manage permissions."""
    return SessionContext(
        make_session("u-bob", EDITOR, "t-bob"), backend, InMemoryTokenStore("t-bob")
    )


@pytest.fixture
def manager_context(backend: FakeBackend) -> SessionContext:
    """Session context of u-meg, who holds manage_users but is not admin."""
    return SessionContext(
        make_session("u-meg", MANAGER, "t-meg"), backend, InMemoryTokenStore("t-meg")
    )


@pytest.fixture
def role_catalog() -> RoleCatalog:
    return RoleCatalog([ADMIN, EDITOR, MANAGER, VIEWER])


@pytest.fixture
def user_directory(backend: FakeBackend) -> UserDirectory:
    return UserDirectory(
        [UserAccount(u.id, u.name, u.email, u.role) for u in backend.users.values()]
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def mock_backend():
    """AsyncMock for RBACBackend - lists the fake users and roles by default."""
    from unittest.mock import AsyncMock

    seed = FakeBackend()
    mock = AsyncMock()
    mock.list_users.return_value = list(seed.users.values())
    mock.list_roles.return_value = list(seed.roles.values())
    return mock
