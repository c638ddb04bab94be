"""httpx adapter for the RBAC REST service."""

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from rbacconsole.application.dto.payloads import (
    normalize_list,
    normalize_role,
    normalize_session,
    normalize_user,
    require_role,
)
from rbacconsole.application.dto.profile_dto import ProfileUpdateRequest
from rbacconsole.domain.entities import Role, Session, UserAccount
from rbacconsole.domain.exceptions import ConflictOrUnknown, NetworkError
from rbacconsole.infrastructure.http.errors import translate_error

logger = logging.getLogger(__name__)


class HttpRBACBackend:
    """RBAC backend over HTTP with bearer authentication.

    One request per call, no retries. Every failure leaves as an
    ``RBACConsoleError`` subclass.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpRBACBackend":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: str,
        *,
        fallback: str,
        json: dict[str, Any] | None = None,
        entity: str = "Resource",
        identifier: str | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError() from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if not response.is_success:
            raise translate_error(response, fallback, entity=entity, identifier=identifier)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ConflictOrUnknown(
                "Server returned an invalid response. Please try again later.",
                status=response.status_code,
            ) from e

    async def list_users(self, token: str) -> list[UserAccount]:
        data = await self._request("GET", "/users", token, fallback="Failed to fetch users")
        return [normalize_user(u) for u in normalize_list(data, "users")]

    async def delete_user(self, token: str, user_id: str) -> None:
        await self._request(
            "DELETE",
            f"/users/{user_id}",
            token,
            fallback="Failed to delete user",
            entity="User",
            identifier=user_id,
        )

    async def assign_role(self, token: str, user_id: str, role_id: str) -> None:
        await self._request(
            "POST",
            "/users/assign-role",
            token,
            json={"userId": user_id, "roleId": role_id},
            fallback="Failed to update role",
            entity="User or role",
            identifier=f"{user_id}/{role_id}",
        )

    async def list_roles(self, token: str) -> list[Role]:
        data = await self._request("GET", "/roles", token, fallback="Failed to fetch roles")
        roles = [normalize_role(r) for r in normalize_list(data, "roles")]
        return [r for r in roles if r is not None and r.id is not None]

    async def create_role(self, token: str, name: str, permissions: Iterable[str]) -> Role:
        data = await self._request(
            "POST",
            "/roles",
            token,
            json={"name": name, "permissions": list(permissions)},
            fallback="Failed to create role",
        )
        return require_role(data)

    async def update_role(
        self, token: str, role_id: str, name: str, permissions: Iterable[str]
    ) -> Role:
        data = await self._request(
            "PUT",
            f"/roles/{role_id}",
            token,
            json={"name": name, "permissions": list(permissions)},
            fallback="Failed to update role",
            entity="Role",
            identifier=role_id,
        )
        return require_role(data)

    async def delete_role(self, token: str, role_id: str) -> None:
        await self._request(
            "DELETE",
            f"/roles/{role_id}",
            token,
            fallback="Failed to delete role",
            entity="Role",
            identifier=role_id,
        )

    async def get_profile(self, token: str) -> Session:
        data = await self._request("GET", "/auth/profile", token, fallback="Failed to load profile")
        if not isinstance(data, dict):
            raise ConflictOrUnknown("Server returned an invalid profile")
        return normalize_session(data, token)

    async def update_profile(self, token: str, request: ProfileUpdateRequest) -> Session:
        data = await self._request(
            "PUT",
            "/auth/profile",
            token,
            json=request.to_payload(),
            fallback="Failed to update profile",
        )
        if not isinstance(data, dict):
            raise ConflictOrUnknown("Server returned an invalid profile")
        return normalize_session(data, token)
