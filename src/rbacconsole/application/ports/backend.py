"""REST backend port - users, roles and the actor's profile."""

from collections.abc import Iterable
from typing import Protocol

from rbacconsole.application.dto.profile_dto import ProfileUpdateRequest
from rbacconsole.domain.entities import Role, Session, UserAccount


class RBACBackend(Protocol):
    """Port for the RBAC REST service.

    Implementations return normalized entities and raise only
    ``RBACConsoleError`` subclasses.
    """

    async def list_users(self, token: str) -> list[UserAccount]: ...

    async def delete_user(self, token: str, user_id: str) -> None: ...

    async def assign_role(self, token: str, user_id: str, role_id: str) -> None: ...

    async def list_roles(self, token: str) -> list[Role]: ...

    async def create_role(self, token: str, name: str, permissions: Iterable[str]) -> Role: ...

    async def update_role(
        self, token: str, role_id: str, name: str, permissions: Iterable[str]
    ) -> Role: ...

    async def delete_role(self, token: str, role_id: str) -> None: ...

    async def get_profile(self, token: str) -> Session: ...

    async def update_profile(self, token: str, request: ProfileUpdateRequest) -> Session: ...
