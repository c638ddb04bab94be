"""Load user directory use case."""

import asyncio
import logging

from rbacconsole.application.caches import RoleCatalog, UserDirectory
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.entities import Role, UserAccount
from rbacconsole.domain.value_objects import PermissionToken

logger = logging.getLogger(__name__)


async def fetch_users_and_roles(
    backend: RBACBackend, token: str
) -> tuple[list[UserAccount], list[Role]]:
    """Fetch users and roles concurrently.

    Both requests are awaited to completion. The first failure, in request
    order, is raised; a second one is only logged.
    """
    results = await asyncio.gather(
        backend.list_users(token),
        backend.list_roles(token),
        return_exceptions=True,
    )
    errors = [r for r in results if isinstance(r, BaseException)]
    for extra in errors[1:]:
        logger.debug("Concurrent fetch also failed: %r", extra)
    if errors:
        raise errors[0]
    users, roles = results
    return users, roles


class LoadDirectoryUseCase:
    """Fetch users and roles together for the user management view."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
        user_directory: UserDirectory,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog
        self._users = user_directory

    async def execute(self) -> tuple[list[UserAccount], list[Role]]:
        """Both fetches run concurrently; caches change only if both succeed."""
        self._context.require(
            PermissionToken.MANAGE_USERS,
            "Access denied: you don't have permission to manage users",
        )
        token = self._context.require_token()
        users, roles = await fetch_users_and_roles(self._backend, token)
        self._users.replace_all(users)
        self._roles.replace_all(roles)
        logger.debug("Loaded %d users and %d roles", len(users), len(roles))
        return users, roles
