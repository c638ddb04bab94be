"""Load roles use case."""

from rbacconsole.application.caches import RoleCatalog
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.entities import Role
from rbacconsole.domain.value_objects import PermissionToken


class LoadRolesUseCase:
    """Fetch the role list for the role management view."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog

    async def execute(self, for_management: bool = True) -> list[Role]:
        """The management view needs manage_roles; picking a role for oneself does not."""
        if for_management:
            self._context.require(
                PermissionToken.MANAGE_ROLES, "You do not have permission to view roles"
            )
        roles = await self._backend.list_roles(self._context.require_token())
        self._roles.replace_all(roles)
        return roles
