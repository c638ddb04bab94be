"""Create role use case."""

import logging
from collections.abc import Iterable

from rbacconsole.application.caches import RoleCatalog
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.application.use_cases.role.role_form import clean_permissions, validate_role_name
from rbacconsole.domain.entities import Role
from rbacconsole.domain.value_objects import PermissionToken

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Create a role and add the confirmed result to the catalog."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog

    async def execute(self, name: str, permissions: Iterable[str]) -> Role:
        """Actor must be able to manage roles."""
        self._context.require(PermissionToken.MANAGE_ROLES)
        name = validate_role_name(name, self._roles)
        role = await self._backend.create_role(
            self._context.require_token(), name, clean_permissions(permissions)
        )
        self._roles.add(role)
        logger.info("Role %s created (%s)", role.name, role.id)
        return role
