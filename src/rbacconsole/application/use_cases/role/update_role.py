"""Update role use case."""

import logging
from collections.abc import Iterable

from rbacconsole.application.caches import RoleCatalog
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.application.use_cases.role.role_form import clean_permissions, validate_role_name
from rbacconsole.domain.entities import Role
from rbacconsole.domain.exceptions import NotFound, ValidationError
from rbacconsole.domain.value_objects import PermissionToken

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Rename a role or change its permissions."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog

    async def execute(self, role_id: str, name: str, permissions: Iterable[str]) -> Role:
        """Replace the cached role only with the server's answer."""
        self._context.require(PermissionToken.MANAGE_ROLES)
        if not role_id:
            raise ValidationError("Role ID is missing")
        if self._roles.find(role_id) is None:
            raise NotFound("Role", role_id)
        name = validate_role_name(name, self._roles, role_id=role_id)

        role = await self._backend.update_role(
            self._context.require_token(), role_id, name, clean_permissions(permissions)
        )
        self._roles.replace(role)
        logger.info("Role %s updated", role_id)
        return role
