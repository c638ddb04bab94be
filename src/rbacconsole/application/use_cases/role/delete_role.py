"""Delete role use case."""

import logging

from rbacconsole.application.caches import RoleCatalog
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.exceptions import ValidationError
from rbacconsole.domain.value_objects import PermissionToken

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role. Users still holding it are left to the backend."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog

    async def execute(self, role_id: str) -> None:
        self._context.require(PermissionToken.MANAGE_ROLES)
        if not role_id:
            raise ValidationError("Role ID is missing")
        await self._backend.delete_role(self._context.require_token(), role_id)
        self._roles.remove(role_id)
        logger.info("Role %s deleted", role_id)
