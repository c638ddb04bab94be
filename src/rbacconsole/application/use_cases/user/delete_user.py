"""Delete user use case."""

import logging

from rbacconsole.application.caches import UserDirectory
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.exceptions import NotFound, ValidationError
from rbacconsole.domain.value_objects import PermissionToken

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """Delete a user account."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        user_directory: UserDirectory,
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._users = user_directory

    async def execute(self, user_id: str) -> None:
        """A 404 means the user is already gone: the row is dropped, NotFound still raised."""
        self._context.require(PermissionToken.MANAGE_USERS)
        if not user_id:
            raise ValidationError("User ID is missing")
        try:
            await self._backend.delete_user(self._context.require_token(), user_id)
        except NotFound as e:
            self._users.remove(user_id)
            raise NotFound(
                "User",
                user_id,
                "User not found. They may have already been deleted.",
                status=e.status,
            ) from None
        self._users.remove(user_id)
        logger.info("User %s deleted", user_id)
