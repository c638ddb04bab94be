"""Session context - who is acting and what they can do."""

import logging

from rbacconsole.application.dto.profile_dto import ProfilePatch, ProfileUpdateRequest
from rbacconsole.application.ports import RBACBackend, TokenStore
from rbacconsole.domain.entities import Session
from rbacconsole.domain.exceptions import PermissionDenied, ValidationError

logger = logging.getLogger(__name__)


class SessionContext:
    """Single source of truth for the acting session.

    Passed explicitly to every component that needs capability checks.
    """

    def __init__(
        self,
        session: Session | None,
        backend: RBACBackend,
        token_store: TokenStore | None = None,
    ) -> None:
        self._session = session
        self._backend = backend
        self._token_store = token_store

    @classmethod
    async def from_token(
        cls,
        token: str,
        backend: RBACBackend,
        token_store: TokenStore | None = None,
    ) -> "SessionContext":
        """Build the session from a freshly issued token and persist it."""
        session = await backend.get_profile(token)
        if token_store is not None:
            token_store.save(token)
        logger.info("Session started for actor %s", session.actor_id)
        return cls(session, backend, token_store)

    @classmethod
    async def restore(cls, backend: RBACBackend, token_store: TokenStore) -> "SessionContext":
        """Rebuild the session from the persisted token, if any.

        A token the backend rejects is discarded and an empty context returned.
        """
        token = token_store.load()
        if not token:
            return cls(None, backend, token_store)
        try:
            session = await backend.get_profile(token)
        except PermissionDenied:
            logger.warning("Persisted token rejected, clearing it")
            token_store.clear()
            return cls(None, backend, token_store)
        return cls(session, backend, token_store)

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None and self._session.is_active

    @property
    def actor_id(self) -> str | None:
        return self._session.actor_id if self._session else None

    def is_admin(self) -> bool:
        """True iff the role name is ``admin``, case-insensitively."""
        if self._session is None or self._session.role is None:
            return False
        return self._session.role.is_admin

    def has_permission(self, token: str) -> bool:
        """True iff the session's role grants token. False without a role."""
        if self._session is None or self._session.role is None:
            return False
        return self._session.role.grants(token)

    def can(self, token: str) -> bool:
        """Admins bypass granular checks."""
        return self.is_admin() or self.has_permission(token)

    def require_token(self) -> str:
        """Bearer token of the active session."""
        if self._session is None or self._session.token is None:
            raise PermissionDenied("You are not signed in")
        return self._session.token

    def require(self, token: str, message: str | None = None) -> None:
        """Raise PermissionDenied unless the actor can use token."""
        if not self.can(token):
            logger.warning("Actor %s lacks %s", self.actor_id, token)
            raise PermissionDenied(message)

    async def update_profile(self, patch: ProfilePatch) -> Session:
        """Apply name/email changes and an optional password change.

        Password fields on ``patch`` are cleared whatever the outcome. A
        rejected current password is raised as ``ValidationError``.
        """
        changes_password = patch.changes_password
        try:
            bearer = self.require_token()
            request = self._build_profile_request(patch)
            updated = await self._backend.update_profile(bearer, request)
        except PermissionDenied as e:
            # Rejected current password.
            if changes_password and e.status in (400, 401):
                raise ValidationError(e.user_message, status=e.status) from e
            raise
        finally:
            patch.current_password = ""
            patch.new_password = ""
            patch.confirm_password = ""

        self._session.name = updated.name
        self._session.email = updated.email
        if updated.role is not None:
            self._session.role = updated.role
        logger.info("Profile updated for actor %s", self._session.actor_id)
        return self._session

    def _build_profile_request(self, patch: ProfilePatch) -> ProfileUpdateRequest:
        name = self._session.name if patch.name is None else patch.name.strip()
        email = self._session.email if patch.email is None else patch.email.strip()
        if not name:
            raise ValidationError("Name is required")
        if not email:
            raise ValidationError("Email is required")
        if not patch.changes_password:
            return ProfileUpdateRequest(name=name, email=email)
        if patch.new_password != patch.confirm_password:
            raise ValidationError("New passwords do not match")
        if not patch.current_password:
            raise ValidationError("Current password is required to set a new password")
        return ProfileUpdateRequest(
            name=name,
            email=email,
            current_password=patch.current_password,
            new_password=patch.new_password,
        )

    async def refresh(self) -> Session:
        """Re-read the canonical identity from the backend."""
        bearer = self.require_token()
        fresh = await self._backend.get_profile(bearer)
        self._session.name = fresh.name
        self._session.email = fresh.email
        self._session.role = fresh.role
        logger.debug("Session refreshed for actor %s", self._session.actor_id)
        return self._session

    def teardown(self) -> None:
        """Invalidate the token and clear the session. Idempotent."""
        if self._session is not None:
            logger.info("Session torn down for actor %s", self._session.actor_id)
            self._session.token = None
            self._session = None
        if self._token_store is not None:
            self._token_store.clear()
