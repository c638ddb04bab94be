"""Role assignment guard - client-side safety net for role reassignment.

Not a trust boundary: the backend enforces permissions on its own. The guard
keeps the console from issuing changes the actor cannot make, asks for
confirmation before an admin demotes themselves, and tells the caller when
the acting session must be torn down after a successful change.
"""

import logging
from dataclasses import dataclass, replace

from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.caches import RoleCatalog, UserDirectory
from rbacconsole.application.session_context import SessionContext
from rbacconsole.domain.entities import PendingRoleChange, Role
from rbacconsole.domain.exceptions import ConflictOrUnknown, RBACConsoleError
from rbacconsole.domain.value_objects import PermissionToken, RoleChangeState

logger = logging.getLogger(__name__)

REASON_NO_PERMISSION = "You do not have permission to change other users' roles"
REASON_UNKNOWN_ROLE = "unknown role"
REASON_IN_FLIGHT = "A role change for this user is already in progress"
REASON_SELF_DEMOTION = "You are about to remove your own administrator access"


@dataclass(frozen=True)
class GuardDecision:
    """Result of evaluating a proposed role change."""

    state: RoleChangeState
    target_actor_id: str
    target_role_id: str
    reason: str | None = None
    role: Role | None = None
    pending: PendingRoleChange | None = None


@dataclass(frozen=True)
class RoleChangeOutcome:
    """Result of applying an allowed role change."""

    state: RoleChangeState
    target_actor_id: str
    target_role_id: str
    error: RBACConsoleError | None = None
    teardown: bool = False
    redirect_to: str | None = None

    @property
    def reason(self) -> str | None:
        return self.error.user_message if self.error else None


class RoleAssignmentGuard:
    """Decides whether the acting session may set a role on a target user."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        role_catalog: RoleCatalog,
        user_directory: UserDirectory | None = None,
        login_path: str = "/login",
    ) -> None:
        self._context = session_context
        self._backend = backend
        self._roles = role_catalog
        self._users = user_directory
        self._login_path = login_path
        self._in_flight: set[str] = set()
        self._pending: dict[str, PendingRoleChange] = {}

    def is_in_flight(self, target_actor_id: str) -> bool:
        return target_actor_id in self._in_flight

    def evaluate(self, target_actor_id: str, target_role_id: str) -> GuardDecision:
        """PROPOSED -> DENIED_* | REQUIRES_CONFIRMATION | ALLOWED."""
        decision = GuardDecision(
            state=RoleChangeState.PROPOSED,
            target_actor_id=target_actor_id,
            target_role_id=target_role_id,
        )
        actor_id = self._context.actor_id
        is_self = actor_id is not None and target_actor_id == actor_id

        if actor_id is None or (
            not is_self and not self._context.can(PermissionToken.MANAGE_USERS)
        ):
            return self._deny(decision, RoleChangeState.DENIED_NO_PERMISSION, REASON_NO_PERMISSION)
        if self.is_in_flight(target_actor_id):
            return self._deny(decision, RoleChangeState.DENIED_IN_FLIGHT, REASON_IN_FLIGHT)

        role = self._roles.find(target_role_id)
        if role is None:
            return self._deny(decision, RoleChangeState.DENIED_UNKNOWN_ROLE, REASON_UNKNOWN_ROLE)

        if is_self and self._context.is_admin() and not role.is_admin:
            logger.debug("Self-demotion of %s to %s needs confirmation", actor_id, role.name)
            pending = PendingRoleChange(target_actor_id, target_role_id)
            self._pending[target_actor_id] = pending
            return replace(
                decision,
                state=RoleChangeState.REQUIRES_CONFIRMATION,
                reason=REASON_SELF_DEMOTION,
                role=role,
                pending=pending,
            )

        logger.debug("Role change %s -> %s allowed", target_actor_id, role.name)
        return replace(decision, state=RoleChangeState.ALLOWED, role=role)

    def _deny(self, decision: GuardDecision, state: RoleChangeState, reason: str) -> GuardDecision:
        logger.warning(
            "Role change %s -> %s denied: %s",
            decision.target_actor_id,
            decision.target_role_id,
            reason,
        )
        return replace(decision, state=state, reason=reason)

    def cancel(self, decision: GuardDecision) -> GuardDecision:
        """REQUIRES_CONFIRMATION -> CANCELLED. The pending change is discarded."""
        self._expect(decision, RoleChangeState.REQUIRES_CONFIRMATION)
        self._take_pending(decision)
        return replace(decision, state=RoleChangeState.CANCELLED, pending=None)

    def confirm(self, decision: GuardDecision) -> GuardDecision:
        """REQUIRES_CONFIRMATION -> CONFIRMED -> ALLOWED.

        Only the change still pending for the target can be confirmed, once.
        """
        self._expect(decision, RoleChangeState.REQUIRES_CONFIRMATION)
        self._take_pending(decision)
        confirmed = replace(decision, state=RoleChangeState.CONFIRMED, pending=None)
        return replace(confirmed, state=RoleChangeState.ALLOWED, reason=None)

    def _take_pending(self, decision: GuardDecision) -> None:
        pending = self._pending.get(decision.target_actor_id)
        if pending is None or pending != decision.pending:
            raise ValueError("No matching role change is pending for this user")
        del self._pending[decision.target_actor_id]

    @staticmethod
    def _expect(decision: GuardDecision, state: RoleChangeState) -> None:
        if decision.state is not state:
            raise ValueError(f"Expected a {state} decision, got {decision.state}")

    async def apply(self, decision: GuardDecision) -> RoleChangeOutcome:
        """ALLOWED -> APPLIED | FAILED, invoking the backend once.

        Teardown is only signalled after the backend confirms success.
        """
        self._expect(decision, RoleChangeState.ALLOWED)
        target = decision.target_actor_id
        outcome = RoleChangeOutcome(
            state=RoleChangeState.FAILED,
            target_actor_id=target,
            target_role_id=decision.target_role_id,
        )
        if self.is_in_flight(target):
            return replace(
                outcome,
                state=RoleChangeState.DENIED_IN_FLIGHT,
                error=ConflictOrUnknown(REASON_IN_FLIGHT),
            )

        self._in_flight.add(target)
        try:
            await self._backend.assign_role(
                self._context.require_token(), target, decision.target_role_id
            )
        except RBACConsoleError as e:
            logger.warning("Role change for %s failed: %s", target, e.user_message)
            return replace(outcome, error=e)
        finally:
            self._in_flight.discard(target)

        role = decision.role
        logger.info("Role of %s set to %s", target, role.name)
        if self._users is not None:
            self._users.set_role(target, role)

        if target == self._context.actor_id:
            if not role.is_admin:
                self._context.teardown()
                return replace(
                    outcome,
                    state=RoleChangeState.APPLIED,
                    teardown=True,
                    redirect_to=self._login_path,
                )
            self._context.session.role = role
        return replace(outcome, state=RoleChangeState.APPLIED)
