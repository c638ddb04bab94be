"""Admin console facade - what a UI layer calls.

Every action produces exactly one notification (none for a cancelled
confirmation or a change awaiting confirmation) and returns an
``ActionResult`` instead of raising.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from rbacconsole.application.caches import RoleCatalog, UserDirectory
from rbacconsole.application.dto.profile_dto import ProfilePatch
from rbacconsole.application.ports import Notifier, RBACBackend
from rbacconsole.application.role_assignment_guard import GuardDecision, RoleAssignmentGuard
from rbacconsole.application.session_context import SessionContext
from rbacconsole.application.use_cases.dashboard.get_dashboard import GetDashboardUseCase
from rbacconsole.application.use_cases.role.create_role import CreateRoleUseCase
from rbacconsole.application.use_cases.role.delete_role import DeleteRoleUseCase
from rbacconsole.application.use_cases.role.load_roles import LoadRolesUseCase
from rbacconsole.application.use_cases.role.update_role import UpdateRoleUseCase
from rbacconsole.application.use_cases.user.delete_user import DeleteUserUseCase
from rbacconsole.application.use_cases.user.load_directory import LoadDirectoryUseCase
from rbacconsole.domain.entities import UserAccount
from rbacconsole.domain.exceptions import (
    ConflictOrUnknown,
    PermissionDenied,
    RBACConsoleError,
    ValidationError,
)
from rbacconsole.domain.value_objects import PermissionToken, RoleChangeState

logger = logging.getLogger(__name__)

_DENIAL_ERRORS: dict[RoleChangeState, type[RBACConsoleError]] = {
    RoleChangeState.DENIED_NO_PERMISSION: PermissionDenied,
    RoleChangeState.DENIED_UNKNOWN_ROLE: ValidationError,
    RoleChangeState.DENIED_IN_FLIGHT: ConflictOrUnknown,
}


@dataclass
class ActionResult:
    """Outcome of one user action."""

    ok: bool
    value: Any = None
    message: str | None = None
    error: RBACConsoleError | None = None
    decision: GuardDecision | None = None
    redirect_to: str | None = None

    @property
    def needs_confirmation(self) -> bool:
        return (
            self.decision is not None
            and self.decision.state is RoleChangeState.REQUIRES_CONFIRMATION
        )

    @property
    def remedy(self) -> str | None:
        return self.error.remedy if self.error else None


class AdminConsole:
    """Wires the session, caches, guard and use cases together."""

    def __init__(
        self,
        session_context: SessionContext,
        backend: RBACBackend,
        notifier: Notifier,
        login_path: str = "/login",
    ) -> None:
        self.context = session_context
        self.roles = RoleCatalog()
        self.users = UserDirectory()
        self._notifier = notifier
        self._login_path = login_path
        self.guard = RoleAssignmentGuard(
            session_context, backend, self.roles, self.users, login_path=login_path
        )
        self._dashboard = GetDashboardUseCase(session_context, backend)
        self._load_directory = LoadDirectoryUseCase(session_context, backend, self.roles, self.users)
        self._load_roles = LoadRolesUseCase(session_context, backend, self.roles)
        self._create_role = CreateRoleUseCase(session_context, backend, self.roles)
        self._update_role = UpdateRoleUseCase(session_context, backend, self.roles)
        self._delete_role = DeleteRoleUseCase(session_context, backend, self.roles)
        self._delete_user = DeleteUserUseCase(session_context, backend, self.users)

    # --- Affordances ---

    def navigation(self) -> list[str]:
        """Sections the actor may open."""
        sections = ["dashboard"]
        if self.context.can(PermissionToken.MANAGE_USERS):
            sections.append("users")
        if self.context.can(PermissionToken.MANAGE_ROLES):
            sections.append("roles")
        sections.append("profile")
        return sections

    def role_selector_enabled(self, row: UserAccount) -> bool:
        """Enabled for every row when the actor manages users, else only on their own row."""
        if self.context.can(PermissionToken.MANAGE_USERS):
            return True
        return self.context.actor_id is not None and row.id == self.context.actor_id

    # --- Actions ---

    async def _run(
        self,
        action: Callable[[], Awaitable[Any]],
        success_message: str | None = None,
    ) -> ActionResult:
        try:
            value = await action()
        except RBACConsoleError as e:
            return await self._fail(e)
        if success_message:
            self._notifier.success(success_message)
        return ActionResult(ok=True, value=value, message=success_message)

    async def _fail(self, error: RBACConsoleError, **fields: Any) -> ActionResult:
        self._notifier.error(error.user_message)
        if isinstance(error, PermissionDenied) and error.status is not None:
            await self._reverify()
        return ActionResult(ok=False, message=error.user_message, error=error, **fields)

    async def _reverify(self) -> None:
        """Backend refused what the local view allowed: reload the canonical profile."""
        if not self.context.is_authenticated:
            return
        try:
            await self.context.refresh()
        except RBACConsoleError as e:
            logger.warning("Could not re-verify profile: %s", e.user_message)

    async def load_dashboard(self) -> ActionResult:
        return await self._run(self._dashboard.execute)

    async def load_directory(self) -> ActionResult:
        return await self._run(self._load_directory.execute)

    async def load_roles(self, for_management: bool = True) -> ActionResult:
        return await self._run(lambda: self._load_roles.execute(for_management))

    async def create_role(self, name: str, permissions: Iterable[str]) -> ActionResult:
        return await self._run(
            lambda: self._create_role.execute(name, permissions),
            "Role created successfully",
        )

    async def update_role(self, role_id: str, name: str, permissions: Iterable[str]) -> ActionResult:
        return await self._run(
            lambda: self._update_role.execute(role_id, name, permissions),
            "Role updated successfully",
        )

    async def delete_role(self, role_id: str) -> ActionResult:
        return await self._run(
            lambda: self._delete_role.execute(role_id),
            "Role deleted successfully",
        )

    async def delete_user(self, user_id: str) -> ActionResult:
        return await self._run(
            lambda: self._delete_user.execute(user_id),
            "User deleted successfully",
        )

    async def update_profile(self, patch: ProfilePatch) -> ActionResult:
        return await self._run(
            lambda: self.context.update_profile(patch),
            "Profile updated successfully",
        )

    async def propose_role_change(self, user_id: str, role_id: str) -> ActionResult:
        """Evaluate and, when nothing stands in the way, apply a role change."""
        decision = self.guard.evaluate(user_id, role_id)
        if decision.state.is_denied:
            error = _DENIAL_ERRORS[decision.state](decision.reason)
            return await self._fail(error, decision=decision)
        if decision.state is RoleChangeState.REQUIRES_CONFIRMATION:
            return ActionResult(ok=False, message=decision.reason, decision=decision)
        return await self._apply(decision)

    async def confirm_role_change(self, decision: GuardDecision) -> ActionResult:
        return await self._apply(self.guard.confirm(decision))

    def cancel_role_change(self, decision: GuardDecision) -> ActionResult:
        return ActionResult(ok=False, decision=self.guard.cancel(decision))

    async def _apply(self, decision: GuardDecision) -> ActionResult:
        outcome = await self.guard.apply(decision)
        if outcome.error is not None:
            return await self._fail(outcome.error, decision=decision)
        message = "Role updated successfully"
        self._notifier.success(message)
        return ActionResult(
            ok=True,
            value=outcome,
            message=message,
            decision=decision,
            redirect_to=outcome.redirect_to,
        )

    def logout(self) -> ActionResult:
        self.context.teardown()
        return ActionResult(ok=True, redirect_to=self._login_path)
