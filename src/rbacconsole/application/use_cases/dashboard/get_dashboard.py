"""Dashboard use case."""

from rbacconsole.application.dto.dashboard_dto import (
    DashboardStats,
    DashboardView,
    PermissionsState,
    ProfileSummary,
)
from rbacconsole.application.ports import RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.application.use_cases.user.load_directory import fetch_users_and_roles
from rbacconsole.domain.entities import Session
from rbacconsole.domain.value_objects import permission_label


def summarize_profile(session: Session) -> ProfileSummary:
    """Profile card. A bare-string role reports its permissions as unavailable."""
    role = session.role
    if role is None:
        return ProfileSummary(
            name=session.name,
            email=session.email,
            role_label="No role assigned",
            permissions_state=PermissionsState.NONE,
            permission_labels=[],
        )
    if not role.permissions_available:
        state, labels = PermissionsState.UNAVAILABLE, []
    elif not role.permissions:
        state, labels = PermissionsState.NONE, []
    else:
        state = PermissionsState.LISTED
        labels = [permission_label(p) for p in sorted(role.permissions)]
    return ProfileSummary(
        name=session.name,
        email=session.email,
        role_label=role.name,
        permissions_state=state,
        permission_labels=labels,
    )


class GetDashboardUseCase:
    """Profile summary for everyone, totals for administrators."""

    def __init__(self, session_context: SessionContext, backend: RBACBackend) -> None:
        self._context = session_context
        self._backend = backend

    async def execute(self) -> DashboardView:
        token = self._context.require_token()
        view = DashboardView(profile=summarize_profile(self._context.session))
        if not self._context.is_admin():
            return view
        users, roles = await fetch_users_and_roles(self._backend, token)
        view.stats = DashboardStats(total_users=len(users), total_roles=len(roles))
        return view
