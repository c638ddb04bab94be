"""Dashboard DTOs."""

from dataclasses import dataclass
from enum import StrEnum


class PermissionsState(StrEnum):
    """How much is known about the actor's permissions."""

    UNAVAILABLE = "unavailable"
    NONE = "none"
    LISTED = "listed"


@dataclass
class ProfileSummary:
    """Actor's own identity as shown on the dashboard."""

    name: str
    email: str
    role_label: str
    permissions_state: PermissionsState
    permission_labels: list[str]


@dataclass
class DashboardStats:
    """Totals shown to administrators."""

    total_users: int
    total_roles: int


@dataclass
class DashboardView:
    """Everything the dashboard renders."""

    profile: ProfileSummary
    stats: DashboardStats | None = None
