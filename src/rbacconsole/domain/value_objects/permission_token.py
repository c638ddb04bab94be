"""Permission tokens granted through roles."""

from enum import StrEnum

ADMIN_ROLE_NAME = "admin"


class PermissionToken(StrEnum):
    """Capability keys known to the console."""

    VIEW_DASHBOARD = "view_dashboard"
    EDIT_PROFILE = "edit_profile"
    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"
    VIEW_REPORTS = "view_reports"


def permission_label(token: str) -> str:
    """Display label: manage_users -> MANAGE USERS."""
    return token.replace("_", " ").upper()
