"""Domain value objects."""

from rbacconsole.domain.value_objects.permission_token import (
    ADMIN_ROLE_NAME,
    PermissionToken,
    permission_label,
)
from rbacconsole.domain.value_objects.role_change_state import RoleChangeState

__all__ = ["ADMIN_ROLE_NAME", "PermissionToken", "RoleChangeState", "permission_label"]
