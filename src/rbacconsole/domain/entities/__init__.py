"""Domain entities."""

from rbacconsole.domain.entities.pending_role_change import PendingRoleChange
from rbacconsole.domain.entities.role import Role
from rbacconsole.domain.entities.session import Session
from rbacconsole.domain.entities.user import UserAccount

__all__ = ["PendingRoleChange", "Role", "Session", "UserAccount"]
