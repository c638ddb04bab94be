"""States of a proposed role reassignment."""

from enum import StrEnum


class RoleChangeState(StrEnum):
    """Role change lifecycle."""

    PROPOSED = "proposed"
    DENIED_NO_PERMISSION = "denied_no_permission"
    DENIED_UNKNOWN_ROLE = "denied_unknown_role"
    DENIED_IN_FLIGHT = "denied_in_flight"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    CANCELLED = "cancelled"
    CONFIRMED = "confirmed"
    ALLOWED = "allowed"
    APPLIED = "applied"
    FAILED = "failed"

    @property
    def is_denied(self) -> bool:
        return self in (
            RoleChangeState.DENIED_NO_PERMISSION,
            RoleChangeState.DENIED_UNKNOWN_ROLE,
            RoleChangeState.DENIED_IN_FLIGHT,
        )
