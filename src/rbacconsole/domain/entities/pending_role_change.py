"""Pending role change awaiting confirmation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PendingRoleChange:
    """Role reassignment flagged as self-demotion, not yet confirmed."""

    target_actor_id: str
    target_role_id: str
