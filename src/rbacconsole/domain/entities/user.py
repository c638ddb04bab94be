"""User account as listed by the backend."""

from dataclasses import dataclass

from rbacconsole.domain.entities.role import Role


@dataclass
class UserAccount:
    """Row of the user directory."""

    id: str
    name: str
    email: str
    role: Role | None = None
