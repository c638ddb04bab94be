"""Session entity - the authenticated actor."""

from dataclasses import dataclass

from rbacconsole.domain.entities.role import Role


@dataclass
class Session:
    """Authenticated actor for the lifetime of one console session."""

    actor_id: str
    name: str
    email: str
    role: Role | None
    token: str | None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None

    @property
    def is_active(self) -> bool:
        return self.token is not None
