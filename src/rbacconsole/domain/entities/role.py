"""Role entity for RBAC."""

from dataclasses import dataclass, field

from rbacconsole.domain.value_objects import ADMIN_ROLE_NAME


@dataclass
class Role:
    """Named bundle of permission tokens.

    ``permissions`` is ``None`` when the backend only reported the role's
    name (legacy bare-string role). That degraded state is kept distinct
    from an empty permission set.
    """

    id: str | None
    name: str
    permissions: frozenset[str] | None = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return self.name.casefold() == ADMIN_ROLE_NAME

    @property
    def permissions_available(self) -> bool:
        return self.permissions is not None

    def grants(self, token: str) -> bool:
        """True iff token is in the permission set. Never raises."""
        if not self.permissions:
            return False
        return token in self.permissions
