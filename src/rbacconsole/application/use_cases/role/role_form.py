"""Role form state and validation shared by create and update."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from rbacconsole.application.caches import RoleCatalog
from rbacconsole.domain.exceptions import ValidationError


@dataclass
class RoleForm:
    """Editable name and permission list of a role."""

    name: str = ""
    permissions: list[str] = field(default_factory=list)

    def toggle_permission(self, token: str) -> None:
        if token in self.permissions:
            self.permissions.remove(token)
        else:
            self.permissions.append(token)


def clean_permissions(permissions: Iterable[str]) -> list[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for token in permissions:
        token = token.strip()
        if token:
            seen.setdefault(token, None)
    return list(seen)


def validate_role_name(name: str, catalog: RoleCatalog, role_id: str | None = None) -> str:
    """Non-blank and unique (case-insensitive) within the loaded catalog."""
    name = name.strip()
    if not name:
        raise ValidationError("Role name is required")
    existing = catalog.find_by_name(name)
    if existing is not None and existing.id != role_id:
        raise ValidationError(f"A role named '{existing.name}' already exists")
    return name
