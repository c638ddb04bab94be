"""Normalization of backend payloads into domain entities.

Backend responses are inconsistent across versions: ids come as ``id`` or
``_id``, permissions as bare tokens or ``{"name": ...}`` objects, a user's
role as an object, a bare name or nothing, and role mutations answer with
the role either bare or wrapped in ``{"role": ...}``. Everything is mapped
to one shape here so nothing downstream has to care.
"""

from typing import Any

from rbacconsole.domain.entities import Role, Session, UserAccount
from rbacconsole.domain.exceptions import ConflictOrUnknown


def entity_id(payload: dict[str, Any]) -> str | None:
    """Return ``id`` or ``_id`` as string, or None."""
    value = payload.get("id", payload.get("_id"))
    return str(value) if value is not None else None


def normalize_permissions(raw: Any) -> frozenset[str]:
    """Map bare tokens and ``{name}`` objects to a set of token strings."""
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset()
    tokens = set()
    for item in raw:
        if isinstance(item, str):
            tokens.add(item)
        elif isinstance(item, dict) and isinstance(item.get("name"), str):
            tokens.add(item["name"])
    return frozenset(tokens)


def normalize_role(raw: Any) -> Role | None:
    """Role object, bare role name (degraded) or nothing."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        return Role(id=None, name=raw, permissions=None)
    if isinstance(raw, dict):
        if "role" in raw and isinstance(raw["role"], (dict, str)):
            return normalize_role(raw["role"])
        name = raw.get("name")
        if not isinstance(name, str):
            return None
        return Role(
            id=entity_id(raw),
            name=name,
            permissions=normalize_permissions(raw.get("permissions")),
        )
    return None


def require_role(raw: Any) -> Role:
    """Role from a create/update response; malformed payloads are an error."""
    role = normalize_role(raw)
    if role is None or role.id is None:
        raise ConflictOrUnknown("Server returned an invalid role payload")
    return role


def normalize_user(raw: dict[str, Any]) -> UserAccount:
    """User directory row."""
    return UserAccount(
        id=entity_id(raw) or "",
        name=raw.get("name") or "",
        email=raw.get("email") or "",
        role=normalize_role(raw.get("role")),
    )


def normalize_session(raw: dict[str, Any], token: str) -> Session:
    """Profile payload (optionally wrapped in ``user``) to a Session."""
    if isinstance(raw.get("user"), dict):
        raw = raw["user"]
    actor_id = entity_id(raw)
    if actor_id is None:
        raise ConflictOrUnknown("Server returned a profile without an id")
    return Session(
        actor_id=actor_id,
        name=raw.get("name") or "",
        email=raw.get("email") or "",
        role=normalize_role(raw.get("role")),
        token=token,
    )


def normalize_list(raw: Any, key: str) -> list[dict[str, Any]]:
    """Accept a bare list or ``{key: [...]}``; drop non-object items."""
    if isinstance(raw, dict):
        raw = raw.get(key, [])
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]
