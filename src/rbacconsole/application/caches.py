"""In-memory caches of roles and users fetched from the backend."""

from rbacconsole.domain.entities import Role, UserAccount


class RoleCatalog:
    """Role list as last confirmed by the backend."""

    def __init__(self, roles: list[Role] | None = None) -> None:
        self._roles: list[Role] = list(roles or [])

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def replace_all(self, roles: list[Role]) -> None:
        self._roles = list(roles)

    def find(self, role_id: str) -> Role | None:
        """Lookup by id; None for ids not in the loaded list."""
        for role in self._roles:
            if role.id == role_id:
                return role
        return None

    def find_by_name(self, name: str) -> Role | None:
        key = name.strip().casefold()
        for role in self._roles:
            if role.name.casefold() == key:
                return role
        return None

    def add(self, role: Role) -> None:
        self._roles.append(role)

    def replace(self, role: Role) -> None:
        self._roles = [role if r.id == role.id else r for r in self._roles]

    def remove(self, role_id: str) -> None:
        self._roles = [r for r in self._roles if r.id != role_id]


class UserDirectory:
    """User list as last confirmed by the backend."""

    def __init__(self, users: list[UserAccount] | None = None) -> None:
        self._users: list[UserAccount] = list(users or [])

    @property
    def users(self) -> tuple[UserAccount, ...]:
        return tuple(self._users)

    def __len__(self) -> int:
        return len(self._users)

    def replace_all(self, users: list[UserAccount]) -> None:
        self._users = list(users)

    def find(self, user_id: str) -> UserAccount | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def set_role(self, user_id: str, role: Role) -> None:
        user = self.find(user_id)
        if user is not None:
            user.role = role

    def remove(self, user_id: str) -> None:
        self._users = [u for u in self._users if u.id != user_id]
