"""Profile update DTOs."""

from dataclasses import dataclass


@dataclass
class ProfilePatch:
    """Input for a profile update. Password fields only matter when new_password is set."""

    name: str | None = None
    email: str | None = None
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""

    @property
    def changes_password(self) -> bool:
        return bool(self.new_password)


@dataclass
class ProfileUpdateRequest:
    """What is sent to the backend."""

    name: str
    email: str
    current_password: str | None = None
    new_password: str | None = None

    def to_payload(self) -> dict[str, str]:
        payload = {"name": self.name, "email": self.email}
        if self.new_password:
            payload["currentPassword"] = self.current_password or ""
            payload["newPassword"] = self.new_password
        return payload
