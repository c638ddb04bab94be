"""Domain exceptions.

``status`` is the HTTP status when the error came from the backend and None
when the console raised it itself.
"""


class RBACConsoleError(Exception):
    """Base exception for the console."""

    default_message = "Something went wrong"
    remedy = "retry"

    def __init__(self, message: str | None = None, status: int | None = None) -> None:
        self.user_message = message or self.default_message
        self.status = status
        super().__init__(self.user_message)


class PermissionDenied(RBACConsoleError):
    """Actor may not perform the requested action."""

    default_message = "Access denied. Please contact your administrator."
    remedy = "contact_administrator"


class NotFound(RBACConsoleError):
    """Referenced user or role does not exist (stale id)."""

    remedy = "refresh"

    def __init__(
        self,
        entity: str,
        identifier: str,
        message: str | None = None,
        status: int | None = None,
    ) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity} not found: {identifier}", status=status)


class ValidationError(RBACConsoleError):
    """Input failed validation before or at the backend."""

    default_message = "Invalid input"
    remedy = "fix_input"


class NetworkError(RBACConsoleError):
    """Request could not complete."""

    default_message = "Network error. Please check your connection and try again."


class ConflictOrUnknown(RBACConsoleError):
    """Any other non-2xx response."""
