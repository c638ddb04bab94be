"""Translation of HTTP failures into domain exceptions."""

import httpx

from rbacconsole.domain.exceptions import (
    ConflictOrUnknown,
    NotFound,
    PermissionDenied,
    RBACConsoleError,
    ValidationError,
)


def error_message(response: httpx.Response) -> str | None:
    """``message`` (or ``error``) from a JSON error body, None if unreadable."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message") or body.get("error")
    return message if isinstance(message, str) and message else None


def translate_error(
    response: httpx.Response,
    fallback: str,
    entity: str = "Resource",
    identifier: str | None = None,
) -> RBACConsoleError:
    """Map a non-2xx response to the nearest exception kind."""
    message = error_message(response)
    status = response.status_code
    if status in (401, 403):
        return PermissionDenied(message, status=status)
    if status == 404:
        return NotFound(entity, identifier or response.request.url.path, message, status=status)
    if status in (400, 422):
        return ValidationError(message or fallback, status=status)
    return ConflictOrUnknown(message or fallback, status=status)
