"""Notifier port - user-facing messages."""

from typing import Protocol


class Notifier(Protocol):
    """Port for showing one message per user action."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
