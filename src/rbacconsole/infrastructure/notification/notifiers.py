"""Notifier implementations."""

import sys
from typing import TextIO


class StreamNotifier:
    """Writes one line per notification."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._err = err or sys.stderr

    def success(self, message: str) -> None:
        print(message, file=self._out)

    def error(self, message: str) -> None:
        print(f"Error: {message}", file=self._err)


class RecordingNotifier:
    """Keeps notifications in memory, for embedding and tests."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

