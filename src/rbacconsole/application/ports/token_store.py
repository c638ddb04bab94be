"""Token store port - where the session credential is persisted."""

from typing import Protocol


class TokenStore(Protocol):
    """Port for persisting the bearer token between runs."""

    def load(self) -> str | None: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...
