"""Token stores."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class InMemoryTokenStore:
    """Keeps the token for the lifetime of the process."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Persists the token as JSON in a file readable only by its owner."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def load(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable token file %s", self._path)
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # An existing file keeps its mode on open; tighten it before writing.
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps({"token": token}))

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
