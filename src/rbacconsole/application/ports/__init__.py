"""Application ports."""

from rbacconsole.application.ports.backend import RBACBackend
from rbacconsole.application.ports.notifier import Notifier
from rbacconsole.application.ports.token_store import TokenStore

__all__ = ["Notifier", "RBACBackend", "TokenStore"]
