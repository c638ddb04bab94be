"""Logging setup for console entry points."""

import logging


def configure_logging(level: str = "WARNING", debug: bool = False) -> None:
    """Configure the root logger once."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
