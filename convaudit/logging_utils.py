"""Console logging setup for the CLI and the API server."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(level: str = "warning") -> logging.Logger:
    """Route the ``convaudit`` logger tree to a rich console handler."""
    logger = logging.getLogger("convaudit")
    logger.setLevel(_LEVELS.get(level.lower(), logging.WARNING))
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
