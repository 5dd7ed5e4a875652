"""Logging setup for goldbook.

All loggers live under the ``goldbook`` namespace so the CLI can configure
the whole package with a single call.
"""

import logging
import sys
from typing import Any

_LOGGER_PREFIX = "goldbook"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is at emit time."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the goldbook namespace."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def parse_level(level: str | int | None) -> int:
    """Convert a level name such as "debug" to a logging level.

    Raises:
        ValueError: If the level name is unknown
    """
    if level is None or level == "":
        return logging.WARNING
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: '{level}'")
    return value


def configure_logging(
    *,
    level: str | int | None = logging.WARNING,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Configure the goldbook logger hierarchy.

    Repeated calls only adjust the level; the handler is installed once.
    """
    global _configured

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(parse_level(level))
    if _configured:
        return
    _configured = True

    root_logger.propagate = False
    if handler is not None:
        h = handler
    elif stream is not None:
        h = logging.StreamHandler(stream)
    else:
        h = _StderrHandler()
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
