"""Logging setup for the highlighter and the Gradio host around it."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

LOG_LEVEL_ENV = "RHYME_HIGHLIGHTER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# The editor fires a request per keystroke; these log every one at INFO.
HOST_LOGGERS = ("httpx", "gradio", "uvicorn.access")

_configured_level: Optional[int] = None


def resolve_level(level: str | int | None) -> int:
    """Translate ``level`` (name, number or ``None``) into a logging level."""

    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def quiet_host_loggers(level: int, names: Iterable[str] = HOST_LOGGERS) -> None:
    """Raise host loggers to ``WARNING`` unless the package itself is at ``DEBUG``."""

    host_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in names:
        logging.getLogger(name).setLevel(host_level)


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> int:
    """Install the root handler once and return the level in effect.

    ``level`` wins over ``RHYME_HIGHLIGHTER_LOG_LEVEL``; per-pass summaries
    only show up at ``DEBUG``.
    """

    global _configured_level

    if _configured_level is not None and not force:
        return _configured_level

    resolved = resolve_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV))
    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=force)
    logging.getLogger("rhyme_highlighter").setLevel(resolved)
    quiet_host_loggers(resolved)
    _configured_level = resolved
    return resolved


__all__ = [
    "HOST_LOGGERS",
    "LOG_FORMAT",
    "LOG_LEVEL_ENV",
    "configure_logging",
    "quiet_host_loggers",
    "resolve_level",
]
