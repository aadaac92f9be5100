"""Logging setup.

The viewer owns the whole terminal, so loguru's default stderr sink is
removed; logs only go to a file when one is requested.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

LOG_FILE_ENV = "LAZYMD_LOG"
DEFAULT_LEVEL = "DEBUG"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{line} - {message}"


def configure_logging(log_file: Path | str | None = None, level: str = DEFAULT_LEVEL) -> Path | None:
    """Route logs to ``log_file`` (or ``$LAZYMD_LOG``); return the file in use."""
    logger.remove()
    target = log_file or os.environ.get(LOG_FILE_ENV) or None
    if target is None:
        return None
    path = Path(target).expanduser()
    logger.add(
        str(path),
        level=level,
        format=LOG_FORMAT,
        rotation="10 MB",
        retention=3,
        enqueue=True,
    )
    logger.debug("logging to {}", path)
    return path


__all__ = ["LOG_FILE_ENV", "configure_logging"]
