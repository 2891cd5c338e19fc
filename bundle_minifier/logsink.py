"""Injectable log sink used by every stage instead of a global logger."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

LogSink = Callable[[int, str, Optional[BaseException]], None]

DEFAULT_LOGGER_NAME = "bundle_minifier"


def logging_sink(logger: logging.Logger | None = None) -> LogSink:
    """Return a sink that forwards messages to ``logger``."""

    target = logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    def emit(
        level: int, message: str, cause: Optional[BaseException] = None
    ) -> None:
        target.log(level, message, exc_info=cause)

    return emit


def null_sink(
    level: int, message: str, cause: Optional[BaseException] = None
) -> None:
    """Discard every message."""

    _ = (level, message, cause)


def display_path(path: Path | str, debug: bool) -> str:
    """Return the full path in debug mode, otherwise only the file name."""

    path = Path(path)
    return str(path) if debug else path.name


__all__ = [
    "LogSink",
    "display_path",
    "logging_sink",
    "null_sink",
]
