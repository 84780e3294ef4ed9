# cloudsvc/logging/logger.py
"""
Unified logging setup for cloudsvc.

All modules use:
    from cloudsvc.logging.logger import get_logger
    logger = get_logger(__name__)

Configuration (format, level, handler) happens once, in configure_logging(),
usually from the CLI entrypoint.
"""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"

_HANDLER_NAME = "cloudsvc"


class _StdoutHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is when a record is emitted."""

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging(
    level: int | str = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=None,
) -> None:
    """
    Configure the cloudsvc root logger.

    Safe to call multiple times: the handler is installed once and only the
    level changes on later calls.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger("cloudsvc")
    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(stream) if stream is not None else _StdoutHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here; configuration happens in configure_logging().
    """
    return logging.getLogger(name)
