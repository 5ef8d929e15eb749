"""Logging for riseblog.

Library modules only create ``logging.getLogger(__name__)`` loggers. The
CLI calls :func:`configure_logging` once per invocation, which routes the
``riseblog`` logger tree through the shared Rich console.
"""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

from riseblog.exceptions import ConfigurationError

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "console", "parse_level"]

LOG_LEVEL_ENV: Final[str] = "RISEBLOG_LOG_LEVEL"
LEVEL_NAMES: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

PACKAGE_LOGGER: Final[str] = "riseblog"

console = Console()


class _RiseBlogHandler(RichHandler):
    """Rich handler owned by :func:`configure_logging`."""


def parse_level(name: str) -> int:
    """Return the numeric level for a name such as ``"debug"``.

    Raises:
        ConfigurationError: If ``name`` is not a standard level name.

    """
    normalized = name.strip().upper()
    if normalized not in LEVEL_NAMES:
        msg = f"Unknown log level {name!r}, expected one of {', '.join(LEVEL_NAMES)}"
        raise ConfigurationError(msg)
    return logging.getLevelNamesMapping()[normalized]


def configure_logging(level_name: str | None = None) -> int:
    """Send riseblog log records to the Rich console and return the level used.

    The level comes from ``level_name``, then ``RISEBLOG_LOG_LEVEL``, then
    ``INFO``. Repeated calls keep a single handler and only change the level.
    Content strings are logged verbatim, so Rich markup is disabled.

    Raises:
        ConfigurationError: If the level name is unknown.

    """
    level = parse_level(level_name or os.getenv(LOG_LEVEL_ENV) or "INFO")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handler = next((h for h in package_logger.handlers if isinstance(h, _RiseBlogHandler)), None)
    if handler is None:
        handler = _RiseBlogHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    return level
