"""Logging utilities for lgres.

The library logs to the ``lgres`` logger at DEBUG level only and never
installs handlers itself. Command-line tools call `configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "lgres"

__all__ = [
    "get_logger",
    "configure_logging",
]


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def configure_logging(
    verbosity: int = 0, *, use_color: Optional[bool] = None
) -> None:
    """Send package log records to stderr through rich.

    verbosity 0 shows warnings and errors; 1 or more shows everything down
    to debug, which is the only level the library itself logs at.
    """
    logger = get_logger()
    level = logging.WARNING
    if verbosity >= 1:
        level = logging.DEBUG
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    if use_color is None:
        use_color = sys.stderr.isatty()

    console = Console(stderr=True, no_color=not use_color, highlight=use_color)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
