"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; only entry points
call ``configure_logging`` so the TUI can keep the terminal to itself.
"""

import logging

from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: str | int = "info") -> None:
    """Install a Rich handler on the root logger.

    Args:
        level: Level name ("debug", "info", ...) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
