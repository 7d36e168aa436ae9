"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "dcf_prep"


def setup_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Handler:
    """
    Attach a rich handler to the package logger.

    Library modules only call ``logging.getLogger(__name__)``; this is the single
    place handlers are installed. Calling it again replaces the previous handler.

    Args:
        level: Level name or number for the package logger
        console: Console to write to (stderr console if omitted)

    Returns:
        The installed handler
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return handler
