"""Logging configuration for the folio CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int = 0) -> None:
    """Route `folio` loggers to stderr through rich.

    Args:
        verbosity: 0 for warnings, 1 for info, 2 or more for debug.
    """
    level = LEVELS.get(verbosity, logging.DEBUG)
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    logger = logging.getLogger("folio")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
