"""Logging setup for db2entity.

All modules obtain loggers through :func:`get_logger`; the ``db2entity``
logger gets a single rich handler when the CLI calls :func:`setup_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "db2entity"


def setup_logging(level: int = logging.WARNING, verbose: bool = False) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level used when ``verbose`` is off.
        verbose: Log everything down to DEBUG.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger."""
    return logging.getLogger(name)
