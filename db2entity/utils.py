"""Utility functions for writing generated sources and handling database URLs.

This module provides the file writer used by the generation driver and
small helpers for connection settings given on the command line.
"""

from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)

JDBC_PREFIX = "jdbc:"


class FileWriteError(Exception):
    """Custom exception for generated file write errors."""

    pass


def write_file(path: str | Path, content: str) -> Path:
    """Write generated source text, creating parent directories as needed.

    Args:
        path: Destination file path.
        content: Source text to write.

    Returns:
        The written path.

    Raises:
        FileWriteError: If the directory cannot be created or the file written.
    """
    path = Path(path)
    logger.debug(f"Writing {len(content)} characters to {path}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {path}: {e}", exc_info=True)
        raise FileWriteError(f"Error writing file {path}: {e}") from e

    logger.info(f"Wrote {path}")
    return path


def normalize_database_url(url: str) -> str:
    """Accept JDBC-style URLs by dropping the ``jdbc:`` prefix.

    Args:
        url: SQLAlchemy URL, optionally written as a JDBC URL.

    Returns:
        URL usable with ``sqlalchemy.create_engine``.
    """
    url = url.strip()
    if url.lower().startswith(JDBC_PREFIX):
        logger.debug("Stripping JDBC prefix from database URL")
        return url[len(JDBC_PREFIX):]
    return url
