"""Tests for file writing, URL handling and logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from db2entity.logging_config import LOGGER_NAME, get_logger, setup_logging
from db2entity.utils import FileWriteError, normalize_database_url, write_file


def test_write_file_creates_directories(tmp_path):
    path = tmp_path / "com" / "shop" / "Users.java"

    assert write_file(path, "class Users {}\n") == path
    assert path.read_text(encoding="utf-8") == "class Users {}\n"


def test_write_file_wraps_os_errors(tmp_path):
    """A file where a directory is expected cannot be written into."""
    blocker = tmp_path / "com"
    blocker.write_text("not a directory")

    with pytest.raises(FileWriteError, match="Error writing file"):
        write_file(blocker / "Users.java", "class Users {}\n")


@pytest.mark.parametrize(
    "url,expected",
    [
        ("jdbc:postgresql://db/shop", "postgresql://db/shop"),
        ("JDBC:mysql://db/shop", "mysql://db/shop"),
        ("  sqlite:///shop.db ", "sqlite:///shop.db"),
        ("postgresql://db/shop", "postgresql://db/shop"),
    ],
)
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_setup_logging_installs_one_handler():
    logger = setup_logging()
    setup_logging(verbose=True)

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG

    setup_logging(level=logging.INFO)
    assert logger.level == logging.INFO


def test_module_loggers_propagate_to_package_logger():
    package_logger = logging.getLogger(LOGGER_NAME)
    assert get_logger("db2entity.driver").parent is package_logger
