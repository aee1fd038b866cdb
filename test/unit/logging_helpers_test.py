"""Unit tests for the genmix logging configuration."""

import logging

import pytest

from genmix.logging_helpers import configure_root_logger, get_logger


@pytest.fixture()
def catalystcoop_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger("catalystcoop")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_get_logger():
    assert get_logger("genmix.session").name == "catalystcoop.genmix.session"


def test_configure_root_logger(catalystcoop_logger, tmp_path):
    logfile = tmp_path / "genmix.log"
    configure_root_logger(logfile=logfile, loglevel="DEBUG")

    assert catalystcoop_logger.propagate is False
    assert catalystcoop_logger.getEffectiveLevel() == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    get_logger("genmix.test").debug("written to the log file")
    for handler in catalystcoop_logger.handlers:
        handler.flush()
    assert "written to the log file" in logfile.read_text()


def test_reconfiguring_replaces_handlers(catalystcoop_logger, tmp_path):
    configure_root_logger(logfile=tmp_path / "first.log")
    logger = configure_root_logger(
        logfile=tmp_path / "second.log", dependency_loglevels={"httpx": logging.ERROR}
    )

    assert logger is catalystcoop_logger
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert [h.baseFilename for h in file_handlers] == [
        str(tmp_path / "second.log")
    ]
    console_handlers = [h for h in logger.handlers if h not in file_handlers]
    assert len(console_handlers) == 1
    assert logging.getLogger("httpx").level == logging.ERROR
