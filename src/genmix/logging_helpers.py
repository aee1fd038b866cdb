"""Logging setup shared by the genmix library and its command line."""

import logging
from pathlib import Path

import coloredlogs

ROOT_LOGGER_NAME = "catalystcoop"
LOG_FORMAT = "%(asctime)s [%(levelname)8s] %(name)s:%(lineno)s %(message)s"

HTTP_CLIENT_LOGLEVELS: dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}
"""httpx logs every request at INFO, which buries the dashboard's own messages."""


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the shared ``catalystcoop`` namespace."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_root_logger(
    logfile: str | Path | None = None,
    loglevel: str = "INFO",
    dependency_loglevels: dict[str, int] | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Send genmix log records to a colored console and optionally a file.

    Calling this again replaces the handlers added by the previous call instead of
    stacking more of them, so a long-lived process can reconfigure logging.

    Args:
        logfile: File to append log records to, if any.
        loglevel: Minimum level to emit.
        dependency_loglevels: Levels for third party loggers. Defaults to
            :data:`HTTP_CLIENT_LOGLEVELS`.
        propagate: Whether records also reach the root logger, which is where pytest
            captures them.

    Returns:
        The configured ``catalystcoop`` logger.
    """
    if dependency_loglevels is None:
        dependency_loglevels = HTTP_CLIENT_LOGLEVELS
    for name, level in dependency_loglevels.items():
        logging.getLogger(name).setLevel(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    coloredlogs.install(fmt=LOG_FORMAT, level=loglevel, logger=logger)
    if logfile is not None:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = propagate
    return logger
