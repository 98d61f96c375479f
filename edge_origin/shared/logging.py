"""Logging configuration for the edge origin service."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"

# Third-party loggers that are too chatty at DEBUG for day-to-day use
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "uvicorn.access")


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure process-wide logging: one stdout handler on the root logger.

    Args:
        level: Logging level as a number or a name such as "debug"
    """
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(stream_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_logger.level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (pass __name__)."""
    return logging.getLogger(name)
