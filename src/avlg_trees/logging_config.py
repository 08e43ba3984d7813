"""Logging setup shared by the avlg_trees package, its tests and the stats scripts."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "avlg_trees"
LIBRARY_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
TEST_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler_type: str = "stream"
) -> logging.Logger:
    """
    Give the ``avlg_trees`` logger its own stdout handler.

    Only the logger's own handlers count: a handler on the root logger (pytest's
    capture handlers, an application's ``basicConfig``) does not stop the
    project logger from being configured. Calling this again is a no-op.

    Args:
        level: Logging level (default: INFO)
        format_string: Custom format string (optional)
        handler_type: Only "stream" is supported

    Returns:
        The project logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return logger

    if handler_type != "stream":
        raise ValueError(f"Unsupported handler_type: {handler_type!r}")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or LIBRARY_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    # Records go to our handler only
    logger.propagate = False
    return logger


def add_file_handler(
    path: str,
    level: Optional[int] = None,
    format_string: Optional[str] = None,
) -> logging.FileHandler:
    """
    Also write the project's log records to the file at ``path``.

    The returned handler can be handed to ``logging.basicConfig`` so a script's
    own records and the library's records end up in the same run log.
    """
    logger = setup_logging()
    handler = logging.FileHandler(path, mode="w")
    handler.setFormatter(logging.Formatter(format_string or LIBRARY_FORMAT))
    logger.addHandler(handler)
    if level is not None:
        logger.setLevel(level)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under ``avlg_trees``."""
    setup_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """DEBUG-level ``Tests.<name>`` logger with its own stderr handler."""
    logger = logging.getLogger(f"Tests.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(TEST_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger
