"""Logging configuration for echoed failure messages."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ensure.config import Settings

LOGGER_NAME = "ensure"


def setup_logger(
    log_file: Path | None = None, verbose: bool = False, logger_name: str = LOGGER_NAME
) -> logging.Logger:
    """
    Configure and return a logger for echoed failure messages.

    Args:
        log_file: Optional path to a log file. Parent directories are created.
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    logger.handlers.clear()

    logger.disabled = False
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S"
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger


def echo_logger(settings: Settings) -> logging.Logger | None:
    """Return the logger failure messages are echoed to, if logging is on.

    The logger is configured from *settings* the first time it is needed.
    """
    if not settings.log:
        return None
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        setup_logger(settings.log_file, verbose=True)
    return logger
