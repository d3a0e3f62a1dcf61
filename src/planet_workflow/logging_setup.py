"""Logging configuration for the pwf command."""

import logging
import sys

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Configure the package logger from a LoggingConfig.

    Replaces any handlers installed by a previous call, so it is safe to
    call once per CLI invocation.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger("planet_workflow")
    logger.setLevel(config.level.upper())
    logger.handlers = []

    if config.console_logging:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())

    logger.propagate = False
    return logger
