"""Logger configuration for the lockstep package."""

import logging
import sys
from typing import Optional

from lockstep.config import get_settings

__all__ = ["PACKAGE_LOGGER", "setup_logger"]

PACKAGE_LOGGER = "lockstep"

# A library stays silent until the application opts in
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the lockstep package logger.

    Args:
        level: Log level name. Defaults to Settings.log_level.
        format_string: Custom format string

    Returns:
        The configured package logger
    """
    level = level or get_settings().log_level
    format_string = format_string or (
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger(PACKAGE_LOGGER)

    # Only configure once
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    return logger
