"""
lockstep.config - Library settings

Settings are read once from the environment and can be overridden in
process with configure():

    LOCKSTEP_BLOCKING_CAPACITY=16   maxsize of resolved blocking queues/deques
    LOCKSTEP_LOG_LEVEL=DEBUG        level used by lockstep.log.setup_logger

A capacity of 0 means unbounded, matching queue.Queue.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

# Default configuration values
DEFAULT_BLOCKING_CAPACITY = 0
DEFAULT_LOG_LEVEL = "WARNING"
ENV_PREFIX = "LOCKSTEP_"


@dataclass(frozen=True)
class Settings:
    """
    Process-wide lockstep settings.

    Fields:
        blocking_capacity: maxsize for blocking queues and deques built by
                           the resolver (0 = unbounded)
        log_level: Level name used when the package logger is set up
    """

    blocking_capacity: int = DEFAULT_BLOCKING_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        if self.blocking_capacity < 0:
            raise ValueError(
                f"blocking_capacity must be >= 0, got {self.blocking_capacity}"
            )
        if not isinstance(self.log_level, str) or not isinstance(
            logging.getLevelName(self.log_level.upper()), int
        ):
            raise ValueError(f"Unknown log level: {self.log_level}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from. If None, uses os.environ.

    Returns:
        A Settings instance with defaults for every unset variable.

    Raises:
        ValueError: If a variable is set to an unusable value.
    """
    if environ is None:
        environ = os.environ

    values = {}
    raw_capacity = environ.get(ENV_PREFIX + "BLOCKING_CAPACITY")
    if raw_capacity is not None:
        try:
            values["blocking_capacity"] = int(raw_capacity)
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}BLOCKING_CAPACITY must be an integer, "
                f"got {raw_capacity!r}"
            ) from None

    raw_level = environ.get(ENV_PREFIX + "LOG_LEVEL")
    if raw_level:
        values["log_level"] = raw_level.upper()

    return Settings(**values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(**overrides) -> Settings:
    """
    Override individual settings for the rest of the process.

    Unknown field names raise TypeError.
    """
    global _settings
    known = {f.name for f in fields(Settings)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    _settings = replace(get_settings(), **overrides)
    return _settings


def reset_settings() -> None:
    """Drop any overrides so the next get_settings() reloads from the environment."""
    global _settings
    _settings = None
