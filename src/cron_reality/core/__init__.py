"""
Core primitives for cron-reality-check: errors, logging, settings.
"""

from cron_reality.core.errors import (
    ConfigError,
    CronRealityError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    ParseError,
    SourceError,
    SourceNotFoundError,
    ValidationError,
)
from cron_reality.core.logging import configure_logging, get_logger
from cron_reality.core.settings import RealityCheckSettings

__all__ = [
    "ConfigError",
    "CronRealityError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidConfigError",
    "ParseError",
    "SourceError",
    "SourceNotFoundError",
    "ValidationError",
    "configure_logging",
    "get_logger",
    "RealityCheckSettings",
]
