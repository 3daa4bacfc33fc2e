"""
Structured error types for cron-reality-check.

The analysis engine degrades gracefully on malformed scheduler data, so only
a handful of conditions ever surface as exceptions: invalid numeric
configuration, unreadable snapshot documents, and whatever the caller's
callback registry raises (that one is propagated untouched and never wrapped).

Every error raised by this package extends ``CronRealityError`` and carries:
- **Category:** What kind of error (config, source, parse, validation)
- **Retryable:** Always False here; the engine performs no I/O worth retrying
- **Context:** Structured metadata (document path, setting name, ...)
- **Cause:** Chained underlying exception for root cause analysis

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                    CronRealityError                          │
        │        (category, retryable, context, cause)                 │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError             SourceError        ValidationError  │
        │  (CONFIG)                (SOURCE)           (VALIDATION)     │
        │      │                       │                               │
        │  InvalidConfigError      SourceNotFoundError                 │
        │                          ParseError (PARSE)                  │
        └─────────────────────────────────────────────────────────────┘

Examples:
    Rejecting a negative grace period:

    >>> error = InvalidConfigError("grace_seconds", -5)
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> error.retryable
    False

    Adding context to an error:

    >>> error = ParseError("Snapshot document is not a JSON object")
    >>> error.with_context(source_path="/tmp/cron.json")
    ParseError('Snapshot document is not a JSON object', category=PARSE)
    >>> error.context.source_path
    '/tmp/cron.json'

Guardrails:
    ❌ DON'T: Wrap exceptions raised by the callback registry
    ✅ DO: Let them propagate unchanged to the caller

    ❌ DON'T: Raise for malformed cron tables or lock values
    ✅ DO: Return an empty snapshot / inert lock instead

Tags:
    error-handling, exception-hierarchy, error-context, cron-reality
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        SOURCE: Snapshot document missing or unreadable
        PARSE: Snapshot document is not valid JSON / not an object
        VALIDATION: Input value violates a constraint
        CONFIG: Missing config, invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    SOURCE = "SOURCE"             # Document missing, unreadable
    PARSE = "PARSE"               # JSON decoding, wrong document shape
    VALIDATION = "VALIDATION"     # Constraint violations

    CONFIG = "CONFIG"             # Invalid grace / threshold settings

    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the metadata this package actually has on hand when
    something goes wrong. Anything else goes into ``metadata``.

    Examples:
        >>> ctx = ErrorContext(source_path="cron.json", setting="grace_seconds")
        >>> ctx.to_dict()
        {'source_path': 'cron.json', 'setting': 'grace_seconds'}

    Attributes:
        source_path: Path of the snapshot document
        setting: Name of the configuration value involved
        metadata: Additional key-value pairs
    """

    source_path: str | None = None
    setting: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["source_path", "setting"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class CronRealityError(Exception):
    """
    Base exception for all cron-reality-check errors.

    Subclasses set ``default_category`` and ``default_retryable`` to provide
    sensible defaults for their domain.

    Examples:
        >>> error = CronRealityError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> d = CronRealityError("bad", category=ErrorCategory.VALIDATION).to_dict()
        >>> d["category"]
        'VALIDATION'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> CronRealityError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ParseError("Not a JSON object").with_context(
                source_path="cron.json"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(CronRealityError):
    """Error reading a snapshot document."""

    default_category = ErrorCategory.SOURCE


class SourceNotFoundError(SourceError):
    """Snapshot document does not exist."""

    pass


class ParseError(SourceError):
    """Snapshot document could not be decoded or has the wrong shape."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(CronRealityError):
    """
    Input validation error.

    Never retryable - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(CronRealityError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context=ErrorContext(setting=key),
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "CronRealityError",
    "SourceError",
    "SourceNotFoundError",
    "ParseError",
    "ValidationError",
    "ConfigError",
    "InvalidConfigError",
]
