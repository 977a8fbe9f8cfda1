"""
Error handling for localekit.

- Structured error hierarchy (fatal vs. recoverable)
- Failure bookkeeping for end-of-run summaries
- Logging decorator
"""

from .exceptions import (
    LocaleKitError,
    RecoverableError,
    SchemaError,
    CompletenessError,
    ConfigurationError,
    TranslationError,
    StorageError,
)

from .handlers import ErrorContextManager

from .decorators import log_errors

__all__ = [
    # Exceptions
    "LocaleKitError",
    "RecoverableError",
    "SchemaError",
    "CompletenessError",
    "ConfigurationError",
    "TranslationError",
    "StorageError",

    # Handlers
    "ErrorContextManager",

    # Decorators
    "log_errors",
]
