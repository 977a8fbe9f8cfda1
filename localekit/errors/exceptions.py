"""
Error hierarchy for localekit.

Errors are split into fatal ones, which abort the whole run, and
recoverable ones, which are logged and absorbed per key or per file.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone


class LocaleKitError(Exception):
    """
    Base exception for all localekit errors.

    Carries a machine readable error code and a context dict so that
    failures can be logged and summarized uniformly.
    """

    fatal = True

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        previous_error: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.previous_error = previous_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "previous_error": str(self.previous_error) if self.previous_error else None,
        }

    def is_fatal(self) -> bool:
        """Whether this error must abort the whole run."""
        return self.fatal


class RecoverableError(LocaleKitError):
    """Base class for errors handled locally without aborting the batch."""

    fatal = False


class SchemaError(LocaleKitError):
    """Malformed JSON, wrong root shape or a missing baseline language."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        key: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"path": path, "key": key},
            **kwargs
        )


class CompletenessError(LocaleKitError):
    """One or more languages lack a translation present in another language."""

    def __init__(self, message: str, missing: Optional[List[Any]] = None, **kwargs):
        self.missing = list(missing or [])
        super().__init__(
            message,
            context={"missing_count": len(self.missing)},
            **kwargs
        )


class ConfigurationError(LocaleKitError):
    """Invalid or incomplete configuration."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            context={"config_key": config_key},
            **kwargs
        )


class TranslationError(RecoverableError):
    """The translation API call failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        language_code: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        # 429 and 5xx are worth another attempt, other statuses are not
        self.status_code = status_code
        self.retryable = status_code is None or status_code == 429 or status_code >= 500
        super().__init__(
            message,
            context={"language_code": language_code, "status_code": status_code},
            **kwargs
        )


class StorageError(RecoverableError):
    """Reading or writing a file or directory failed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            context={"path": path, "operation": operation},
            **kwargs
        )
