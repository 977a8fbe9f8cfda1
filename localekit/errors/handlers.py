"""
Failure bookkeeping for localekit runs.

Recoverable errors (translation fallbacks, skipped files) are recorded
here so a run can end with a summary instead of aborting on the first
problem.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from .exceptions import LocaleKitError


class ErrorContextManager:
    """
    Records recoverable errors with their context.

    Keeps per-type counts and a bounded history used for the end-of-run
    summary.
    """

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self.error_history: List[Dict[str, Any]] = []
        self.error_counts: Dict[str, int] = {}
        self.last_errors: Dict[str, datetime] = {}

    def record_error(self, error: LocaleKitError, context: Optional[Dict[str, Any]] = None):
        """Record an error occurrence with context."""
        error_record = {
            "timestamp": datetime.now(timezone.utc),
            "error_type": error.__class__.__name__,
            "message": error.message,
            "error_code": error.error_code,
            "context": {**error.context, **(context or {})},
            "is_fatal": error.is_fatal(),
        }

        self.error_history.append(error_record)

        if len(self.error_history) > self.max_history:
            self.error_history.pop(0)

        error_type = error.__class__.__name__
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1
        self.last_errors[error_type] = error_record["timestamp"]

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics for the run."""
        return {
            "total_errors": sum(self.error_counts.values()),
            "error_counts": self.error_counts.copy(),
            "most_common": max(self.error_counts.items(), key=lambda x: x[1]) if self.error_counts else None,
            "last_errors": {k: v.isoformat() for k, v in self.last_errors.items()},
        }

    def records_for(self, error_type: str) -> List[Dict[str, Any]]:
        """Return the recorded errors of one type, oldest first."""
        return [e for e in self.error_history if e["error_type"] == error_type]
