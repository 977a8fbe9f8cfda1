"""
Error logging decorator for localekit.
"""

import asyncio
import functools
import traceback
from typing import Any, Callable, Optional
import structlog

logger = structlog.get_logger(__name__)


def log_errors(
    level: str = "error",
    include_traceback: bool = False,
    reraise: bool = True,
    operation_name: Optional[str] = None
):
    """
    Decorator to log errors with context.

    Args:
        level: Log level (debug, info, warning, error, critical)
        include_traceback: Include full traceback in logs
        reraise: Whether to re-raise the exception after logging
        operation_name: Custom operation name for logging
    """
    def decorator(func: Callable) -> Callable:
        def _log(e: Exception, op_name: str) -> None:
            log_method = getattr(logger, level.lower(), logger.error)

            log_data = {
                "operation": op_name,
                "error_type": type(e).__name__,
                "error": str(e),
            }

            if include_traceback:
                log_data["traceback"] = traceback.format_exc()

            log_method("Error in operation", **log_data)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> Any:
            op_name = operation_name or f"{func.__module__}.{func.__name__}"

            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _log(e, op_name)
                if reraise:
                    raise
                return None

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> Any:
            op_name = operation_name or f"{func.__module__}.{func.__name__}"

            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log(e, op_name)
                if reraise:
                    raise
                return None

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator
