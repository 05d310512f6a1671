"""
Operation Logging
=================

Default sink for per-operation cache records, backed by the standard
``logging`` module. A logging failure never fails the cache call it
describes.
"""

import logging
from typing import Any, Optional

from .interfaces import OperationLogger

logger = logging.getLogger(__name__)

CACHE_CATEGORY = "cache"


def describe_result(result: Any) -> str:
    """Short, size-bounded description of an operation result."""
    if isinstance(result, (list, tuple, dict, set)):
        return f"{type(result).__name__}[{len(result)}]"
    return type(result).__name__


class LoggingOperationLogger:
    """Write operation records to a ``logging.Logger`` at DEBUG level."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logging.getLogger("cachedriver.operations")

    def log(
        self, operation: str, key: str, category: str, result: Any = None
    ) -> None:
        if result is None:
            self._logger.debug(f"[{category}] {operation} {key}")
        else:
            self._logger.debug(
                f"[{category}] {operation} {key} -> {describe_result(result)}"
            )


def emit(
    sink: OperationLogger,
    operation: str,
    key: str,
    result: Any = None,
    category: str = CACHE_CATEGORY,
) -> None:
    """Send one record to ``sink``, reporting sink failures as warnings."""
    try:
        sink.log(operation, key, category, result)
    except Exception as e:
        logger.warning(f"Operation logger failed for {operation} {key}: {e}")
