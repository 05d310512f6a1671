"""
Standardized Error Handling for cachedriver
==========================================

Exception taxonomy and logging helpers shared by all cache operations.

Store-level failures (connection refused, protocol errors, rejected commands)
are not wrapped: they reach the caller as the store client raised them.
``TransportError`` names that family for callers that want to catch it.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Optional

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

# Raised by the store client and passed through unchanged
TransportError = RedisError


class CacheError(Exception):
    """Base exception for all cache-related errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.error(
            f"Cache error: {message}" + (f" ({context_str})" if context_str else "")
        )


class CacheConfigurationError(CacheError):
    """Raised when a strategy or operation name cannot be resolved."""

    pass


class CacheSerializationError(CacheError):
    """Raised when a value cannot be encoded for storage."""

    pass


class CacheDecodeError(CacheError):
    """Raised when a stored payload fails decompression or decoding."""

    pass


# Short names used in the public API
ConfigurationError = CacheConfigurationError
DecodeError = CacheDecodeError


@contextmanager
def cache_operation_context(operation: str, /, **context):
    """
    Context manager for cache operations with standardized logging.

    Errors are logged and re-raised untouched.

    Args:
        operation: Description of the operation
        **context: Additional context for logging
    """
    logger.debug(f"Starting cache operation: {operation}", extra=context)
    start_time = time.time()

    try:
        yield
    except CacheError:
        logger.error(f"Cache operation failed: {operation}", extra=context)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in cache operation: {operation} - {e}", extra=context
        )
        raise

    duration = time.time() - start_time
    logger.debug(
        f"Cache operation completed: {operation} ({duration:.3f}s)", extra=context
    )


def log_cache_performance(func: Callable) -> Callable:
    """Decorator to log timing for cache store operations."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.time() - start_time
            logger.warning(
                f"Cache operation {func.__name__} failed after {duration:.3f}s: {e}"
            )
            raise

        duration = time.time() - start_time
        logger.debug(f"Cache operation {func.__name__} completed in {duration:.3f}s")
        return result

    return wrapper
