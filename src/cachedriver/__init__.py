"""
cachedriver - Strategy-dispatching Redis cache driver with compressed payloads.

Stores serialized values in Redis either under flat string keys or as fields
of hash buckets, and picks the Redis command for every call from a strategy
hint, the shape of the key and an optional field list.

Key Features:
- Compound ``bucket<delimiter>field`` keys with a legacy ``:`` fallback
- Strategy inference for get/set/delete with a force override
- Chunked multi-field hash reads
- pickle or JSON encoding compressed with blosc2
- Pluggable driver registry

Quick Start:
    >>> import redis
    >>> from cachedriver import RedisDriver
    >>>
    >>> driver = RedisDriver(redis.Redis())
    >>> driver.set("users#123", "Alice", 3600, {"strategy": "hash"})
    >>> driver.get("users#123", {"strategy": "hash"})
    'Alice'
"""

from .config import (
    CompressionConfig,
    DelimiterConfig,
    DriverConfig,
    SerializationConfig,
    create_driver_config,
)
from .drivers import (
    CacheDriver,
    RedisDriver,
    get_cache_driver,
    list_cache_drivers,
    register_cache_driver,
    unregister_cache_driver,
)
from .error_handling import (
    CacheConfigurationError,
    CacheDecodeError,
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    DecodeError,
    TransportError,
)
from .keys import WHOLE_BUCKET, compose_key, split_key
from .operation_log import LoggingOperationLogger
from .serialization import PayloadCodec, serialize, unserialize
from .strategies import Operation, Strategy, StrategyParams, id_postfix_for_strategy

__version__ = "0.1.0"

__all__ = [
    # Drivers
    "CacheDriver",
    "RedisDriver",
    "register_cache_driver",
    "unregister_cache_driver",
    "get_cache_driver",
    "list_cache_drivers",
    # Configuration
    "DriverConfig",
    "DelimiterConfig",
    "CompressionConfig",
    "SerializationConfig",
    "create_driver_config",
    # Strategies and keys
    "Strategy",
    "Operation",
    "StrategyParams",
    "id_postfix_for_strategy",
    "WHOLE_BUCKET",
    "split_key",
    "compose_key",
    # Serialization
    "PayloadCodec",
    "serialize",
    "unserialize",
    # Logging
    "LoggingOperationLogger",
    # Errors
    "CacheError",
    "CacheConfigurationError",
    "CacheDecodeError",
    "CacheSerializationError",
    "ConfigurationError",
    "DecodeError",
    "TransportError",
    "__version__",
]
