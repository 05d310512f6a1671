"""
Cache Drivers
=============

Pluggable drivers that map strategy-tagged get/set/delete calls onto a
backing store.

Built-in drivers:
- RedisDriver: flat string keys and hash buckets on a synchronous Redis client

Registry APIs:
- register_cache_driver(), unregister_cache_driver()
- get_cache_driver(), list_cache_drivers()

Usage:
    import redis
    from cachedriver.drivers import get_cache_driver, register_cache_driver

    driver = get_cache_driver("redis", client=redis.Redis())

    # Register a custom driver
    register_cache_driver("memcached", MyMemcachedDriver)
"""

import logging
from typing import Dict, Type

from .base import CacheDriver
from .redis_driver import RedisDriver

logger = logging.getLogger(__name__)

BUILTIN_DRIVERS = frozenset({"redis"})

_driver_registry: Dict[str, Type[CacheDriver]] = {}


def _initialize_builtin_drivers():
    """Initialize registry with built-in drivers."""
    _driver_registry["redis"] = RedisDriver


_initialize_builtin_drivers()


def register_cache_driver(
    name: str, driver_class: Type[CacheDriver], force: bool = False
) -> None:
    """
    Register a cache driver class under ``name``.

    Args:
        name: Unique name for the driver (e.g., "redis", "memcached")
        driver_class: Class that implements the CacheDriver interface
        force: If True, overwrite an existing registration

    Raises:
        ValueError: If driver_class is not a CacheDriver subclass, or the
            name is already registered and force=False
    """
    if not isinstance(driver_class, type):
        raise ValueError(f"driver_class must be a class, got {type(driver_class)}")

    if not issubclass(driver_class, CacheDriver):
        raise ValueError(
            f"Driver class {driver_class.__name__} must inherit from CacheDriver"
        )

    if name in _driver_registry and not force:
        raise ValueError(
            f"Cache driver '{name}' already registered. "
            f"Use force=True to overwrite or unregister_cache_driver() first."
        )

    _driver_registry[name] = driver_class
    logger.info(f"Registered cache driver '{name}' ({driver_class.__name__})")


def unregister_cache_driver(name: str) -> bool:
    """
    Unregister a cache driver.

    Returns:
        True if the driver was unregistered, False if not found
    """
    if name in _driver_registry:
        del _driver_registry[name]
        logger.info(f"Unregistered cache driver '{name}'")
        return True

    logger.warning(f"Cache driver '{name}' not found for unregistration")
    return False


def get_cache_driver(name: str, **options) -> CacheDriver:
    """
    Create a driver instance by registered name.

    Args:
        name: Name of the registered driver
        **options: Driver constructor arguments (client, config, ...)

    Raises:
        ValueError: If the name is not registered or the options do not fit
            the driver's constructor
    """
    if name not in _driver_registry:
        available = list(_driver_registry.keys())
        raise ValueError(f"Unknown cache driver: '{name}'. Available drivers: {available}")

    driver_class = _driver_registry[name]

    try:
        return driver_class(**options)
    except TypeError as e:
        raise ValueError(
            f"Failed to create driver '{name}' with options {sorted(options)}: {e}"
        ) from e


def list_cache_drivers() -> list:
    """
    List registered drivers.

    Returns:
        List of dicts with ``name``, ``class`` and ``is_builtin`` keys
    """
    return [
        {
            "name": name,
            "class": driver_class.__name__,
            "is_builtin": name in BUILTIN_DRIVERS,
        }
        for name, driver_class in _driver_registry.items()
    ]


__all__ = [
    "CacheDriver",
    "RedisDriver",
    "register_cache_driver",
    "unregister_cache_driver",
    "get_cache_driver",
    "list_cache_drivers",
]
