"""
Abstract Base Class for Cache Drivers
=====================================

Defines the interface every cache driver implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from ..strategies import StrategyParams

Params = Union[StrategyParams, Mapping[str, Any], None]


class CacheDriver(ABC):
    """
    Abstract base class for cache drivers.

    A driver stores serialized values in a backing store and picks the
    storage primitive for each call from per-call strategy parameters.
    Drivers are stateless between calls; the store connection belongs to
    whoever constructed the driver.
    """

    @abstractmethod
    def get(self, key: str, params: Params = None) -> Any:
        """
        Read a value.

        Args:
            key: Cache key, possibly compound (``bucket<delimiter>field``)
            params: Strategy parameters

        Returns:
            The decoded value, a list of values for multi-value reads, or an
            empty list on a cache miss.
        """
        pass

    @abstractmethod
    def set(
        self, key: str, value: Any, ttl: int = 0, params: Params = None
    ) -> "CacheDriver":
        """
        Store a value.

        Args:
            key: Cache key, possibly compound
            value: Value to serialize and store
            ttl: Expiry in seconds; 0 means no expiry
            params: Strategy parameters

        Returns:
            The driver, for chaining.
        """
        pass

    @abstractmethod
    def delete(self, key: str, params: Params = None) -> "CacheDriver":
        """
        Delete a value, a hash field, or a whole bucket.

        Returns:
            The driver, for chaining.
        """
        pass
