"""
Collaborator Interfaces
=======================

Structural interfaces for the objects a cache driver talks to. ``redis.Redis``
satisfies ``StoreClient`` as-is; tests use an in-memory fake.
"""

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class StoreClient(Protocol):
    """Synchronous, byte-valued key-value store client."""

    def get(self, name: str) -> Optional[bytes]:
        ...

    def set(self, name: str, value: bytes) -> Any:
        ...

    def setex(self, name: str, time: int, value: bytes) -> Any:
        ...

    def delete(self, *names: str) -> int:
        ...

    def hget(self, name: str, key: str) -> Optional[bytes]:
        ...

    def hset(self, name: str, key: str, value: bytes) -> int:
        ...

    def hdel(self, name: str, *keys: str) -> int:
        ...

    def hvals(self, name: str) -> List[bytes]:
        ...

    def hmget(self, name: str, keys: Sequence[str]) -> List[Optional[bytes]]:
        ...

    def expire(self, name: str, time: int) -> bool:
        ...


@runtime_checkable
class OperationLogger(Protocol):
    """Receives one record per cache operation."""

    def log(
        self, operation: str, key: str, category: str, result: Any = None
    ) -> None:
        """
        Record an operation.

        Args:
            operation: Public call (get/set/delete) or store operation name
            key: Cache key the operation addressed
            category: Source category, ``"cache"`` for this layer
            result: Value returned to the caller, if any
        """
        ...
