"""
Redis Cache Driver
==================

Stores values either as flat string keys or as fields of Redis hashes
("buckets"), choosing the command for each call from strategy parameters.

Read operations:
- getValue: ``GET key``
- getHValue: ``HGET bucket field`` for ``key = bucket<delimiter>field``
- getHValues: ``HMGET bucket field...`` in chunks of ``max_hmget_limit``
- getAllHash: ``HVALS bucket``

Write operations:
- setex: ``SETEX key ttl payload`` (``SET`` when there is no ttl)
- hset: ``HSET bucket field payload`` plus ``EXPIRE bucket ttl``

Delete operations:
- del: ``DEL key``
- hdel: ``HDEL bucket field``, or ``DEL bucket`` when the field is ``*``

Usage:
    import redis
    from cachedriver import RedisDriver

    driver = RedisDriver(redis.Redis())
    driver.set("users#123", {"name": "Alice"}, 3600, {"strategy": "hash"})
    driver.get("users#123", {"strategy": "hash"})
    driver.get("users", {"strategy": "hash", "fields": ["123", "456"]})
    driver.delete("users#*", {"strategy": "hash"})
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..config import DelimiterConfig, DriverConfig
from ..error_handling import cache_operation_context, log_cache_performance
from ..interfaces import OperationLogger, StoreClient
from ..keys import is_whole_bucket, split_key
from ..operation_log import LoggingOperationLogger, emit
from ..serialization import PayloadCodec
from ..strategies import (
    Operation,
    StrategyParams,
    id_postfix_for_strategy,
    resolve_delete_operation,
    resolve_get_operation,
    resolve_set_operation,
)
from .base import CacheDriver, Params

logger = logging.getLogger(__name__)


class RedisDriver(CacheDriver):
    """
    Strategy-dispatching cache driver over a synchronous Redis client.

    Hash TTLs are bucket-wide: Redis expires whole hashes, so writing one
    field with a ttl resets the expiry of every sibling field in the bucket.

    Multi-field reads drop missing fields instead of leaving gaps, so the
    result is not positionally aligned with the requested field list.
    """

    def __init__(
        self,
        client: Optional[StoreClient] = None,
        config: Optional[DriverConfig] = None,
        operation_logger: Optional[OperationLogger] = None,
        client_factory: Optional[Callable[[], StoreClient]] = None,
    ):
        """
        Args:
            client: Ready store client, e.g. ``redis.Redis(...)``
            config: Driver configuration (delimiters, codec, chunk size)
            operation_logger: Sink for per-operation records
            client_factory: Zero-argument callable returning a client,
                called once on first use when ``client`` is not given
        """
        if client is None and client_factory is None:
            raise ValueError("RedisDriver needs either client or client_factory")

        self._client = client
        self._client_factory = client_factory
        self.config = config or DriverConfig()
        self.codec = PayloadCodec(self.config.compression, self.config.serialization)
        self.operation_logger = operation_logger or LoggingOperationLogger()

        self._get_handlers: Dict[Operation, Callable[[str, StrategyParams], Any]] = {
            Operation.GET_VALUE: self._get_value,
            Operation.GET_H_VALUE: self._get_h_value,
            Operation.GET_H_VALUES: self._get_h_values,
            Operation.GET_ALL_HASH: self._get_all_hash,
        }
        self._set_handlers: Dict[Operation, Callable[[str, Any, int], None]] = {
            Operation.SETEX: self._setex,
            Operation.HSET: self._hset,
        }
        self._delete_handlers: Dict[Operation, Callable[[str], None]] = {
            Operation.DEL: self._del,
            Operation.HDEL: self._hdel,
        }

    @property
    def client(self) -> StoreClient:
        """The store client, created through ``client_factory`` on first use."""
        if self._client is None:
            self._client = self._client_factory()
            logger.debug(f"Resolved store client {type(self._client).__name__}")
        return self._client

    @property
    def hash_delimiter(self) -> str:
        return self.config.hash_delimiter

    @staticmethod
    def get_id_postfix_by_strategy(
        params: Union[StrategyParams, Mapping[str, Any], None] = None,
        delimiters: Optional[DelimiterConfig] = None,
    ) -> str:
        """
        Delimiter to put between a key prefix and a record id so the key
        matches the storage shape of ``params["strategy"]``.
        """
        return id_postfix_for_strategy(params, delimiters)

    def _log(self, operation: str, key: str, result: Any = None) -> None:
        emit(self.operation_logger, operation, key, result)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str, params: Params = None) -> Any:
        params = StrategyParams.from_mapping(params)
        operation = resolve_get_operation(key, params, self.hash_delimiter)
        handler = self._get_handlers[operation]

        with cache_operation_context("get", key=key, resolved=operation.value):
            result = handler(key, params)

        if result is None:
            result = []
        self._log("get", key, result)
        return result

    def set(
        self, key: str, value: Any, ttl: int = 0, params: Params = None
    ) -> "RedisDriver":
        params = StrategyParams.from_mapping(params)
        operation = resolve_set_operation(params)
        handler = self._set_handlers[operation]

        with cache_operation_context("set", key=key, resolved=operation.value):
            handler(key, value, ttl)

        self._log("set", key)
        return self

    def delete(self, key: str, params: Params = None) -> "RedisDriver":
        params = StrategyParams.from_mapping(params)
        operation = resolve_delete_operation(params)
        handler = self._delete_handlers[operation]

        with cache_operation_context("delete", key=key, resolved=operation.value):
            handler(key)

        self._log("delete", key)
        return self

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    @log_cache_performance
    def _get_value(self, key: str, params: StrategyParams) -> Any:
        data = self.client.get(key)
        result = self.codec.unserialize(data) if data else []
        self._log(Operation.GET_VALUE.value, key, result)
        return result

    @log_cache_performance
    def _get_h_value(self, key: str, params: StrategyParams) -> Any:
        bucket, field = split_key(key, self.hash_delimiter, legacy_fallback=True)

        data = self.client.hget(bucket, field)
        result = self.codec.unserialize(data) if data else []
        self._log(Operation.GET_H_VALUE.value, key, result)
        return result

    @log_cache_performance
    def _get_h_values(self, key: str, params: StrategyParams) -> List[Any]:
        fields = list(params.fields)
        limit = self.config.max_hmget_limit
        result = []

        for start in range(0, len(fields), limit):
            chunk = fields[start:start + limit]
            items = self.client.hmget(key, chunk)
            # Missing fields are dropped, not kept as placeholders
            result.extend(self.codec.unserialize(item) for item in items if item)

        self._log(Operation.GET_H_VALUES.value, key, result)
        return result

    @log_cache_performance
    def _get_all_hash(self, key: str, params: StrategyParams) -> List[Any]:
        items = self.client.hvals(key)
        result = [self.codec.unserialize(item) for item in items or []]
        self._log(Operation.GET_ALL_HASH.value, key, result)
        return result

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    @log_cache_performance
    def _setex(self, key: str, value: Any, ttl: int) -> None:
        payload = self.codec.serialize(value)
        if ttl > 0:
            self.client.setex(key, ttl, payload)
        else:
            self.client.set(key, payload)
        self._log(Operation.SETEX.value, key)

    @log_cache_performance
    def _hset(self, key: str, value: Any, ttl: int) -> None:
        parts = split_key(key, self.hash_delimiter)
        if parts is None:
            self._setex(key, value, ttl)
        else:
            bucket, field = parts
            self.client.hset(bucket, field, self.codec.serialize(value))
            if ttl > 0:
                # Expiry applies to the whole bucket
                self.client.expire(bucket, ttl)

        self._log(Operation.HSET.value, key)

    # ------------------------------------------------------------------
    # Delete operations
    # ------------------------------------------------------------------

    @log_cache_performance
    def _del(self, key: str) -> None:
        self.client.delete(key)
        self._log(Operation.DEL.value, key)

    @log_cache_performance
    def _hdel(self, key: str) -> None:
        parts = split_key(key, self.hash_delimiter)
        if parts is None:
            self._del(key)
        else:
            bucket, field = parts
            if is_whole_bucket(field):
                self._del(bucket)
            else:
                self.client.hdel(bucket, field)

        self._log(Operation.HDEL.value, key)
