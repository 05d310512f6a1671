"""
Shared fixtures for cachedriver tests.

``FakeRedisClient`` is an in-memory stand-in for ``redis.Redis`` that keeps
string keys and hashes apart, tracks expiries, records every call and can be
told to fail on chosen commands.
"""

from typing import Any, Dict, List, Optional

import pytest

from cachedriver import DriverConfig, RedisDriver
from cachedriver.config import DelimiterConfig


class FakeRedisClient:
    """Fake synchronous Redis client for unit testing.

    Attributes:
        strings: Flat key -> bytes
        hashes: Bucket -> {field: bytes}
        ttls: Key -> last expiry set in seconds
        call_history: Recorded calls as {"method": ..., "args": ...}
    """

    def __init__(self, error_on: Optional[Dict[str, Exception]] = None):
        """
        Args:
            error_on: Dict mapping method names to exceptions to raise
        """
        self.strings: Dict[str, bytes] = {}
        self.hashes: Dict[str, Dict[str, bytes]] = {}
        self.ttls: Dict[str, int] = {}
        self._error_on = error_on or {}
        self.call_history: List[Dict[str, Any]] = []

    def _call(self, method: str, **args) -> None:
        self.call_history.append({"method": method, "args": args})
        if method in self._error_on:
            raise self._error_on[method]

    def calls(self, method: Optional[str] = None) -> List[Dict[str, Any]]:
        """Recorded calls, optionally filtered by method name."""
        if method is None:
            return list(self.call_history)
        return [c for c in self.call_history if c["method"] == method]

    def clear_history(self) -> None:
        self.call_history = []

    def get(self, name):
        self._call("get", name=name)
        return self.strings.get(name)

    def set(self, name, value):
        self._call("set", name=name, value=value)
        self.strings[name] = value
        self.ttls.pop(name, None)
        return True

    def setex(self, name, time, value):
        self._call("setex", name=name, time=time, value=value)
        self.strings[name] = value
        self.ttls[name] = time
        return True

    def delete(self, *names):
        self._call("delete", names=names)
        removed = 0
        for name in names:
            if self.strings.pop(name, None) is not None:
                removed += 1
            if self.hashes.pop(name, None) is not None:
                removed += 1
            self.ttls.pop(name, None)
        return removed

    def hget(self, name, key):
        self._call("hget", name=name, key=key)
        return self.hashes.get(name, {}).get(key)

    def hset(self, name, key, value):
        self._call("hset", name=name, key=key, value=value)
        bucket = self.hashes.setdefault(name, {})
        created = key not in bucket
        bucket[key] = value
        return int(created)

    def hdel(self, name, *keys):
        self._call("hdel", name=name, keys=keys)
        bucket = self.hashes.get(name, {})
        return sum(1 for key in keys if bucket.pop(key, None) is not None)

    def hvals(self, name):
        self._call("hvals", name=name)
        return list(self.hashes.get(name, {}).values())

    def hmget(self, name, keys):
        self._call("hmget", name=name, keys=list(keys))
        bucket = self.hashes.get(name, {})
        return [bucket.get(key) for key in keys]

    def expire(self, name, time):
        self._call("expire", name=name, time=time)
        if name in self.strings or name in self.hashes:
            self.ttls[name] = time
            return True
        return False


class RecordingOperationLogger:
    """Operation logger that keeps every record."""

    def __init__(self):
        self.records: List[tuple] = []

    def log(self, operation, key, category, result=None):
        self.records.append((operation, key, category, result))

    def operations(self) -> List[str]:
        return [record[0] for record in self.records]


@pytest.fixture
def fake_redis():
    """Empty fake Redis client."""
    return FakeRedisClient()


@pytest.fixture
def operation_logger():
    return RecordingOperationLogger()


@pytest.fixture
def driver_config():
    """Driver configuration with ``#`` as the hash delimiter."""
    return DriverConfig(delimiters=DelimiterConfig(hash_delimiter="#", string_delimiter=":"))


@pytest.fixture
def driver(fake_redis, driver_config, operation_logger):
    """RedisDriver over the fake client."""
    return RedisDriver(
        fake_redis, config=driver_config, operation_logger=operation_logger
    )
