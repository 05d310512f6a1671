"""
Tests for the default operation logger.
"""

import logging

from cachedriver.interfaces import OperationLogger, StoreClient
from cachedriver.operation_log import (
    CACHE_CATEGORY,
    LoggingOperationLogger,
    describe_result,
    emit,
)

from conftest import FakeRedisClient, RecordingOperationLogger


class TestDescribeResult:
    def test_containers_report_length(self):
        assert describe_result([1, 2, 3]) == "list[3]"
        assert describe_result({}) == "dict[0]"

    def test_scalars_report_type(self):
        assert describe_result("Alice") == "str"
        assert describe_result(None) == "NoneType"


class TestLoggingOperationLogger:
    def test_logs_without_result(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="cachedriver.operations"):
            LoggingOperationLogger().log("set", "users#1", CACHE_CATEGORY)

        assert "[cache] set users#1" in caplog.text
        assert "->" not in caplog.text

    def test_logs_result_summary(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="cachedriver.operations"):
            LoggingOperationLogger().log("get", "users", CACHE_CATEGORY, ["a", "b"])

        assert "[cache] get users -> list[2]" in caplog.text

    def test_explicit_none_matches_default(self, caplog):
        sink = LoggingOperationLogger()
        with caplog.at_level(logging.DEBUG, logger="cachedriver.operations"):
            sink.log("set", "users#1", CACHE_CATEGORY)
            sink.log("set", "users#1", CACHE_CATEGORY, None)

        first, second = [record.getMessage() for record in caplog.records]
        assert first == second == "[cache] set users#1"

    def test_custom_logger(self, caplog):
        custom = logging.getLogger("app.cache")
        with caplog.at_level(logging.DEBUG, logger="app.cache"):
            LoggingOperationLogger(custom).log("del", "k", CACHE_CATEGORY)

        assert caplog.records[-1].name == "app.cache"

    def test_satisfies_protocol(self):
        assert isinstance(LoggingOperationLogger(), OperationLogger)


class TestEmit:
    def test_forwards_record(self):
        sink = RecordingOperationLogger()
        emit(sink, "get", "k", "v")
        assert sink.records == [("get", "k", "cache", "v")]

    def test_without_result(self):
        sink = RecordingOperationLogger()
        emit(sink, "set", "k")
        assert sink.records == [("set", "k", "cache", None)]

    def test_sink_failure_becomes_warning(self, caplog):
        class BrokenSink:
            def log(self, operation, key, category, result=None):
                raise OSError("disk full")

        with caplog.at_level(logging.WARNING):
            emit(BrokenSink(), "set", "k")

        assert "Operation logger failed for set k: disk full" in caplog.text


class TestStoreClientProtocol:
    def test_fake_client_satisfies_protocol(self):
        assert isinstance(FakeRedisClient(), StoreClient)

    def test_redis_client_satisfies_protocol(self):
        import redis

        assert isinstance(redis.Redis(), StoreClient)
