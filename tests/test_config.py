"""
Tests for driver configuration and validation.
"""

import dataclasses
import logging

import pytest

from cachedriver.config import (
    DEFAULT_MAX_HMGET_LIMIT,
    HASH_DELIMITER_ENV,
    STRING_DELIMITER_ENV,
    CompressionConfig,
    DelimiterConfig,
    DriverConfig,
    SerializationConfig,
    create_driver_config,
)


class TestDelimiterConfig:
    def test_defaults(self):
        config = DelimiterConfig()
        assert config.hash_delimiter == "#"
        assert config.string_delimiter == ":"

    def test_is_immutable(self):
        config = DelimiterConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.hash_delimiter = "|"

    @pytest.mark.parametrize("field", ["hash_delimiter", "string_delimiter"])
    def test_empty_delimiter_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            DelimiterConfig(**{field: ""})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(HASH_DELIMITER_ENV, "|")
        monkeypatch.setenv(STRING_DELIMITER_ENV, "/")

        config = DelimiterConfig.from_env()
        assert config.hash_delimiter == "|"
        assert config.string_delimiter == "/"

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv(HASH_DELIMITER_ENV, raising=False)
        monkeypatch.delenv(STRING_DELIMITER_ENV, raising=False)

        assert DelimiterConfig.from_env() == DelimiterConfig()


class TestCompressionConfig:
    def test_defaults(self):
        config = CompressionConfig()
        assert config.codec == "zstd"
        assert config.clevel == 7

    def test_invalid_codec(self):
        with pytest.raises(ValueError, match="codec"):
            CompressionConfig(codec="brotli")

    @pytest.mark.parametrize("clevel", [-1, 10])
    def test_invalid_level(self, clevel):
        with pytest.raises(ValueError, match="clevel"):
            CompressionConfig(clevel=clevel)


class TestSerializationConfig:
    def test_invalid_format(self):
        with pytest.raises(ValueError, match="yaml"):
            SerializationConfig(format="yaml")


class TestDriverConfig:
    def test_defaults(self):
        config = DriverConfig()
        assert config.max_hmget_limit == DEFAULT_MAX_HMGET_LIMIT == 50
        assert config.hash_delimiter == "#"
        assert config.string_delimiter == ":"

    @pytest.mark.parametrize("limit", [0, -3])
    def test_invalid_chunk_size(self, limit):
        with pytest.raises(ValueError, match="max_hmget_limit"):
            DriverConfig(max_hmget_limit=limit)


class TestCreateDriverConfig:
    def test_defaults(self):
        config = create_driver_config()
        assert config.delimiters == DelimiterConfig()
        assert config.compression.codec == "zstd"

    def test_routes_overrides(self):
        config = create_driver_config(
            hash_delimiter="|", codec="lz4", clevel=2, format="json", max_hmget_limit=10
        )

        assert config.hash_delimiter == "|"
        assert config.string_delimiter == ":"
        assert config.compression.codec == "lz4"
        assert config.compression.clevel == 2
        assert config.serialization.format == "json"
        assert config.max_hmget_limit == 10

    def test_unknown_override_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            create_driver_config(colour="blue")

        assert "Unknown configuration parameter ignored: colour" in caplog.text

    def test_delimiters_from_env(self, monkeypatch):
        monkeypatch.setenv(HASH_DELIMITER_ENV, "~")
        config = create_driver_config(delimiters_from_env=True)
        assert config.hash_delimiter == "~"

    def test_explicit_override_beats_env(self, monkeypatch):
        monkeypatch.setenv(HASH_DELIMITER_ENV, "~")
        config = create_driver_config(delimiters_from_env=True, hash_delimiter="|")
        assert config.hash_delimiter == "|"
