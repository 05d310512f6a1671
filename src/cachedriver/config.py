"""
Configuration Management for cachedriver
========================================

Configuration is split into focused sub-configurations, one per concern.
Delimiters are immutable once built; the driver receives them at construction
instead of reading process-wide globals.
"""

import logging
import os
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

HASH_DELIMITER_ENV = "CACHEDRIVER_HASH_DELIMITER"
STRING_DELIMITER_ENV = "CACHEDRIVER_STRING_DELIMITER"

# Upper bound on fields sent in a single HMGET round trip
DEFAULT_MAX_HMGET_LIMIT = 50


@dataclass(frozen=True)
class DelimiterConfig:
    """Separators used to build compound cache keys."""

    hash_delimiter: str = "#"  # bucket/field separator for hash storage
    string_delimiter: str = ":"  # separator for flat string keys

    def __post_init__(self):
        """Validate delimiters."""
        if not self.hash_delimiter:
            raise ValueError("hash_delimiter must be a non-empty string")
        if not self.string_delimiter:
            raise ValueError("string_delimiter must be a non-empty string")

        logger.debug(
            f"Delimiters configured: hash={self.hash_delimiter!r}, "
            f"string={self.string_delimiter!r}"
        )

    @classmethod
    def from_env(cls) -> "DelimiterConfig":
        """Build delimiters from the environment, falling back to defaults."""
        defaults = cls.__dataclass_fields__
        return cls(
            hash_delimiter=os.getenv(
                HASH_DELIMITER_ENV, defaults["hash_delimiter"].default
            ),
            string_delimiter=os.getenv(
                STRING_DELIMITER_ENV, defaults["string_delimiter"].default
            ),
        )


@dataclass
class CompressionConfig:
    """Configuration for payload compression."""

    codec: str = "zstd"  # zstd, lz4, lz4hc, zlib, blosclz
    clevel: int = 7  # 0-9

    def __post_init__(self):
        """Validate compression configuration."""
        valid_codecs = {"zstd", "lz4", "lz4hc", "zlib", "blosclz"}
        if self.codec not in valid_codecs:
            raise ValueError(f"codec must be one of {valid_codecs}")

        if not (0 <= self.clevel <= 9):
            raise ValueError("clevel must be between 0 and 9")

        logger.debug(f"Compression configured: {self.codec}@{self.clevel}")


@dataclass
class SerializationConfig:
    """Configuration for structural encoding of cached values."""

    format: str = "pickle"  # pickle, json
    pickle_protocol: int = -1

    def __post_init__(self):
        """Validate serialization configuration."""
        if self.format not in ("pickle", "json"):
            raise ValueError(f"Invalid serialization format: {self.format}")

        logger.debug(f"Serialization configured: format={self.format}")


@dataclass
class DriverConfig:
    """Main configuration combining all driver sub-configurations."""

    delimiters: DelimiterConfig = field(default_factory=DelimiterConfig)
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    max_hmget_limit: int = DEFAULT_MAX_HMGET_LIMIT

    def __post_init__(self):
        """Validate overall configuration consistency."""
        if self.max_hmget_limit <= 0:
            raise ValueError("max_hmget_limit must be positive")

        logger.debug(f"Driver configured: max_hmget_limit={self.max_hmget_limit}")

    @property
    def hash_delimiter(self) -> str:
        return self.delimiters.hash_delimiter

    @property
    def string_delimiter(self) -> str:
        return self.delimiters.string_delimiter


def create_driver_config(
    delimiters_from_env: bool = False,
    **overrides,
) -> DriverConfig:
    """
    Factory function for creating driver configurations.

    Args:
        delimiters_from_env: If True, read delimiters from the environment
        **overrides: Values for any sub-configuration parameter, e.g.
            ``hash_delimiter="|"``, ``clevel=3`` or ``format="json"``

    Returns:
        Configured DriverConfig instance
    """
    delimiters = DelimiterConfig.from_env() if delimiters_from_env else DelimiterConfig()

    delimiter_overrides = {}
    compression_overrides = {}
    serialization_overrides = {}
    max_hmget_limit = overrides.pop("max_hmget_limit", DEFAULT_MAX_HMGET_LIMIT)

    for key, value in overrides.items():
        if key in DelimiterConfig.__dataclass_fields__:
            delimiter_overrides[key] = value
        elif key in CompressionConfig.__dataclass_fields__:
            compression_overrides[key] = value
        elif key in SerializationConfig.__dataclass_fields__:
            serialization_overrides[key] = value
        else:
            logger.warning(f"Unknown configuration parameter ignored: {key}")

    if delimiter_overrides:
        # DelimiterConfig is frozen
        delimiters = replace(delimiters, **delimiter_overrides)

    return DriverConfig(
        delimiters=delimiters,
        compression=CompressionConfig(**compression_overrides),
        serialization=SerializationConfig(**serialization_overrides),
        max_hmget_limit=max_hmget_limit,
    )
