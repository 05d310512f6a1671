"""
Payload Serialization
=====================

Turns cached values into compressed bytes and back.

Values are first encoded structurally (pickle, or JSON through orjson) and
then compressed with blosc2. Which encoding applies is a property of the
driver configuration, not of the individual value: callers decide up front
whether they cache arbitrary Python objects (pickle) or plain JSON-compatible
data and dataclasses (json).
"""

import logging
import pickle
from typing import Any, Optional

import blosc2
import orjson

from .config import CompressionConfig, SerializationConfig
from .error_handling import CacheDecodeError, CacheSerializationError

logger = logging.getLogger(__name__)

_CODEC_MAP = {
    "zstd": blosc2.Codec.ZSTD,
    "lz4": blosc2.Codec.LZ4,
    "lz4hc": blosc2.Codec.LZ4HC,
    "zlib": blosc2.Codec.ZLIB,
    "blosclz": blosc2.Codec.BLOSCLZ,
}


class PayloadCodec:
    """Encode/compress values for the store and decompress/decode them back."""

    def __init__(
        self,
        compression: Optional[CompressionConfig] = None,
        serialization: Optional[SerializationConfig] = None,
    ):
        self.compression = compression or CompressionConfig()
        self.serialization = serialization or SerializationConfig()
        self._codec = _CODEC_MAP[self.compression.codec]

    def _encode(self, value: Any) -> bytes:
        if self.serialization.format == "json":
            return orjson.dumps(value)
        return pickle.dumps(value, self.serialization.pickle_protocol)

    def _decode(self, data: bytes) -> Any:
        if self.serialization.format == "json":
            return orjson.loads(data)
        return pickle.loads(data)

    def serialize(self, value: Any) -> bytes:
        """
        Encode and compress a value.

        Raises:
            CacheSerializationError: If the value cannot be encoded
        """
        try:
            raw = self._encode(value)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise CacheSerializationError(
                f"Failed to encode value: {e}",
                {
                    "value_type": type(value).__name__,
                    "format": self.serialization.format,
                },
            ) from e

        # typesize=1: pickle/JSON output is a plain byte stream
        payload = blosc2.compress(
            raw,
            typesize=1,
            clevel=self.compression.clevel,
            filter=blosc2.Filter.NOFILTER,
            codec=self._codec,
        )
        logger.debug(
            f"Serialized {type(value).__name__}: {len(raw)} -> {len(payload)} bytes"
        )
        return payload

    def unserialize(self, data: Optional[bytes]) -> Any:
        """
        Decompress and decode a stored payload.

        Returns None for a missing or empty payload without touching the
        decompressor.

        Raises:
            CacheDecodeError: If the payload is corrupt or truncated
        """
        if not data:
            return None

        try:
            raw = blosc2.decompress(data)
        except Exception as e:
            raise CacheDecodeError(
                f"Failed to decompress payload: {e}", {"payload_size": len(data)}
            ) from e

        try:
            return self._decode(raw)
        except Exception as e:
            raise CacheDecodeError(
                f"Failed to decode payload: {e}",
                {"payload_size": len(data), "format": self.serialization.format},
            ) from e


_default_codec = PayloadCodec()


def serialize(value: Any) -> bytes:
    """Encode and compress a value with the default codec."""
    return _default_codec.serialize(value)


def unserialize(data: Optional[bytes]) -> Any:
    """Decompress and decode a payload with the default codec."""
    return _default_codec.unserialize(data)
