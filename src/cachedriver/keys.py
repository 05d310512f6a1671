"""
Compound Cache Keys
===================

A hash-stored value is addressed by a compound key ``bucket<delimiter>field``.
Only the trailing segment after the last delimiter is the field; the bucket
may itself contain the delimiter.

    >>> split_key("users#eu#123", "#")
    ('users#eu', '123')
    >>> compose_key("users", "123", "#")
    'users#123'
"""

from typing import Optional, Tuple

# Field name meaning "the whole bucket" (delete only)
WHOLE_BUCKET = "*"

# Separator tried when the configured delimiter is absent from the key
LEGACY_DELIMITER = ":"


def has_delimiter(key: str, delimiter: str) -> bool:
    """Return True if ``delimiter`` occurs anywhere in ``key``."""
    return bool(delimiter) and delimiter in key


def split_key(
    key: str, delimiter: str, legacy_fallback: bool = False
) -> Optional[Tuple[str, str]]:
    """
    Split a compound key into ``(bucket, field)``.

    Args:
        key: Compound cache key
        delimiter: Configured hash delimiter
        legacy_fallback: When the delimiter is absent, split on the last ``:``
            instead of giving up. A key without any ``:`` then maps to an
            empty bucket with the whole key as field.

    Returns:
        ``(bucket, field)``, or None if the key has no delimiter and
        ``legacy_fallback`` is off.
    """
    if has_delimiter(key, delimiter):
        bucket, _, field = key.rpartition(delimiter)
        return bucket, field

    if not legacy_fallback:
        return None

    bucket, _, field = key.rpartition(LEGACY_DELIMITER)
    return bucket, field


def compose_key(bucket: str, field: str, delimiter: str) -> str:
    """Build a compound key from its bucket and field."""
    return f"{bucket}{delimiter}{field}"


def is_whole_bucket(field: str) -> bool:
    return field == WHOLE_BUCKET
