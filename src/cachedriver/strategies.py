"""
Strategy Resolution
===================

Decides which store operation backs a get/set/delete call.

A caller describes intent through ``StrategyParams``:

- ``strategy``: ``"string"`` (flat keys), ``"hash"`` / ``"table"`` (bucketed
  hash storage), or one of the legacy operation names (``getValue``,
  ``getHValue``, ``getHValues``, ``getAllHash``, ``setex``, ``hset``,
  ``del``, ``hdel``)
- ``fields``: field names for a multi-field hash read
- ``force_strategy``: operation name that overrides whatever was inferred

Resolution only picks an ``Operation``; each driver maps operations to its
own handlers and rejects operations it has no handler for.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .config import DelimiterConfig
from .error_handling import CacheConfigurationError
from .keys import has_delimiter

logger = logging.getLogger(__name__)


class Strategy(str, Enum):
    """Storage shape requested by the caller."""

    STRING = "string"
    HASH = "hash"
    TABLE = "table"


class Operation(str, Enum):
    """Store operations a driver can execute.

    Values are the legacy operation names accepted as ``strategy``.
    """

    GET_VALUE = "getValue"
    GET_H_VALUE = "getHValue"
    GET_H_VALUES = "getHValues"
    GET_ALL_HASH = "getAllHash"
    SETEX = "setex"
    HSET = "hset"
    DEL = "del"
    HDEL = "hdel"


GET_OPERATIONS = frozenset(
    {
        Operation.GET_VALUE,
        Operation.GET_H_VALUE,
        Operation.GET_H_VALUES,
        Operation.GET_ALL_HASH,
    }
)
SET_OPERATIONS = frozenset({Operation.SETEX, Operation.HSET})
DELETE_OPERATIONS = frozenset({Operation.DEL, Operation.HDEL})

HASH_STRATEGIES = frozenset({Strategy.HASH.value, Strategy.TABLE.value})

# Names whose keys are built with the hash delimiter
HASH_SHAPED_NAMES = HASH_STRATEGIES | {
    Operation.GET_ALL_HASH.value,
    Operation.GET_H_VALUE.value,
    Operation.GET_H_VALUES.value,
    Operation.HSET.value,
    Operation.HDEL.value,
}

_STRATEGY_NAMES = frozenset(s.value for s in Strategy)
_OPERATION_NAMES = frozenset(o.value for o in Operation)


@dataclass(frozen=True)
class StrategyParams:
    """Per-call strategy hints."""

    strategy: Optional[str] = None
    fields: Tuple[str, ...] = ()
    force_strategy: Optional[str] = None

    @classmethod
    def from_mapping(
        cls, params: Union["StrategyParams", Mapping[str, Any], None]
    ) -> "StrategyParams":
        """Build params from a mapping such as ``{"strategy": "hash"}``."""
        if params is None:
            return cls()
        if isinstance(params, StrategyParams):
            return params

        fields: Iterable[Any] = params.get("fields") or ()
        if isinstance(fields, str):
            # A single field name, not a sequence of characters
            fields = (fields,)
        return cls(
            strategy=_enum_value(params.get("strategy")),
            fields=tuple(str(f) for f in fields),
            force_strategy=_enum_value(params.get("force_strategy")),
        )


def _enum_value(name: Any) -> Optional[str]:
    if name is None or name == "":
        return None
    if isinstance(name, Enum):
        return name.value
    return str(name)


def _check_known(name: Optional[str], param: str) -> None:
    if name is not None and name not in _STRATEGY_NAMES | _OPERATION_NAMES:
        raise CacheConfigurationError(
            f"Unknown {param}: {name!r}", {param: name}
        )


def _to_operation(name: str, allowed: frozenset, kind: str) -> Operation:
    try:
        operation = Operation(name)
    except ValueError:
        operation = None

    if operation not in allowed:
        raise CacheConfigurationError(
            f"No {kind} handler registered for operation {name!r}",
            {"operation": name, "kind": kind},
        )
    return operation


def resolve_get_operation(
    key: str, params: StrategyParams, hash_delimiter: str
) -> Operation:
    """
    Choose the read operation for ``key``.

    - ``string``: plain value read
    - ``hash``/``table``: multi-field read when fields are given, single
      field read when the key carries the hash delimiter, whole bucket
      otherwise
    - no strategy or a legacy name: ``getAllHash`` is kept; otherwise fields
      promote to ``getHValues`` and a delimited key to ``getHValue``; the
      default is ``getValue``
    - ``force_strategy`` overrides all of the above

    Raises:
        CacheConfigurationError: If a name is unknown or not a read operation
    """
    _check_known(params.strategy, "strategy")
    _check_known(params.force_strategy, "force_strategy")

    strategy = params.strategy
    delimited = has_delimiter(key, hash_delimiter)

    if strategy == Strategy.STRING.value:
        name = Operation.GET_VALUE.value
    elif strategy in HASH_STRATEGIES:
        if params.fields:
            name = Operation.GET_H_VALUES.value
        elif delimited:
            name = Operation.GET_H_VALUE.value
        else:
            name = Operation.GET_ALL_HASH.value
    else:
        name = strategy or Operation.GET_VALUE.value
        if name != Operation.GET_ALL_HASH.value:
            if params.fields and name != Operation.GET_H_VALUES.value:
                name = Operation.GET_H_VALUES.value
            elif delimited and name != Operation.GET_H_VALUE.value:
                name = Operation.GET_H_VALUE.value

    if params.force_strategy is not None:
        name = params.force_strategy

    operation = _to_operation(name, GET_OPERATIONS, "get")
    logger.debug(f"Resolved get {key!r} -> {operation.value}")
    return operation


def resolve_set_operation(params: StrategyParams) -> Operation:
    """
    Choose the write operation: ``setex`` for strings, ``hset`` for hashes
    and by default. Legacy names ``setex``/``hset`` are used directly.

    Raises:
        CacheConfigurationError: If the strategy is not a write operation
    """
    _check_known(params.strategy, "strategy")

    strategy = params.strategy
    if strategy == Strategy.STRING.value:
        name = Operation.SETEX.value
    elif strategy in HASH_STRATEGIES or strategy is None:
        name = Operation.HSET.value
    else:
        name = strategy

    return _to_operation(name, SET_OPERATIONS, "set")


def resolve_delete_operation(params: StrategyParams) -> Operation:
    """
    Choose the delete operation: ``del`` for strings, ``hdel`` for hashes
    and by default. Legacy names ``del``/``hdel`` are used directly.

    Raises:
        CacheConfigurationError: If the strategy is not a delete operation
    """
    _check_known(params.strategy, "strategy")

    strategy = params.strategy
    if strategy == Strategy.STRING.value:
        name = Operation.DEL.value
    elif strategy in HASH_STRATEGIES or strategy is None:
        name = Operation.HDEL.value
    else:
        name = strategy

    return _to_operation(name, DELETE_OPERATIONS, "delete")


def id_postfix_for_strategy(
    params: Union[StrategyParams, Mapping[str, Any], None] = None,
    delimiters: Optional[DelimiterConfig] = None,
) -> str:
    """
    Delimiter to append to a key prefix before the record id.

    Lets callers build keys that match the storage shape they will read
    with: hash-shaped strategies use the hash delimiter, everything else
    (including no strategy) the string delimiter.
    """
    params = StrategyParams.from_mapping(params)
    delimiters = delimiters or DelimiterConfig()

    if params.strategy in HASH_SHAPED_NAMES:
        return delimiters.hash_delimiter
    return delimiters.string_delimiter
