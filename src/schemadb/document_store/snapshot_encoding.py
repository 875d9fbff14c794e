"""Snapshot encoding for store state trees."""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any


class _Omit(Enum):
    OMIT = "omit"


OMIT = _Omit.OMIT
"""Returned by a key filter to leave the key out of the snapshot."""

KeyFilter = Callable[[str, Any], Any]


def encode_snapshot(state: Mapping[str, Any], key_filter: KeyFilter | None = None) -> str:
    """Encode a state tree as JSON, passing every mapping entry through `key_filter`.

    Non-finite floats are written as ``null``.
    """
    return json.dumps(_encode_value(state, key_filter), allow_nan=False)


def _encode_value(value: Any, key_filter: KeyFilter | None) -> Any:
    if isinstance(value, Mapping):
        return _encode_mapping(value, key_filter)
    if isinstance(value, (list, tuple)):
        encoded_items = (_encode_value(item, key_filter) for item in value)
        return [None if item is OMIT else item for item in encoded_items]
    if isinstance(value, (set, frozenset)):
        return sorted((_encode_value(item, key_filter) for item in value), key=repr)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    to_state = getattr(value, "to_state", None)
    if callable(to_state):
        return _encode_value(to_state(), key_filter)
    if callable(value):
        return OMIT
    return str(value)


def _encode_mapping(value: Mapping[Any, Any], key_filter: KeyFilter | None) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = str(raw_key)
        filtered = key_filter(key, item) if key_filter is not None else item
        if filtered is OMIT:
            continue
        encoded_item = _encode_value(filtered, key_filter)
        if encoded_item is OMIT:
            continue
        encoded[key] = encoded_item
    return encoded
