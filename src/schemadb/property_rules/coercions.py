"""Built-in property coercions.

Every coercion maps ``None`` to ``None`` (except ``ANY``, which returns its
input untouched) and never raises: input that cannot be converted becomes
``math.nan`` for the numeric coercions and ``None`` for ``DATE``. Integers too
large for a float become signed infinity under ``FLOAT``.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any


def coerce_any(value: Any) -> Any:
    return value


def coerce_integer(value: Any) -> int | float | None:
    """Parse `value` as a number and truncate it toward zero."""
    if value is None:
        return None
    number = _to_number(value)
    if isinstance(number, int):
        return number
    if not math.isfinite(number):
        return math.nan
    return math.trunc(number)


def coerce_float(value: Any) -> float | None:
    if value is None:
        return None
    return _to_float(_to_number(value))


def coerce_string(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def coerce_boolean(value: Any) -> bool | None:
    if value is None:
        return None
    return bool(value)


def coerce_date(value: Any) -> datetime | None:
    """Return `value` as a datetime; numbers are epoch milliseconds in UTC."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (Decimal, numbers.Real)):
        return _to_float(value)
    if isinstance(value, datetime):
        return round(value.timestamp() * 1000)
    if isinstance(value, str):
        return _parse_numeric_text(value)
    return math.nan


def _to_float(number: Any) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf
    except ValueError:
        return math.nan


def _parse_numeric_text(text: str) -> int | float:
    stripped = text.strip()
    if not stripped:
        return 0
    if "_" in stripped:
        return math.nan
    try:
        return int(stripped, 0)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return math.nan


class CoercionTypes:
    """Table of built-in coercions, addressable by attribute or by name."""

    ANY = staticmethod(coerce_any)
    INTEGER = staticmethod(coerce_integer)
    FLOAT = staticmethod(coerce_float)
    STRING = staticmethod(coerce_string)
    BOOLEAN = staticmethod(coerce_boolean)
    DATE = staticmethod(coerce_date)

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return ("ANY", "INTEGER", "FLOAT", "STRING", "BOOLEAN", "DATE")

    @classmethod
    def by_name(cls, name: str) -> Callable[[Any], Any]:
        """Resolve a coercion by case-insensitive name."""
        normalized = name.strip().upper()
        if normalized not in cls.names():
            raise KeyError(f"Unknown coercion type: {name}")
        return getattr(cls, normalized)

    @classmethod
    def as_mapping(cls) -> Mapping[str, Callable[[Any], Any]]:
        return {name: getattr(cls, name) for name in cls.names()}


TYPES = CoercionTypes
