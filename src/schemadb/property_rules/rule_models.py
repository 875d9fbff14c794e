"""Property rule entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .coercions import coerce_any

Coercion = Callable[[Any], Any]


@dataclass(frozen=True)
class PropertySpec:
    """Full property declaration; a bare coercion is the short form."""

    type: Coercion = coerce_any
    allow_null: bool = True
    default_value: Any = None
    unique: bool = False


@dataclass(frozen=True)
class PropertyRule:
    """Compiled contract for one declared property."""

    coercion: Coercion
    not_null: bool
    default_value: Any
    unique: bool
