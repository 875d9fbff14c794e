"""Compilation of raw property declarations into property rules."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .coercions import coerce_any
from .rule_models import PropertyRule, PropertySpec

_SPEC_KEYS = frozenset({"type", "allow_null", "default_value", "unique"})


class PropertyDeclarationError(Exception):
    """Raised when a property declaration is neither a coercion nor a spec."""


def compile_property_rule(declaration: Any) -> PropertyRule:
    """Return the rule for a bare coercion, a PropertySpec or a spec mapping."""
    if isinstance(declaration, PropertySpec):
        return _rule_from_spec(declaration)
    if isinstance(declaration, Mapping):
        return _rule_from_spec(_spec_from_mapping(declaration))
    if callable(declaration):
        # Short form: coercion only, nullable, no default, not unique.
        return PropertyRule(coercion=declaration, not_null=False, default_value=None, unique=False)
    raise PropertyDeclarationError(
        f"Property declaration must be a coercion or a property spec, got {declaration!r}."
    )


def _spec_from_mapping(declaration: Mapping[str, Any]) -> PropertySpec:
    unknown = sorted(str(key) for key in declaration if key not in _SPEC_KEYS)
    if unknown:
        raise PropertyDeclarationError(f"Unknown property spec keys: {', '.join(unknown)}")
    return PropertySpec(
        type=declaration.get("type") or coerce_any,
        allow_null=declaration.get("allow_null", True),
        default_value=declaration.get("default_value"),
        unique=declaration.get("unique", False),
    )


def _rule_from_spec(spec: PropertySpec) -> PropertyRule:
    coercion = spec.type if spec.type is not None else coerce_any
    if not callable(coercion):
        raise PropertyDeclarationError(f"Property type must be callable, got {coercion!r}.")
    return PropertyRule(
        coercion=coercion,
        not_null=spec.allow_null is False,
        default_value=spec.default_value,
        unique=bool(spec.unique),
    )
