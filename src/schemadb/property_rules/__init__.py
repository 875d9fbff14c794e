"""Property rule exports."""

from .coercions import TYPES, CoercionTypes
from .rule_compiler import PropertyDeclarationError, compile_property_rule
from .rule_models import Coercion, PropertyRule, PropertySpec

__all__ = [
    "TYPES",
    "Coercion",
    "CoercionTypes",
    "PropertyDeclarationError",
    "PropertyRule",
    "PropertySpec",
    "compile_property_rule",
]
