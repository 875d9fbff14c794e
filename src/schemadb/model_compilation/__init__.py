"""Model compilation exports."""

from .model_compiler import (
    RESERVED_FIELDS,
    ReservedFieldError,
    check_reserved_fields,
    compile_model_definition,
    resolve_model_options,
)
from .model_definitions import ModelDefinition, ModelOptions

__all__ = [
    "RESERVED_FIELDS",
    "ModelDefinition",
    "ModelOptions",
    "ReservedFieldError",
    "check_reserved_fields",
    "compile_model_definition",
    "resolve_model_options",
]
