"""Document normalization exports."""

from .normalizer import (
    DocumentShapeError,
    NotNullConstraintError,
    normalize_document,
    normalize_update_document,
)

__all__ = [
    "DocumentShapeError",
    "NotNullConstraintError",
    "normalize_document",
    "normalize_update_document",
]
