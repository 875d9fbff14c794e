"""Schema-enforcing models over an in-memory document store."""

import logging

from .database import Database
from .document_normalization import DocumentShapeError, NotNullConstraintError
from .document_store import DocumentStoreError, UniqueConstraintError
from .model_compilation import ReservedFieldError
from .model_registry import RedefinitionError
from .property_rules import TYPES, PropertyDeclarationError, PropertySpec
from .write_interception import Model

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "TYPES",
    "Database",
    "DocumentShapeError",
    "DocumentStoreError",
    "Model",
    "NotNullConstraintError",
    "PropertyDeclarationError",
    "PropertySpec",
    "RedefinitionError",
    "ReservedFieldError",
    "UniqueConstraintError",
]
