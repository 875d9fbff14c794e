"""In-memory document store exports."""

from .collection import (
    META_FIELD,
    ROW_ID_FIELD,
    Collection,
    DocumentStoreError,
    UniqueConstraintError,
)
from .snapshot_encoding import OMIT, KeyFilter, encode_snapshot
from .store import DocumentStore

__all__ = [
    "META_FIELD",
    "OMIT",
    "ROW_ID_FIELD",
    "Collection",
    "DocumentStore",
    "DocumentStoreError",
    "KeyFilter",
    "UniqueConstraintError",
    "encode_snapshot",
]
