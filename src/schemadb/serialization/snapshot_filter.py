"""Key filter applied by the store's snapshot serializer."""

from __future__ import annotations

from typing import Any

from schemadb.document_store import OMIT

# Runtime handles: kept in the snapshot shape, but written as null.
NULLED_KEYS = frozenset({"autosave_handle", "persistence_adapter", "constraints", "ttl"})

# Schema layer bookkeeping and save scheduling state: left out entirely.
OMITTED_KEYS = frozenset({"models", "types", "throttled_save_pending", "throttled_callbacks"})


def serialization_filter(key: str, value: Any) -> Any:
    if key in NULLED_KEYS:
        return None
    if key in OMITTED_KEYS:
        return OMIT
    return value
