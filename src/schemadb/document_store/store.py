"""In-memory document store holding named collections."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .collection import Collection, DocumentStoreError
from .snapshot_encoding import KeyFilter, encode_snapshot

_LOGGER = logging.getLogger(__name__)


class DocumentStore:
    """Owner of every collection; snapshot state mirrors the attributes below."""

    def __init__(self, filename: str = "schemadb.json", options: Mapping[str, Any] | None = None):
        self.filename = filename
        self.options = dict(options or {})
        self.collections: dict[str, Collection] = {}
        # Persistence runs outside this store; these keep the snapshot shape stable.
        self.persistence_adapter = self.options.pop("adapter", None)
        self.autosave_handle: Any = None
        self.throttled_save_pending = False
        self.throttled_callbacks: list[Any] = []

    def get_collection(self, name: str) -> Collection | None:
        return self.collections.get(name)

    def add_collection(self, name: str, options: Mapping[str, Any] | None = None) -> Collection:
        if name in self.collections:
            raise DocumentStoreError(f"Collection '{name}' already exists.")
        collection = Collection(name, options)
        self.collections[name] = collection
        _LOGGER.debug("Created collection '%s'.", name)
        return collection

    def create_or_get_collection(
        self, name: str, options: Mapping[str, Any] | None = None
    ) -> Collection:
        """Return the collection named `name`, creating it on first request."""
        existing = self.collections.get(name)
        if existing is None:
            return self.add_collection(name, options)
        for field in (options or {}).get("unique", None) or ():
            existing.ensure_unique_index(field)
        return existing

    def to_state(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "collections": list(self.collections.values()),
            "options": dict(self.options),
            "persistence_adapter": self.persistence_adapter,
            "autosave_handle": self.autosave_handle,
            "throttled_save_pending": self.throttled_save_pending,
            "throttled_callbacks": list(self.throttled_callbacks),
        }

    def serialize(self, key_filter: KeyFilter | None = None) -> str:
        return encode_snapshot(self.to_state(), key_filter=key_filter)
