"""Schema-aware model bound to one store collection."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from schemadb.document_normalization import normalize_document, normalize_update_document
from schemadb.document_store import Collection
from schemadb.model_compilation import ModelDefinition

_LOGGER = logging.getLogger(__name__)


class Model:
    """Write entry points that normalize documents before calling the collection."""

    def __init__(self, definition: ModelDefinition) -> None:
        if definition.store_handle is None:
            raise ValueError(f"Model '{definition.name}' has no store collection bound.")
        self._definition = definition
        self._collection: Collection = definition.store_handle

    @property
    def name(self) -> str:
        return self._definition.name

    @property
    def definition(self) -> ModelDefinition:
        return self._definition

    @property
    def collection(self) -> Collection:
        return self._collection

    def insert(self, documents: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """Insert one document or a batch; nothing is stored unless every document is valid."""
        if isinstance(documents, Mapping):
            return self._collection.insert(normalize_document(self._definition, documents))

        normalized = [normalize_document(self._definition, document) for document in documents]
        _LOGGER.debug("Inserting %d normalized document(s) into '%s'.", len(normalized), self.name)
        return self._collection.insert(normalized)

    def update(self, documents: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """Update one document, or forward a batch to the collection as given.

        Batches skip coercion and not-null validation entirely.
        """
        if not isinstance(documents, Mapping):
            return self._collection.update(documents)
        return self._collection.update(normalize_update_document(self._definition, documents))

    def get(self, row_id: int) -> dict[str, Any] | None:
        return self._collection.get(row_id)

    def find(self, query: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        return self._collection.find(query)

    def find_one(self, query: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        return self._collection.find_one(query)

    def count(self) -> int:
        return self._collection.count()

    def __repr__(self) -> str:
        return f"Model(name={self.name!r}, properties={self._definition.property_names!r})"
