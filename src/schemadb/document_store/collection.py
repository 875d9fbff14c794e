"""Collection entity for the in-memory document store."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

META_FIELD = "meta"
ROW_ID_FIELD = "$id"

_LOGGER = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Raised when the store cannot apply a write."""


class UniqueConstraintError(DocumentStoreError):
    """Raised when a write would duplicate a uniquely indexed value."""

    def __init__(self, collection_name: str, field: str, value: Any) -> None:
        super().__init__(
            f"Duplicate key for unique property '{field}' "
            f"in collection '{collection_name}': {value!r}"
        )
        self.collection_name = collection_name
        self.field = field
        self.value = value


class Collection:
    """Ordered set of documents with row identity, metadata and unique indexes."""

    def __init__(self, name: str, options: Mapping[str, Any] | None = None) -> None:
        resolved = dict(options or {})
        unique_names = tuple(resolved.pop("unique", None) or ())
        self.name = name
        self.ttl = {
            "age": resolved.pop("ttl", None),
            "ttl_interval": resolved.pop("ttl_interval", None),
        }
        self.options = resolved
        self.max_id = 0
        self._documents: dict[int, dict[str, Any]] = {}
        self._unique_indexes: dict[str, dict[Any, int]] = {}
        for field in unique_names:
            self.ensure_unique_index(field)

    @property
    def unique_names(self) -> tuple[str, ...]:
        return tuple(self._unique_indexes)

    def ensure_unique_index(self, field: str) -> None:
        """Create the unique index for `field` unless it already exists."""
        if field in self._unique_indexes:
            return
        index: dict[Any, int] = {}
        for row_id, document in self._documents.items():
            value = document.get(field)
            if value is None:
                continue
            key = _index_key(value)
            if key in index:
                raise UniqueConstraintError(self.name, field, value)
            index[key] = row_id
        self._unique_indexes[field] = index

    def insert(self, documents: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """Store new documents; a mapping returns one document, a sequence a list."""
        if isinstance(documents, Mapping):
            return self._insert_batch([documents])[0]
        return self._insert_batch(list(documents))

    def update(self, documents: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> Any:
        """Replace stored documents located by their row identity."""
        if isinstance(documents, Mapping):
            return self._update_batch([documents])[0]
        return self._update_batch(list(documents))

    def get(self, row_id: int) -> dict[str, Any] | None:
        document = self._documents.get(row_id)
        return copy.deepcopy(document) if document is not None else None

    def by_unique(self, field: str, value: Any) -> dict[str, Any] | None:
        """Return the document holding `value` in the unique index of `field`."""
        index = self._unique_indexes.get(field)
        if index is None:
            raise DocumentStoreError(
                f"Property '{field}' is not uniquely indexed in collection '{self.name}'."
            )
        row_id = index.get(_index_key(value))
        return self.get(row_id) if row_id is not None else None

    def find(self, query: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return copies of every document whose fields equal the query values."""
        criteria = dict(query or {})
        return [
            copy.deepcopy(document)
            for document in self._documents.values()
            if all(document.get(key) == value for key, value in criteria.items())
        ]

    def find_one(self, query: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        matches = self.find(query)
        return matches[0] if matches else None

    def count(self) -> int:
        return len(self._documents)

    def to_state(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "data": list(self._documents.values()),
            "unique_names": list(self.unique_names),
            "constraints": {
                "unique": {field: dict(index) for field, index in self._unique_indexes.items()},
            },
            "ttl": dict(self.ttl),
            "max_id": self.max_id,
            "options": dict(self.options),
        }

    def _insert_batch(self, documents: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
        prepared: list[dict[str, Any]] = []
        for document in documents:
            if not isinstance(document, Mapping):
                raise DocumentStoreError("Documents must be mappings.")
            if document.get(ROW_ID_FIELD) is not None:
                raise DocumentStoreError(
                    "Document is already in the collection, use update() instead."
                )
            prepared.append(copy.deepcopy(dict(document)))

        self._check_unique(prepared, replacing=())
        created = _now_millis()
        for document in prepared:
            self.max_id += 1
            document[ROW_ID_FIELD] = self.max_id
            document[META_FIELD] = {"revision": 0, "created": created, "version": 0}
            self._documents[self.max_id] = document
            self._index_document(document)
        _LOGGER.debug("Inserted %d document(s) into '%s'.", len(prepared), self.name)
        return [copy.deepcopy(document) for document in prepared]

    def _update_batch(self, documents: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
        prepared: list[dict[str, Any]] = []
        for document in documents:
            if not isinstance(document, Mapping):
                raise DocumentStoreError("Documents must be mappings.")
            row_id = document.get(ROW_ID_FIELD)
            if row_id not in self._documents:
                raise DocumentStoreError(
                    "Trying to update an unsynced document, insert it first."
                )
            prepared.append(copy.deepcopy(dict(document)))

        self._check_unique(prepared, replacing=tuple(doc[ROW_ID_FIELD] for doc in prepared))
        updated = _now_millis()
        for document in prepared:
            row_id = document[ROW_ID_FIELD]
            previous = self._documents[row_id]
            meta = dict(previous.get(META_FIELD) or {})
            meta["revision"] = meta.get("revision", 0) + 1
            meta["updated"] = updated
            document[META_FIELD] = meta
            self._unindex_document(previous)
            self._documents[row_id] = document
            self._index_document(document)
        _LOGGER.debug("Updated %d document(s) in '%s'.", len(prepared), self.name)
        return [copy.deepcopy(document) for document in prepared]

    def _check_unique(self, documents: list[dict[str, Any]], *, replacing: Iterable[int]) -> None:
        replaced = set(replacing)
        for field, index in self._unique_indexes.items():
            seen: set[Any] = set()
            for document in documents:
                value = document.get(field)
                if value is None:
                    continue
                key = _index_key(value)
                owner = index.get(key)
                taken_elsewhere = (
                    owner is not None
                    and owner != document.get(ROW_ID_FIELD)
                    and owner not in replaced
                )
                if key in seen or taken_elsewhere:
                    raise UniqueConstraintError(self.name, field, value)
                seen.add(key)

    def _index_document(self, document: Mapping[str, Any]) -> None:
        for field, index in self._unique_indexes.items():
            value = document.get(field)
            if value is not None:
                index[_index_key(value)] = document[ROW_ID_FIELD]

    def _unindex_document(self, document: Mapping[str, Any]) -> None:
        for field, index in self._unique_indexes.items():
            value = document.get(field)
            if value is not None:
                index.pop(_index_key(value), None)


def _index_key(value: Any) -> Any:
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def _now_millis() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)
