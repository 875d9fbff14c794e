"""Snapshot encoding tests."""

from __future__ import annotations

import json
import math
from datetime import UTC, datetime

from schemadb.document_store import OMIT, Collection, DocumentStore, encode_snapshot


def test_key_filter_is_applied_at_every_level() -> None:
    state = {"keep": 1, "drop": 2, "nested": {"drop": 3, "blank": "x"}}

    def key_filter(key: str, value: object) -> object:
        if key == "drop":
            return OMIT
        if key == "blank":
            return None
        return value

    assert json.loads(encode_snapshot(state, key_filter)) == {
        "keep": 1,
        "nested": {"blank": None},
    }


def test_datetimes_callables_and_state_objects_are_encoded() -> None:
    collection = Collection("items")
    collection.insert({"when": datetime(2024, 1, 2, tzinfo=UTC)})
    state = {"collection": collection, "hook": print, "hooks": [print]}

    snapshot = json.loads(encode_snapshot(state))

    assert "hook" not in snapshot
    assert snapshot["hooks"] == [None]
    assert snapshot["collection"]["name"] == "items"
    assert snapshot["collection"]["data"][0]["when"] == "2024-01-02T00:00:00+00:00"


def test_store_serialize_without_filter_keeps_every_key() -> None:
    store = DocumentStore("test.json", {"adapter": "memory"})
    store.add_collection("items", {"unique": ["sku"]}).insert({"sku": "a"})

    snapshot = json.loads(store.serialize())

    assert snapshot["filename"] == "test.json"
    assert snapshot["persistence_adapter"] == "memory"
    assert snapshot["throttled_save_pending"] is False
    assert snapshot["collections"][0]["constraints"]["unique"]["sku"] == {"a": 1}


def test_non_finite_floats_are_written_as_null() -> None:
    collection = Collection("readings")
    collection.insert({"value": math.nan, "peak": math.inf, "low": -math.inf, "mean": 1.5})

    snapshot = encode_snapshot({"collection": collection, "values": [math.nan, 2.0]})

    assert "NaN" not in snapshot
    assert "Infinity" not in snapshot
    decoded = json.loads(snapshot)
    document = decoded["collection"]["data"][0]
    assert document["value"] is None
    assert document["peak"] is None
    assert document["low"] is None
    assert document["mean"] == 1.5
    assert decoded["values"] == [None, 2.0]
