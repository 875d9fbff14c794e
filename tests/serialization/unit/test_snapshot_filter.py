"""Serialization filter tests."""

from __future__ import annotations

import pytest
from schemadb.document_store import OMIT
from schemadb.serialization import NULLED_KEYS, OMITTED_KEYS, serialization_filter


@pytest.mark.parametrize(
    "key", ["autosave_handle", "persistence_adapter", "constraints", "ttl"]
)
def test_runtime_handles_are_nulled(key: str) -> None:
    assert serialization_filter(key, object()) is None


@pytest.mark.parametrize(
    "key", ["models", "types", "throttled_save_pending", "throttled_callbacks"]
)
def test_schema_bookkeeping_is_omitted(key: str) -> None:
    assert serialization_filter(key, {"anything": 1}) is OMIT


def test_other_keys_pass_through_unchanged() -> None:
    value = {"name": "people"}

    assert serialization_filter("collections", value) is value
    assert serialization_filter("data", None) is None


def test_key_sets_do_not_overlap() -> None:
    assert not NULLED_KEYS & OMITTED_KEYS
