"""Schema-aware model write tests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import pytest
from schemadb.document_normalization import NotNullConstraintError
from schemadb.document_store import Collection, UniqueConstraintError
from schemadb.model_compilation import ModelOptions, compile_model_definition
from schemadb.property_rules import TYPES
from schemadb.write_interception import Model


def _model(declaration: Mapping[str, Any], *, allow_extra_properties: bool = False) -> Model:
    definition = compile_model_definition(
        "people", declaration, ModelOptions(allow_extra_properties=allow_extra_properties)
    )
    collection = Collection("people", {"unique": definition.unique_properties})
    return Model(replace(definition, store_handle=collection))


_PEOPLE = {
    "name": TYPES.STRING,
    "age": {"type": TYPES.INTEGER, "allow_null": False},
}


def test_single_insert_stores_normalized_document() -> None:
    people = _model(_PEOPLE)

    stored = people.insert({"name": "Ada", "age": "36", "extra": 1})

    assert stored["name"] == "Ada"
    assert stored["age"] == 36
    assert "extra" not in stored
    assert stored["$id"] == 1
    assert people.count() == 1
    assert people.get(1) == stored


def test_batch_insert_returns_every_stored_document() -> None:
    people = _model(_PEOPLE)

    stored = people.insert([{"age": 1}, {"age": "2"}])

    assert [document["age"] for document in stored] == [1, 2]
    assert people.count() == 2


def test_batch_insert_is_all_or_nothing() -> None:
    people = _model(_PEOPLE)
    people.insert({"age": 1})

    with pytest.raises(NotNullConstraintError):
        people.insert([{"age": "10"}, {"age": None}, {"age": "20"}])

    assert people.count() == 1
    assert people.find({"age": 10}) == []


def test_store_errors_propagate_unchanged() -> None:
    people = _model({"email": {"type": TYPES.STRING, "unique": True}})
    people.insert({"email": "ada@example.com"})

    with pytest.raises(UniqueConstraintError):
        people.insert({"email": "ada@example.com"})


def test_single_update_normalizes_and_keeps_identity() -> None:
    people = _model(_PEOPLE)
    stored = people.insert({"name": "Ada", "age": 36})

    updated = people.update({**stored, "age": "37", "extra": "dropped"})

    assert updated["age"] == 37
    assert "extra" not in updated
    assert updated["$id"] == stored["$id"]
    assert updated["meta"]["revision"] == 1
    assert people.get(stored["$id"])["age"] == 37


def test_single_update_without_defaults_drops_missing_properties() -> None:
    people = _model({"name": TYPES.STRING, "status": {"default_value": "new"}})
    stored = people.insert({"name": "Ada"})

    updated = people.update({"$id": stored["$id"], "meta": stored["meta"], "name": "Grace"})

    assert "status" not in updated
    assert updated["name"] == "Grace"


def test_single_update_rejects_null_for_not_null_property() -> None:
    people = _model(_PEOPLE)
    stored = people.insert({"age": 36})

    with pytest.raises(NotNullConstraintError):
        people.update({**stored, "age": None})

    assert people.get(stored["$id"])["age"] == 36


def test_batch_update_is_forwarded_without_normalization() -> None:
    people = _model(_PEOPLE)
    stored = people.insert({"age": 36})

    people.update([{**stored, "age": "not-a-number", "extra": True}])

    raw = people.get(stored["$id"])
    assert raw["age"] == "not-a-number"
    assert raw["extra"] is True


def test_non_strict_model_keeps_extra_properties_on_update() -> None:
    people = _model(_PEOPLE, allow_extra_properties=True)
    stored = people.insert({"age": 1, "nickname": "A"})

    updated = people.update({**stored, "nickname": "B"})

    assert updated["nickname"] == "B"


def test_read_passthroughs_return_store_results() -> None:
    people = _model(_PEOPLE)
    people.insert([{"name": "Ada", "age": 36}, {"name": "Grace", "age": 45}])

    assert [document["name"] for document in people.find()] == ["Ada", "Grace"]
    assert people.find_one({"age": 45})["name"] == "Grace"
    assert people.find_one({"age": 99}) is None
    assert people.collection.count() == 2
    assert people.name == "people"


def test_model_requires_a_bound_collection() -> None:
    definition = compile_model_definition("people", _PEOPLE, ModelOptions())

    with pytest.raises(ValueError, match="no store collection"):
        Model(definition)
