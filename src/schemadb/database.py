"""Database facade: model declaration over an in-memory document store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from schemadb.configuration import Configuration
from schemadb.document_store import DocumentStore, encode_snapshot
from schemadb.model_compilation import (
    ModelOptions,
    compile_model_definition,
    resolve_model_options,
)
from schemadb.model_registry import ModelRegistry, RedefinitionError
from schemadb.property_rules import TYPES
from schemadb.serialization import serialization_filter
from schemadb.write_interception import Model

_LOGGER = logging.getLogger(__name__)


class Database:
    """Owns one document store and the registry of models declared on it.

    Example::

        db = Database("inventory.json")
        users = db.define(
            "users",
            {
                "age": db.TYPES.INTEGER,
                "email": {"type": db.TYPES.STRING, "allow_null": False, "unique": True},
            },
        )
        users.insert({"age": "30", "email": "ada@example.com"})
    """

    TYPES = TYPES

    def __init__(self, filename: str = "schemadb.json", options: Mapping[str, Any] | None = None):
        self.store = DocumentStore(filename, options)
        self.models = ModelRegistry()

    @property
    def filename(self) -> str:
        return self.store.filename

    def define(
        self,
        name: str,
        declaration: Mapping[str, Any],
        options: ModelOptions | bool | Mapping[str, Any] | None = None,
    ) -> Model:
        """Declare model `name` and return it bound to its collection.

        `options` is either a boolean (allow undeclared properties on write)
        or a mapping of collection options plus ``allow_extra_properties``.
        """
        if name in self.models:
            raise RedefinitionError(name)
        model_options = resolve_model_options(options)
        unbound = compile_model_definition(name, declaration, model_options)
        collection = self.store.create_or_get_collection(
            name,
            {**model_options.collection_options, "unique": unbound.unique_properties},
        )
        definition = replace(unbound, store_handle=collection)
        model = Model(definition)
        self.models.register(model)
        _LOGGER.debug("Defined model '%s' (strict=%s).", name, definition.strict)
        return model

    def define_from_configuration(self, configuration: Configuration) -> tuple[Model, ...]:
        return tuple(
            self.define(model_config.name, model_config.declaration, model_config.options)
            for model_config in configuration.models
        )

    def get_model(self, name: str) -> Model | None:
        return self.models.lookup(name)

    def to_state(self) -> dict[str, Any]:
        state = self.store.to_state()
        state["models"] = {model_name: self.models.lookup(model_name) for model_name in self.models}
        state["types"] = TYPES.as_mapping()
        return state

    def serialize(self) -> str:
        """Return the JSON snapshot of the store without runtime handles or model bookkeeping."""
        return encode_snapshot(self.to_state(), key_filter=serialization_filter)
