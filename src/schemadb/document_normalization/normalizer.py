"""Document normalization against a compiled model definition."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from schemadb.document_store import META_FIELD, ROW_ID_FIELD
from schemadb.model_compilation import ModelDefinition


class NotNullConstraintError(Exception):
    """Raised when a not-null property resolves to None."""

    def __init__(self, model_name: str, property_name: str) -> None:
        super().__init__(
            f"Not null constraint failed for property '{property_name}' of model '{model_name}'."
        )
        self.model_name = model_name
        self.property_name = property_name


class DocumentShapeError(Exception):
    """Raised when a raw document is not a mapping."""


def normalize_document(definition: ModelDefinition, raw: Mapping[str, Any]) -> dict[str, Any]:
    """Apply defaults, coercions and the extra-property policy, then check not-null rules."""
    document = copy.deepcopy(dict(definition.default_template))
    _apply_properties(definition, raw, document)
    _check_not_null(definition, document)
    return document


def normalize_update_document(
    definition: ModelDefinition, raw: Mapping[str, Any]
) -> dict[str, Any]:
    """Normalize a single-document update without seeding defaults.

    The store locates the target through the reserved fields, so ``meta`` and
    the row identity are copied back unmodified from `raw` when present.
    """
    document: dict[str, Any] = {}
    _apply_properties(definition, raw, document)
    _check_not_null(definition, document)
    for field_name in (META_FIELD, ROW_ID_FIELD):
        if field_name in raw:
            document[field_name] = raw[field_name]
    return document


def _apply_properties(
    definition: ModelDefinition, raw: Mapping[str, Any], document: dict[str, Any]
) -> None:
    if not isinstance(raw, Mapping):
        raise DocumentShapeError(
            f"Documents for model '{definition.name}' must be mappings, got {type(raw).__name__}."
        )
    for key, value in raw.items():
        rule = definition.rules.get(key)
        if rule is not None:
            document[key] = rule.coercion(value)
        elif not definition.strict:
            document[key] = value


def _check_not_null(definition: ModelDefinition, document: Mapping[str, Any]) -> None:
    for property_name in definition.property_names:
        if document.get(property_name) is None and definition.rules[property_name].not_null:
            raise NotNullConstraintError(definition.name, property_name)
