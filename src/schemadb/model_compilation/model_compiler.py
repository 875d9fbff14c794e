"""Model declaration compiler."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from schemadb.document_store import META_FIELD, ROW_ID_FIELD, Collection
from schemadb.property_rules import PropertyRule, compile_property_rule

from .model_definitions import ModelDefinition, ModelOptions

RESERVED_FIELDS = (META_FIELD, ROW_ID_FIELD)

_LOGGER = logging.getLogger(__name__)


class ReservedFieldError(Exception):
    """Raised when a declaration names a store-owned field."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Declaration of reserved property '{field_name}' not allowed")
        self.field_name = field_name


def resolve_model_options(
    options: ModelOptions | bool | Mapping[str, Any] | None,
) -> ModelOptions:
    """Turn the boolean shorthand or an options mapping into ModelOptions."""
    if isinstance(options, ModelOptions):
        return options
    if options is None or options is False:
        return ModelOptions()
    if options is True:
        return ModelOptions(allow_extra_properties=True)
    if not isinstance(options, Mapping):
        raise TypeError(f"Model options must be a boolean or a mapping, got {options!r}.")
    collection_options = {
        key: value
        for key, value in options.items()
        if key not in ("allow_extra_properties", "unique")
    }
    return ModelOptions(
        allow_extra_properties=bool(options.get("allow_extra_properties", False)),
        collection_options=collection_options,
    )


def check_reserved_fields(declaration: Mapping[str, Any]) -> None:
    for field_name in RESERVED_FIELDS:
        if field_name in declaration:
            raise ReservedFieldError(field_name)


def compile_model_definition(
    name: str,
    declaration: Mapping[str, Any],
    options: ModelOptions,
    store_handle: Collection | None = None,
) -> ModelDefinition:
    """Compile every property declaration in order into a ModelDefinition."""
    check_reserved_fields(declaration)

    rules: dict[str, PropertyRule] = {}
    default_template: dict[str, Any] = {}
    unique_properties: list[str] = []
    for property_name, raw_declaration in declaration.items():
        rule = compile_property_rule(raw_declaration)
        rules[property_name] = rule
        default_template[property_name] = rule.default_value
        if rule.unique:
            unique_properties.append(property_name)

    _LOGGER.debug(
        "Compiled model '%s' with %d properties (unique: %s).",
        name,
        len(rules),
        ", ".join(unique_properties) or "none",
    )
    return ModelDefinition(
        name=name,
        rules=rules,
        default_template=default_template,
        unique_properties=tuple(unique_properties),
        strict=not options.allow_extra_properties,
        store_handle=store_handle,
    )
