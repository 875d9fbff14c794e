"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from schemadb.model_compilation import RESERVED_FIELDS, ModelOptions
from schemadb.property_rules import TYPES, PropertySpec

from .runtime_settings import Configuration, DatabaseSettings, ModelConfig

_PROPERTY_KEYS = frozenset({"type", "allow_null", "default_value", "unique"})
_MODEL_KEYS = frozenset({"properties", "allow_extra_properties", "collection"})


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    database = _parse_database_section(parsed.get("database"), default_filename=f"{path.stem}.json")
    models = _parse_models_section(parsed.get("models"))

    return Configuration(path=path, database=database, models=models)


def _parse_database_section(value: Any, *, default_filename: str) -> DatabaseSettings:
    if value is None:
        return DatabaseSettings(filename=default_filename, options={})
    section = _require_mapping(value, "database")
    filename = _optional_string(section.get("filename"), "database.filename")
    options = section.get("options") or {}
    if not isinstance(options, Mapping):
        raise ConfigurationError("database.options must be a mapping.")
    return DatabaseSettings(filename=filename or default_filename, options=dict(options))


def _parse_models_section(value: Any) -> tuple[ModelConfig, ...]:
    section = _require_mapping(value, "models")
    if not section:
        raise ConfigurationError("At least one model must be declared.")
    return tuple(_parse_model(name, definition) for name, definition in section.items())


def _parse_model(name: Any, value: Any) -> ModelConfig:
    model_name = _require_non_empty_string(name, "models key")
    label = f"models.{model_name}"
    section = _require_mapping(value, label)
    unknown = sorted(str(key) for key in section if key not in _MODEL_KEYS)
    if unknown:
        raise ConfigurationError(f"{label} has unknown keys: {', '.join(unknown)}")

    properties = _require_mapping(section.get("properties"), f"{label}.properties")
    declaration: dict[str, Any] = {}
    for property_name, raw in properties.items():
        prop = _require_non_empty_string(property_name, f"{label}.properties key")
        if prop in RESERVED_FIELDS:
            raise ConfigurationError(f"{label}.properties.{prop} is a reserved property name.")
        declaration[prop] = _parse_property(raw, f"{label}.properties.{prop}")

    allow_extra_properties = _optional_bool(
        section.get("allow_extra_properties"), f"{label}.allow_extra_properties", default=False
    )
    collection_options = section.get("collection") or {}
    if not isinstance(collection_options, Mapping):
        raise ConfigurationError(f"{label}.collection must be a mapping.")
    if "unique" in collection_options:
        raise ConfigurationError(
            f"{label}.collection.unique is not supported; mark properties as unique instead."
        )

    return ModelConfig(
        name=model_name,
        declaration=declaration,
        options=ModelOptions(
            allow_extra_properties=allow_extra_properties,
            collection_options=dict(collection_options),
        ),
    )


def _parse_property(value: Any, label: str) -> Callable[[Any], Any] | PropertySpec:
    if isinstance(value, str):
        return _resolve_type(value, label)
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{label} must be a type name or a mapping.")
    unknown = sorted(str(key) for key in value if key not in _PROPERTY_KEYS)
    if unknown:
        raise ConfigurationError(f"{label} has unknown keys: {', '.join(unknown)}")
    type_name = _require_non_empty_string(value.get("type", "any"), f"{label}.type")
    return PropertySpec(
        type=_resolve_type(type_name, f"{label}.type"),
        allow_null=_optional_bool(value.get("allow_null"), f"{label}.allow_null", default=True),
        default_value=value.get("default_value"),
        unique=_optional_bool(value.get("unique"), f"{label}.unique", default=False),
    )


def _resolve_type(type_name: str, label: str) -> Callable[[Any], Any]:
    try:
        return TYPES.by_name(type_name)
    except KeyError as exc:
        supported = ", ".join(name.lower() for name in TYPES.names())
        raise ConfigurationError(
            f"{label} '{type_name}' is not a supported type ({supported})."
        ) from exc


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
