"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from schemadb.configuration.loader import ConfigurationError, load_configuration
from schemadb.property_rules import TYPES, PropertySpec


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "inventory.yaml",
        """
models:
  users:
    properties:
      email: {type: string, allow_null: false, unique: true}
      age: integer
      joined: {type: date}
      notes: {default_value: []}
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.database.filename == "inventory.json"
    assert configuration.database.options == {}
    models = {model_config.name: model_config for model_config in configuration.models}
    assert list(models) == ["users"]
    users = models["users"]
    assert users.options.allow_extra_properties is False
    assert users.declaration["email"] == PropertySpec(
        type=TYPES.STRING, allow_null=False, default_value=None, unique=True
    )
    assert users.declaration["age"] is TYPES.INTEGER
    assert users.declaration["joined"] == PropertySpec(type=TYPES.DATE)
    assert users.declaration["notes"] == PropertySpec(type=TYPES.ANY, default_value=[])


def test_loads_json_configuration_with_database_and_collection_options(tmp_path: Path) -> None:
    config = {
        "database": {"filename": "custom.json", "options": {"adapter": "memory"}},
        "models": {
            "events": {
                "allow_extra_properties": True,
                "collection": {"ttl": 60000},
                "properties": {"title": "STRING"},
            }
        },
    }
    config_path = _write_file(tmp_path / "config.json", json.dumps(config))

    configuration = load_configuration(config_path)

    assert configuration.database.filename == "custom.json"
    assert configuration.database.options == {"adapter": "memory"}
    (events,) = configuration.models
    assert events.name == "events"
    assert events.options.allow_extra_properties is True
    assert dict(events.options.collection_options) == {"ttl": 60000}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "broken.yaml", "models: [unclosed")

    with pytest.raises(ConfigurationError, match="Failed to parse"):
        load_configuration(config_path)


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "list.yaml", "- one\n- two\n")

    with pytest.raises(ConfigurationError, match="root must be a mapping"):
        load_configuration(config_path)


def test_models_section_is_required(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "empty.yaml", "")

    with pytest.raises(ConfigurationError, match="'models' is required"):
        load_configuration(config_path)


def test_empty_models_section_raises(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "none.yaml", "models: {}\n")

    with pytest.raises(ConfigurationError, match="At least one model"):
        load_configuration(config_path)


def test_unknown_type_name_raises(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "models:\n  users:\n    properties:\n      age: decimal\n",
    )

    with pytest.raises(ConfigurationError, match="'decimal' is not a supported type"):
        load_configuration(config_path)


def test_reserved_property_name_raises(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "models:\n  users:\n    properties:\n      meta: string\n",
    )

    with pytest.raises(ConfigurationError, match="reserved property name"):
        load_configuration(config_path)


def test_unknown_property_keys_raise(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "models:\n  users:\n    properties:\n      age: {type: integer, allowNull: false}\n",
    )

    with pytest.raises(ConfigurationError, match="unknown keys: allowNull"):
        load_configuration(config_path)


def test_non_boolean_flags_raise(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "models:\n  users:\n    allow_extra_properties: maybe\n    properties:\n      a: any\n",
    )

    with pytest.raises(ConfigurationError, match="allow_extra_properties must be a boolean"):
        load_configuration(config_path)


def test_collection_unique_option_is_rejected(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "models:\n  users:\n    collection: {unique: [a]}\n    properties:\n      a: any\n",
    )

    with pytest.raises(ConfigurationError, match="mark properties as unique"):
        load_configuration(config_path)
