"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from schemadb.model_compilation import ModelOptions


@dataclass(frozen=True)
class DatabaseSettings:
    """Store-level settings."""

    filename: str
    options: Mapping[str, Any]


@dataclass(frozen=True)
class ModelConfig:
    """One model declaration read from the configuration file."""

    name: str
    declaration: Mapping[str, Any]
    options: ModelOptions


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    database: DatabaseSettings
    models: tuple[ModelConfig, ...]
