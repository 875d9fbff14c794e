"""Model compilation entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from schemadb.document_store import Collection
from schemadb.property_rules import PropertyRule


@dataclass(frozen=True)
class ModelOptions:
    """Resolved declaration options."""

    allow_extra_properties: bool = False
    collection_options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ModelDefinition:
    """Compiled schema of one named model."""

    name: str
    rules: Mapping[str, PropertyRule]
    default_template: Mapping[str, Any]
    unique_properties: tuple[str, ...]
    strict: bool
    store_handle: Collection | None = None

    @property
    def property_names(self) -> tuple[str, ...]:
        """Declared property names in declaration order."""
        return tuple(self.rules)
