"""Registry of declared models, owned by one database instance."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemadb.write_interception import Model


class RedefinitionError(Exception):
    """Raised when a model name is declared a second time."""

    def __init__(self, model_name: str) -> None:
        super().__init__(f"Redefinition of model {model_name}")
        self.model_name = model_name


class ModelRegistry:
    """Name to bound model mapping; entries are added once and never replaced."""

    def __init__(self) -> None:
        self._models: dict[str, Model] = {}

    def register(self, model: Model) -> None:
        if model.name in self._models:
            raise RedefinitionError(model.name)
        self._models[model.name] = model

    def lookup(self, name: str) -> Model | None:
        return self._models.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._models))

    def __len__(self) -> int:
        return len(self._models)
