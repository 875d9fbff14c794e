"""Model registry exports."""

from .registry import ModelRegistry, RedefinitionError

__all__ = ["ModelRegistry", "RedefinitionError"]
