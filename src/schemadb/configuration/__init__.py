"""Configuration domain exports."""

from .loader import ConfigurationError, load_configuration
from .runtime_settings import Configuration, DatabaseSettings, ModelConfig

__all__ = [
    "Configuration",
    "ConfigurationError",
    "DatabaseSettings",
    "ModelConfig",
    "load_configuration",
]
