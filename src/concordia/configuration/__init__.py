"""Configuration domain exports."""

from .controller_factory import build_controller, build_schema_fetcher
from .loader import ConfigurationError, load_configuration, parse_configuration
from .runtime_settings import (
    Configuration,
    ExtensionSettings,
    NumberRangeSettings,
    ReferenceSettings,
)

__all__ = [
    "Configuration",
    "ReferenceSettings",
    "ExtensionSettings",
    "NumberRangeSettings",
    "ConfigurationError",
    "load_configuration",
    "parse_configuration",
    "build_controller",
    "build_schema_fetcher",
]
