"""Extension registry exports."""

from .extension_hooks import DataCheck, ExtensionHook, ExtensionRegistry, SchemaCheck
from .range_bounds import number_range_hook, register_number_range

__all__ = [
    "DataCheck",
    "SchemaCheck",
    "ExtensionHook",
    "ExtensionRegistry",
    "number_range_hook",
    "register_number_range",
]
