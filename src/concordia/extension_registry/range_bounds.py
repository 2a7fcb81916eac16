"""Bundled extension enforcing inclusive ``min``/``max`` bounds on numbers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from concordia.failures.failure_types import ExtensionValidationError
from concordia.schema_model.schema_nodes import SchemaKind, SchemaNode

from .extension_hooks import ExtensionHook, ExtensionRegistry

MIN_KEY = "min"
MAX_KEY = "max"


def number_range_hook(*, min_key: str = MIN_KEY, max_key: str = MAX_KEY) -> ExtensionHook:
    """Build the schema/data check pair for bounded number fields.

    Bounds are read from the node's preserved properties, so a schema such as
    ``{"name": "digit", "type": "number", "min": 0, "max": 7}`` accepts only
    values between 0 and 7 inclusive. Either bound may be omitted.
    """

    def check_schema(raw: Mapping[str, Any]) -> None:
        lower = _read_bound(raw, min_key)
        upper = _read_bound(raw, max_key)
        if lower is not None and upper is not None and lower > upper:
            raise ExtensionValidationError(
                f"The '{min_key}' bound is greater than the '{max_key}' bound.",
                fragment=dict(raw),
            )

    def check_data(node: SchemaNode, value: Any) -> None:
        lower = _read_bound(node.others, min_key)
        upper = _read_bound(node.others, max_key)
        if lower is not None and value < lower:
            raise ExtensionValidationError(
                f"The value is less than the '{min_key}' bound ({lower}).", fragment=value
            )
        if upper is not None and value > upper:
            raise ExtensionValidationError(
                f"The value is greater than the '{max_key}' bound ({upper}).", fragment=value
            )

    return ExtensionHook(schema_check=check_schema, data_check=check_data)


def register_number_range(registry: ExtensionRegistry, **keys: str) -> ExtensionHook:
    """Install :func:`number_range_hook` for the number kind."""
    return registry.add(SchemaKind.NUMBER, number_range_hook(**keys))


def _read_bound(raw: Mapping[str, Any], key: str) -> int | float | None:
    if key not in raw:
        return None
    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ExtensionValidationError(f"The '{key}' bound must be a number.", fragment=dict(raw))
    return value
