"""Data validation: walk a schema tree against a decoded JSON value."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Final

from concordia.failures.failure_types import (
    LengthMismatchError,
    PathSegment,
    RequiredFieldMissingError,
    TypeMismatchError,
)
from concordia.schema_model.schema_nodes import (
    ArrayNode,
    ObjectNode,
    ReferenceNode,
    SchemaKind,
    SchemaNode,
    SchemaSlot,
    TupleShape,
)

if TYPE_CHECKING:
    from concordia.validation_control.validation_controller import ValidationController

NodePath = tuple[PathSegment, ...]


class _Absent:
    """Marker for a key or element that is not present in the data."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def validate_value(
    slot: SchemaSlot,
    value: Any,
    *,
    controller: ValidationController,
    path: NodePath = (),
) -> None:
    """Validate ``value`` against ``slot``; raise on the first violation."""
    if isinstance(slot, ReferenceNode):
        _validate_reference(slot, value, path)
        return
    _validate_node(slot, value, path, controller)


def _validate_reference(slot: ReferenceNode, value: Any, path: NodePath) -> None:
    if _is_empty(value):
        _require_optional(slot.optional, value, path)
        return
    slot.target.validate_at(value, path)


def _validate_node(
    node: SchemaNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if _is_empty(value):
        _require_optional(node.optional, value, path)
        return
    _DATA_CHECKS[node.kind](node, value, path, controller)
    controller.run_data_extensions(node, value, path)


def _check_boolean(
    node: SchemaNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if not isinstance(value, bool):
        raise TypeMismatchError("The value is not a boolean.", path=path, fragment=value)


def _check_number(
    node: SchemaNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeMismatchError("The value is not a number.", path=path, fragment=value)


def _check_string(
    node: SchemaNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if not isinstance(value, str):
        raise TypeMismatchError("The value is not a string.", path=path, fragment=value)


def _check_object(
    node: ObjectNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if not isinstance(value, Mapping):
        raise TypeMismatchError("The value is not a JSON object.", path=path, fragment=value)

    for descriptor in node.fields:
        if descriptor.merged or descriptor.name is None:
            # Merged reference: its fields live directly on this object.
            validate_value(descriptor.slot, value, controller=controller, path=path)
            continue
        validate_value(
            descriptor.slot,
            value.get(descriptor.name, ABSENT),
            controller=controller,
            path=(*path, descriptor.name),
        )


def _check_array(
    node: ArrayNode, value: Any, path: NodePath, controller: ValidationController
) -> None:
    if not isinstance(value, list | tuple):
        raise TypeMismatchError("The value is not a JSON array.", path=path, fragment=value)

    shape = node.shape
    if isinstance(shape, TupleShape):
        if len(value) != len(shape.elements):
            raise LengthMismatchError(
                f"The array has {len(value)} elements but the schema defines "
                f"exactly {len(shape.elements)}.",
                path=path,
                fragment=value,
            )
        for index, (element, item) in enumerate(zip(shape.elements, value, strict=True)):
            validate_value(element, item, controller=controller, path=(*path, index))
        return

    for index, item in enumerate(value):
        validate_value(shape.element, item, controller=controller, path=(*path, index))


_DATA_CHECKS: Mapping[SchemaKind, Callable[..., None]] = {
    SchemaKind.BOOLEAN: _check_boolean,
    SchemaKind.NUMBER: _check_number,
    SchemaKind.STRING: _check_string,
    SchemaKind.OBJECT: _check_object,
    SchemaKind.ARRAY: _check_array,
}


def _is_empty(value: Any) -> bool:
    return value is ABSENT or value is None


def _require_optional(optional: bool, value: Any, path: NodePath) -> None:
    if optional:
        return
    if value is ABSENT:
        raise RequiredFieldMissingError("The value is missing and not optional.", path=path)
    raise RequiredFieldMissingError("The value is null and not optional.", path=path)
