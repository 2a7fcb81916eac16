"""Schema tree entities."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from concordia.schema_instance.concordia import Concordia

KEYWORD_TYPE = "type"
KEYWORD_DOC = "doc"
KEYWORD_OPTIONAL = "optional"
KEYWORD_NAME = "name"
KEYWORD_SCHEMA = "schema"
KEYWORD_REFERENCE = "$ref"

RESERVED_KEYWORDS = frozenset(
    {
        KEYWORD_TYPE,
        KEYWORD_DOC,
        KEYWORD_OPTIONAL,
        KEYWORD_NAME,
        KEYWORD_SCHEMA,
        KEYWORD_REFERENCE,
    }
)


class SchemaKind(str, Enum):
    """The closed set of Concordia schema kinds."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


ROOT_KINDS = frozenset({SchemaKind.OBJECT, SchemaKind.ARRAY})


def freeze_mapping(values: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    """Return a read-only deep copy of ``values``."""
    return MappingProxyType(copy.deepcopy(dict(values or {})))


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Common metadata carried by every node of a schema tree."""

    kind: ClassVar[SchemaKind]

    doc: str | None = None
    optional: bool = False
    name: str | None = None
    others: Mapping[str, Any] = field(default_factory=freeze_mapping)

    def sub_nodes(self) -> tuple[SchemaSlot, ...]:
        """Return the direct children of this node."""
        return ()


@dataclass(frozen=True, kw_only=True)
class BooleanNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN


@dataclass(frozen=True, kw_only=True)
class NumberNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER


@dataclass(frozen=True, kw_only=True)
class StringNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING


@dataclass(frozen=True, kw_only=True)
class ReferenceNode:
    """A slot whose definition lives in another, already constructed schema."""

    url: str
    target: Concordia
    name: str | None = None
    doc: str | None = None
    optional: bool = False
    others: Mapping[str, Any] = field(default_factory=freeze_mapping)

    def sub_nodes(self) -> tuple[SchemaSlot, ...]:
        return ()


SchemaSlot = SchemaNode | ReferenceNode


@dataclass(frozen=True)
class FieldDescriptor:
    """One entry of an object schema: a named slot or a merged reference."""

    name: str | None
    slot: SchemaSlot

    @property
    def merged(self) -> bool:
        """True when a nameless reference merges its fields into the enclosing object."""
        return self.name is None and isinstance(self.slot, ReferenceNode)


@dataclass(frozen=True, kw_only=True)
class ObjectNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    fields: tuple[FieldDescriptor, ...] = ()

    def sub_nodes(self) -> tuple[SchemaSlot, ...]:
        return tuple(descriptor.slot for descriptor in self.fields)


@dataclass(frozen=True)
class TupleShape:
    """Fixed-length array whose elements are typed by position."""

    elements: tuple[SchemaSlot, ...]


@dataclass(frozen=True)
class HomogeneousShape:
    """Variable-length array whose elements share one definition."""

    element: SchemaSlot


ArrayShape = TupleShape | HomogeneousShape


@dataclass(frozen=True, kw_only=True)
class ArrayNode(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    shape: ArrayShape

    def sub_nodes(self) -> tuple[SchemaSlot, ...]:
        if isinstance(self.shape, TupleShape):
            return self.shape.elements
        return (self.shape.element,)


NODE_CLASSES: Mapping[SchemaKind, type[SchemaNode]] = MappingProxyType(
    {
        SchemaKind.BOOLEAN: BooleanNode,
        SchemaKind.NUMBER: NumberNode,
        SchemaKind.STRING: StringNode,
        SchemaKind.OBJECT: ObjectNode,
        SchemaKind.ARRAY: ArrayNode,
    }
)


def field_names(node: ObjectNode) -> tuple[str, ...]:
    """Return every data key the object defines, including merged references."""
    names: list[str] = []
    for descriptor in node.fields:
        if descriptor.name is not None:
            names.append(descriptor.name)
        elif isinstance(descriptor.slot, ReferenceNode):
            names.extend(field_names(_merged_root(descriptor.slot)))
    return tuple(names)


def _merged_root(reference: ReferenceNode) -> ObjectNode:
    root = reference.target.root
    if not isinstance(root, ObjectNode):
        raise TypeError(f"Merged reference {reference.url} does not point at an object schema.")
    return root


def render_schema(slot: SchemaSlot) -> dict[str, Any]:
    """Turn a schema tree back into a Concordia schema document."""
    if isinstance(slot, ReferenceNode):
        document: dict[str, Any] = {KEYWORD_REFERENCE: slot.url}
    else:
        document = {KEYWORD_TYPE: slot.kind.value}
    if slot.name is not None:
        document[KEYWORD_NAME] = slot.name
    if slot.doc is not None:
        document[KEYWORD_DOC] = slot.doc
    if slot.optional:
        document[KEYWORD_OPTIONAL] = True

    if isinstance(slot, ObjectNode):
        document[KEYWORD_SCHEMA] = [render_schema(descriptor.slot) for descriptor in slot.fields]
    elif isinstance(slot, ArrayNode):
        if isinstance(slot.shape, TupleShape):
            document[KEYWORD_SCHEMA] = [render_schema(element) for element in slot.shape.elements]
        else:
            document[KEYWORD_SCHEMA] = render_schema(slot.shape.element)

    for key, value in slot.others.items():
        document.setdefault(key, copy.deepcopy(value))
    return document
