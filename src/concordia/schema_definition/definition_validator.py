"""Schema-definition validation: raw JSON document to immutable schema tree."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from concordia.failures.failure_types import (
    DuplicateFieldError,
    InvalidArraySchemaError,
    PathSegment,
    RootConstraintError,
    SchemaStructureError,
    UnknownTypeError,
)
from concordia.reference_resolution.reference_resolver import ReferenceResolver
from concordia.schema_model.schema_nodes import (
    KEYWORD_DOC,
    KEYWORD_NAME,
    KEYWORD_OPTIONAL,
    KEYWORD_REFERENCE,
    KEYWORD_SCHEMA,
    KEYWORD_TYPE,
    NODE_CLASSES,
    RESERVED_KEYWORDS,
    ROOT_KINDS,
    ArrayNode,
    FieldDescriptor,
    HomogeneousShape,
    ObjectNode,
    ReferenceNode,
    SchemaKind,
    SchemaNode,
    SchemaSlot,
    TupleShape,
    field_names,
    freeze_mapping,
)

if TYPE_CHECKING:
    from concordia.validation_control.validation_controller import ValidationController

NodePath = tuple[PathSegment, ...]


@dataclass(frozen=True)
class _DefinitionContext:
    """Collaborators shared by every step of one tree build."""

    controller: ValidationController
    resolver: ReferenceResolver


@dataclass(frozen=True)
class _SlotMetadata:
    """Metadata every slot carries regardless of its kind."""

    doc: str | None
    optional: bool
    name: str | None
    others: Mapping[str, Any]

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "doc": self.doc,
            "optional": self.optional,
            "name": self.name,
            "others": self.others,
        }


def check_root_constraints(document: Any) -> Mapping[str, Any]:
    """Verify the constraints that only apply to the root of a schema."""
    if not isinstance(document, Mapping):
        raise SchemaStructureError("The schema must be a JSON object.", fragment=document)

    tag = _read_type_tag(document, ())
    if tag not in {kind.value for kind in ROOT_KINDS}:
        raise RootConstraintError(
            "The root type of a schema must either be 'object' or 'array'.",
            fragment=dict(document),
        )
    if KEYWORD_OPTIONAL in document:
        raise RootConstraintError(
            f"The '{KEYWORD_OPTIONAL}' field is not allowed at the root of a schema.",
            fragment=dict(document),
        )
    return document


def build_schema_tree(
    document: Mapping[str, Any],
    *,
    controller: ValidationController,
    resolver: ReferenceResolver,
) -> SchemaNode:
    """Validate a root schema document and return its schema tree."""
    context = _DefinitionContext(controller=controller, resolver=resolver)
    return _build_node(document, (), context)


def _build_slot(
    raw: Mapping[str, Any],
    path: NodePath,
    context: _DefinitionContext,
    *,
    required_kind: SchemaKind | None = None,
) -> SchemaSlot:
    if KEYWORD_REFERENCE in raw and KEYWORD_TYPE in raw:
        raise SchemaStructureError(
            f"A '{KEYWORD_REFERENCE}' slot cannot also declare a local '{KEYWORD_TYPE}'.",
            path=path,
            fragment=dict(raw),
        )
    target = context.resolver.resolve(raw, required_kind=required_kind, path=path)
    if target is None:
        return _build_node(raw, path, context)

    metadata = _read_metadata(raw, path)
    return ReferenceNode(url=raw[KEYWORD_REFERENCE], target=target, **metadata.as_kwargs())


def _build_node(raw: Mapping[str, Any], path: NodePath, context: _DefinitionContext) -> SchemaNode:
    kind = _read_kind(raw, path, context)
    metadata = _read_metadata(raw, path)
    node = _NODE_BUILDERS[kind](kind, raw, metadata, path, context)
    context.controller.run_schema_extensions(kind, raw, path)
    return node


def _build_scalar(
    kind: SchemaKind,
    raw: Mapping[str, Any],
    metadata: _SlotMetadata,
    path: NodePath,
    context: _DefinitionContext,
) -> SchemaNode:
    return NODE_CLASSES[kind](**metadata.as_kwargs())


def _build_object(
    kind: SchemaKind,
    raw: Mapping[str, Any],
    metadata: _SlotMetadata,
    path: NodePath,
    context: _DefinitionContext,
) -> SchemaNode:
    entries = raw.get(KEYWORD_SCHEMA)
    if entries is None:
        raise SchemaStructureError(
            f"The '{KEYWORD_SCHEMA}' field of an object is missing or null.",
            path=path,
            fragment=dict(raw),
        )
    if not isinstance(entries, list | tuple):
        raise SchemaStructureError(
            f"The '{KEYWORD_SCHEMA}' field of an object must be a JSON array.",
            path=path,
            fragment=dict(raw),
        )

    seen_names: set[str] = set()
    fields: list[FieldDescriptor] = []
    for index, entry in enumerate(entries):
        entry_path = (*path, KEYWORD_SCHEMA, index)
        if not isinstance(entry, Mapping):
            raise SchemaStructureError(
                "Every object field definition must be a JSON object.",
                path=entry_path,
                fragment=entry,
            )

        if KEYWORD_NAME in entry:
            name = _read_name(entry, entry_path)
            _claim_field_name(name, seen_names, entry_path, entry)
            fields.append(FieldDescriptor(name=name, slot=_build_slot(entry, entry_path, context)))
        elif KEYWORD_REFERENCE in entry:
            slot = _build_slot(entry, entry_path, context, required_kind=SchemaKind.OBJECT)
            if isinstance(slot, ReferenceNode) and isinstance(slot.target.root, ObjectNode):
                for merged_name in field_names(slot.target.root):
                    _claim_field_name(merged_name, seen_names, entry_path, entry)
            fields.append(FieldDescriptor(name=None, slot=slot))
        else:
            raise SchemaStructureError(
                f"The '{KEYWORD_NAME}' field is missing and no '{KEYWORD_REFERENCE}' is given.",
                path=entry_path,
                fragment=dict(entry),
            )

    return ObjectNode(fields=tuple(fields), **metadata.as_kwargs())


def _build_array(
    kind: SchemaKind,
    raw: Mapping[str, Any],
    metadata: _SlotMetadata,
    path: NodePath,
    context: _DefinitionContext,
) -> SchemaNode:
    definition = raw.get(KEYWORD_SCHEMA)
    shape: TupleShape | HomogeneousShape
    if isinstance(definition, list | tuple):
        elements: list[SchemaSlot] = []
        for index, element in enumerate(definition):
            element_path = (*path, KEYWORD_SCHEMA, index)
            if not isinstance(element, Mapping):
                raise InvalidArraySchemaError(
                    "Every element of a tuple array definition must be a JSON object.",
                    path=element_path,
                    fragment=element,
                )
            elements.append(_build_slot(element, element_path, context))
        shape = TupleShape(elements=tuple(elements))
    elif isinstance(definition, Mapping):
        shape = HomogeneousShape(element=_build_slot(definition, (*path, KEYWORD_SCHEMA), context))
    else:
        raise InvalidArraySchemaError(
            f"The '{KEYWORD_SCHEMA}' field of an array must be either a JSON array "
            "or a JSON object.",
            path=path,
            fragment=dict(raw),
        )

    return ArrayNode(shape=shape, **metadata.as_kwargs())


_NODE_BUILDERS: Mapping[
    SchemaKind,
    Callable[[SchemaKind, Mapping[str, Any], _SlotMetadata, NodePath, _DefinitionContext], SchemaNode],
] = {
    SchemaKind.BOOLEAN: _build_scalar,
    SchemaKind.NUMBER: _build_scalar,
    SchemaKind.STRING: _build_scalar,
    SchemaKind.OBJECT: _build_object,
    SchemaKind.ARRAY: _build_array,
}


def _read_kind(raw: Mapping[str, Any], path: NodePath, context: _DefinitionContext) -> SchemaKind:
    tag = _read_type_tag(raw, path)
    try:
        kind = SchemaKind(tag)
    except ValueError:
        raise UnknownTypeError(f"Type unknown: {tag}", path=path, fragment=dict(raw)) from None
    if kind not in context.controller.kinds:
        raise UnknownTypeError(
            f"Type '{tag}' is not supported by this validation controller.",
            path=path,
            fragment=dict(raw),
        )
    return kind


def _read_type_tag(raw: Mapping[str, Any], path: NodePath) -> str:
    if KEYWORD_TYPE not in raw:
        raise SchemaStructureError(
            f"The '{KEYWORD_TYPE}' field is missing.", path=path, fragment=dict(raw)
        )
    tag = raw[KEYWORD_TYPE]
    if tag is None:
        raise SchemaStructureError(
            f"The '{KEYWORD_TYPE}' field cannot be null.", path=path, fragment=dict(raw)
        )
    if not isinstance(tag, str):
        raise SchemaStructureError(
            f"The '{KEYWORD_TYPE}' field is not a string.", path=path, fragment=dict(raw)
        )
    return tag


def _read_metadata(raw: Mapping[str, Any], path: NodePath) -> _SlotMetadata:
    doc = raw.get(KEYWORD_DOC)
    if KEYWORD_DOC in raw and not isinstance(doc, str):
        raise SchemaStructureError(
            f"The '{KEYWORD_DOC}' field's value must be of type string.",
            path=path,
            fragment=dict(raw),
        )
    optional = raw.get(KEYWORD_OPTIONAL, False)
    if not isinstance(optional, bool):
        raise SchemaStructureError(
            f"The '{KEYWORD_OPTIONAL}' field's value must be of type boolean.",
            path=path,
            fragment=dict(raw),
        )
    name = _read_name(raw, path) if KEYWORD_NAME in raw else None
    others = freeze_mapping({key: value for key, value in raw.items() if key not in RESERVED_KEYWORDS})
    return _SlotMetadata(doc=doc, optional=optional, name=name, others=others)


def _read_name(raw: Mapping[str, Any], path: NodePath) -> str:
    name = raw[KEYWORD_NAME]
    if name is None:
        raise SchemaStructureError(
            f"The '{KEYWORD_NAME}' field cannot be null.", path=path, fragment=dict(raw)
        )
    if not isinstance(name, str):
        raise SchemaStructureError(
            f"The '{KEYWORD_NAME}' field is not a string.", path=path, fragment=dict(raw)
        )
    return name


def _claim_field_name(
    name: str, seen_names: set[str], path: NodePath, entry: Mapping[str, Any]
) -> None:
    if name in seen_names:
        raise DuplicateFieldError(
            f"The field '{name}' is defined multiple times.", path=path, fragment=dict(entry)
        )
    seen_names.add(name)
