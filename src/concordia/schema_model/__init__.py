"""Schema tree exports."""

from .schema_nodes import (
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
    ArrayShape,
    BooleanNode,
    FieldDescriptor,
    HomogeneousShape,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaKind,
    SchemaNode,
    SchemaSlot,
    StringNode,
    TupleShape,
    field_names,
    freeze_mapping,
    render_schema,
)

__all__ = [
    "KEYWORD_TYPE",
    "KEYWORD_DOC",
    "KEYWORD_OPTIONAL",
    "KEYWORD_NAME",
    "KEYWORD_SCHEMA",
    "KEYWORD_REFERENCE",
    "RESERVED_KEYWORDS",
    "ROOT_KINDS",
    "NODE_CLASSES",
    "SchemaKind",
    "SchemaNode",
    "BooleanNode",
    "NumberNode",
    "StringNode",
    "ObjectNode",
    "ArrayNode",
    "ArrayShape",
    "TupleShape",
    "HomogeneousShape",
    "ReferenceNode",
    "SchemaSlot",
    "FieldDescriptor",
    "field_names",
    "freeze_mapping",
    "render_schema",
]
