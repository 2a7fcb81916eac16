"""Schema tree entity tests."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest
from concordia.reference_resolution import StaticSchemaFetcher
from concordia.schema_instance import construct
from concordia.schema_model import (
    ArrayNode,
    FieldDescriptor,
    HomogeneousShape,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaKind,
    StringNode,
    TupleShape,
    field_names,
    freeze_mapping,
    render_schema,
)
from concordia.validation_control import ValidationController

POINT_URL = "https://schemas.example.com/point.json"
POINT_SCHEMA = {
    "type": "object",
    "schema": [{"name": "x", "type": "number"}, {"name": "y", "type": "number"}],
}


def _controller(documents: dict[str, Any] | None = None) -> ValidationController:
    return ValidationController(fetcher=StaticSchemaFetcher(documents or {}))


def test_nodes_are_immutable() -> None:
    node = NumberNode(name="n")

    with pytest.raises(dataclasses.FrozenInstanceError):
        node.optional = True  # type: ignore[misc]


def test_nodes_expose_their_kind() -> None:
    assert NumberNode().kind is SchemaKind.NUMBER
    assert ObjectNode().kind is SchemaKind.OBJECT
    assert ArrayNode(shape=TupleShape(elements=())).kind is SchemaKind.ARRAY


def test_sub_nodes_follow_the_tree() -> None:
    name = StringNode(name="name")
    age = NumberNode(name="age")
    person = ObjectNode(
        fields=(FieldDescriptor(name="name", slot=name), FieldDescriptor(name="age", slot=age))
    )
    pair = ArrayNode(shape=TupleShape(elements=(name, age)))
    many = ArrayNode(shape=HomogeneousShape(element=person))

    assert person.sub_nodes() == (name, age)
    assert pair.sub_nodes() == (name, age)
    assert many.sub_nodes() == (person,)
    assert name.sub_nodes() == ()


def test_freeze_mapping_copies_and_protects_values() -> None:
    source = {"bounds": [0, 7]}
    frozen = freeze_mapping(source)
    source["bounds"].append(9)

    assert frozen["bounds"] == [0, 7]
    with pytest.raises(TypeError):
        frozen["other"] = 1  # type: ignore[index]


def test_field_names_include_merged_reference_fields() -> None:
    concordia = construct(
        {"type": "object", "schema": [{"$ref": POINT_URL}, {"name": "label", "type": "string"}]},
        _controller({POINT_URL: POINT_SCHEMA}),
    )

    assert isinstance(concordia.root, ObjectNode)
    assert field_names(concordia.root) == ("x", "y", "label")
    merged = concordia.root.fields[0]
    assert isinstance(merged.slot, ReferenceNode)
    assert merged.merged is True
    assert concordia.root.fields[1].merged is False


def test_named_reference_is_not_merged() -> None:
    concordia = construct(
        {"type": "object", "schema": [{"name": "origin", "$ref": POINT_URL}]},
        _controller({POINT_URL: POINT_SCHEMA}),
    )

    assert isinstance(concordia.root, ObjectNode)
    descriptor = concordia.root.fields[0]
    assert isinstance(descriptor.slot, ReferenceNode)
    assert descriptor.merged is False
    assert field_names(concordia.root) == ("origin",)


def test_only_nameless_reference_fields_are_merged() -> None:
    concordia = construct(
        {"type": "array", "schema": [{"$ref": POINT_URL}]},
        _controller({POINT_URL: POINT_SCHEMA}),
    )

    assert isinstance(concordia.root, ArrayNode)
    (element,) = concordia.root.sub_nodes()
    assert isinstance(element, ReferenceNode)
    assert not hasattr(element, "merged")
    assert FieldDescriptor(name=None, slot=NumberNode()).merged is False


def test_render_schema_reproduces_the_document() -> None:
    document = {
        "type": "object",
        "doc": "A reading.",
        "schema": [
            {"type": "string", "name": "sensor"},
            {"type": "number", "name": "value", "optional": True, "min": 0},
            {
                "type": "array",
                "name": "pairs",
                "schema": {"type": "array", "schema": [{"type": "number"}, {"type": "boolean"}]},
            },
        ],
    }

    assert render_schema(construct(document, _controller()).root) == document


def test_render_schema_keeps_references_as_urls() -> None:
    document = {"type": "object", "schema": [{"$ref": POINT_URL, "name": "origin"}]}

    rendered = render_schema(construct(document, _controller({POINT_URL: POINT_SCHEMA})).root)

    assert rendered == document
