"""Bundled number range extension tests."""

from __future__ import annotations

from typing import Any

import pytest
from concordia.extension_registry import ExtensionRegistry, register_number_range
from concordia.failures import ExtensionValidationError, TypeMismatchError
from concordia.reference_resolution import StaticSchemaFetcher
from concordia.schema_instance import Concordia, construct
from concordia.schema_model import SchemaKind
from concordia.validation_control import ValidationController

OCTAL_DIGIT_SCHEMA = {
    "type": "object",
    "schema": [{"name": "digit", "type": "number", "min": 0, "max": 7}],
}


def _range_controller(**keys: str) -> ValidationController:
    registry = ExtensionRegistry()
    register_number_range(registry, **keys)
    return ValidationController(registry=registry, fetcher=StaticSchemaFetcher({}))


def _construct(document: dict[str, Any], **keys: str) -> Concordia:
    return construct(document, _range_controller(**keys))


@pytest.mark.parametrize("digit", [0, 3, 7, 6.5])
def test_values_inside_the_bounds_pass(digit: float) -> None:
    assert _construct(OCTAL_DIGIT_SCHEMA).validate_data({"digit": digit}) == {"digit": digit}


@pytest.mark.parametrize(("digit", "message"), [(8, "greater"), (-1, "less")])
def test_values_outside_the_bounds_are_rejected(digit: int, message: str) -> None:
    with pytest.raises(ExtensionValidationError, match=message) as exc_info:
        _construct(OCTAL_DIGIT_SCHEMA).validate_data({"digit": digit})

    assert exc_info.value.path == ("digit",)
    assert exc_info.value.fragment == digit


def test_single_bound_is_enough() -> None:
    concordia = _construct({"type": "array", "schema": {"type": "number", "min": 1}})

    assert concordia.validate_data([1, 100, 10**6]) == [1, 100, 10**6]
    with pytest.raises(ExtensionValidationError) as exc_info:
        concordia.validate_data([1, 0])

    assert exc_info.value.path == (1,)


def test_type_mismatch_is_reported_before_the_extension_runs() -> None:
    with pytest.raises(TypeMismatchError) as exc_info:
        _construct(OCTAL_DIGIT_SCHEMA).validate_data({"digit": "7"})

    assert not isinstance(exc_info.value, ExtensionValidationError)


def test_optional_null_value_skips_the_bounds() -> None:
    concordia = _construct(
        {"type": "object", "schema": [{"name": "n", "type": "number", "optional": True, "max": 1}]}
    )

    assert concordia.validate_data({"n": None}) == {"n": None}


@pytest.mark.parametrize(
    ("field", "message"),
    [
        ({"name": "d", "type": "number", "min": "0"}, "'min' bound must be a number"),
        ({"name": "d", "type": "number", "max": True}, "'max' bound must be a number"),
        ({"name": "d", "type": "number", "min": 5, "max": 1}, "greater than the 'max' bound"),
    ],
)
def test_invalid_bounds_are_rejected_at_construction(field: dict[str, Any], message: str) -> None:
    with pytest.raises(ExtensionValidationError, match=message) as exc_info:
        _construct({"type": "object", "schema": [field]})

    assert exc_info.value.path == ("schema", 0)


def test_bounds_are_ignored_without_the_extension() -> None:
    concordia = construct(OCTAL_DIGIT_SCHEMA, ValidationController(fetcher=StaticSchemaFetcher({})))

    assert concordia.validate_data({"digit": 99}) == {"digit": 99}


def test_custom_bound_keys() -> None:
    concordia = _construct(
        {"type": "object", "schema": [{"name": "t", "type": "number", "lowest": -10}]},
        min_key="lowest",
        max_key="highest",
    )

    with pytest.raises(ExtensionValidationError, match="'lowest'"):
        concordia.validate_data({"t": -11})


def test_register_number_range_targets_the_number_kind() -> None:
    registry = ExtensionRegistry()
    hook = register_number_range(registry)

    assert registry.kinds() == (SchemaKind.NUMBER,)
    assert registry.schema_checks(SchemaKind.NUMBER) == (hook.schema_check,)


def test_bounds_are_checked_when_the_extension_is_added_after_construction() -> None:
    controller = ValidationController(fetcher=StaticSchemaFetcher({}))
    concordia = construct(
        {"type": "object", "schema": [{"name": "n", "type": "number", "min": "0"}]}, controller
    )
    register_number_range(controller.registry)

    with pytest.raises(ExtensionValidationError, match="'min' bound must be a number") as exc_info:
        concordia.validate_data({"n": 5})

    assert exc_info.value.path == ("n",)
