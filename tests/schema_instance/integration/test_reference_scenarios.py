"""End-to-end scenarios: configuration, mirrored references and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from concordia import (
    CyclicReferenceError,
    ErrorCode,
    construct_from_file,
)
from concordia.configuration import build_controller, load_configuration
from concordia.validation_control import ValidationController

BASE_URL = "https://schemas.example.com/"


def _write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


def _offline_controller(tmp_path: Path) -> ValidationController:
    config_path = tmp_path / "concordia.yaml"
    config_path.write_text(
        f"""
references:
  allow_remote: false
  mirrors:
    "{BASE_URL}": ./mirror
extensions:
  number_range: true
""",
        encoding="utf-8",
    )
    return build_controller(load_configuration(config_path))


@pytest.fixture
def sensor_schema(tmp_path: Path) -> Path:
    mirror = tmp_path / "mirror"
    _write_json(
        mirror / "geo" / "point.json",
        {
            "type": "object",
            "doc": "A position in degrees.",
            "schema": [
                {"name": "lat", "type": "number", "min": -90, "max": 90},
                {"name": "lon", "type": "number", "min": -180, "max": 180},
            ],
        },
    )
    _write_json(
        mirror / "common" / "audit.json",
        {
            "type": "object",
            "schema": [
                {"name": "created_by", "type": "string"},
                {"name": "revision", "type": "number", "min": 0, "optional": True},
            ],
        },
    )
    return _write_json(
        tmp_path / "sensor.json",
        {
            "type": "object",
            "doc": "A sensor and its latest readings.",
            "schema": [
                {"$ref": BASE_URL + "common/audit.json"},
                {"name": "id", "type": "string"},
                {"name": "location", "$ref": BASE_URL + "geo/point.json"},
                {
                    "name": "readings",
                    "type": "array",
                    "schema": {"type": "array", "schema": [{"type": "string"}, {"type": "number"}]},
                },
                {"name": "active", "type": "boolean", "optional": True},
            ],
        },
    )


def test_valid_payload_passes_end_to_end(tmp_path: Path, sensor_schema: Path) -> None:
    concordia = construct_from_file(sensor_schema, _offline_controller(tmp_path))
    payload = {
        "created_by": "ops",
        "id": "s-1",
        "location": {"lat": 52.5, "lon": 13.4},
        "readings": [["2024-01-01T00:00:00Z", 21.5], ["2024-01-01T01:00:00Z", 21.7]],
    }

    assert concordia.validate_data(json.dumps(payload)) == payload


@pytest.mark.parametrize(
    ("change", "code", "path"),
    [
        ({"created_by": None}, ErrorCode.REQUIRED_FIELD_MISSING, ("created_by",)),
        ({"revision": -1}, ErrorCode.EXTENSION_REJECTED, ("revision",)),
        ({"location": {"lat": 91, "lon": 0}}, ErrorCode.EXTENSION_REJECTED, ("location", "lat")),
        ({"location": [52.5, 13.4]}, ErrorCode.TYPE_MISMATCH, ("location",)),
        ({"readings": [["t", 1, 2]]}, ErrorCode.LENGTH_MISMATCH, ("readings", 0)),
        ({"readings": [["t", "1"]]}, ErrorCode.TYPE_MISMATCH, ("readings", 0, 1)),
        ({"active": "yes"}, ErrorCode.TYPE_MISMATCH, ("active",)),
    ],
)
def test_invalid_payloads_report_code_and_path(
    tmp_path: Path,
    sensor_schema: Path,
    change: dict[str, Any],
    code: ErrorCode,
    path: tuple[str | int, ...],
) -> None:
    concordia = construct_from_file(sensor_schema, _offline_controller(tmp_path))
    payload = {
        "created_by": "ops",
        "id": "s-1",
        "location": {"lat": 0, "lon": 0},
        "readings": [],
        **change,
    }

    result = concordia.check_data(payload)

    assert result.code is code
    assert result.error is not None
    assert result.error.path == path


def test_schema_document_keeps_references(tmp_path: Path, sensor_schema: Path) -> None:
    concordia = construct_from_file(sensor_schema, _offline_controller(tmp_path))

    document = concordia.schema_document()

    assert document == json.loads(sensor_schema.read_text(encoding="utf-8"))


def test_cycle_across_mirrored_files_is_rejected(tmp_path: Path) -> None:
    mirror = tmp_path / "mirror"
    _write_json(
        mirror / "a.json",
        {"type": "object", "schema": [{"name": "b", "$ref": BASE_URL + "b.json"}]},
    )
    _write_json(
        mirror / "b.json",
        {"type": "array", "schema": {"$ref": BASE_URL + "a.json"}},
    )
    root = _write_json(
        tmp_path / "root.json",
        {"type": "array", "schema": [{"$ref": BASE_URL + "a.json"}]},
    )

    with pytest.raises(CyclicReferenceError) as exc_info:
        construct_from_file(root, _offline_controller(tmp_path))

    assert exc_info.value.code is ErrorCode.CYCLIC_REFERENCE
    assert exc_info.value.path == ("schema",)
