"""Boundary tests for the schema and data traversals."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_traversals_do_not_import_the_instance_or_configuration_layers() -> None:
    package_dir = _project_root() / "src" / "concordia"
    core_modules = (
        package_dir / "data_validation" / "data_validator.py",
        package_dir / "schema_definition" / "definition_validator.py",
        package_dir / "reference_resolution" / "schema_fetchers.py",
    )
    forbidden_import_fragments = (
        "concordia.schema_instance",
        "concordia.configuration",
    )

    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"
