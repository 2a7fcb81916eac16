"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    ExtensionSettings,
    NumberRangeSettings,
    ReferenceSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate a YAML configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    return parse_configuration(parsed, base_path=path.parent, path=path)


def parse_configuration(
    parsed: Any, *, base_path: Path, path: Path | None = None
) -> Configuration:
    """Validate an already parsed configuration mapping."""
    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    references = _parse_references_section(parsed.get("references"), base_path)
    extensions = _parse_extensions_section(parsed.get("extensions"))
    return Configuration(path=path, references=references, extensions=extensions)


def _parse_references_section(value: Any, base_path: Path) -> ReferenceSettings:
    section = _optional_mapping(value, "references")
    defaults = ReferenceSettings()
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", defaults.timeout_seconds), "references.timeout_seconds"
    )
    user_agent = (
        _optional_string(section.get("user_agent"), "references.user_agent")
        or defaults.user_agent
    )
    allow_remote = _require_bool(
        section.get("allow_remote", defaults.allow_remote), "references.allow_remote"
    )
    mirrors = _parse_mirrors(section.get("mirrors"), base_path)
    return ReferenceSettings(
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
        allow_remote=allow_remote,
        mirrors=mirrors,
    )


def _parse_mirrors(value: Any, base_path: Path) -> dict[str, Path]:
    section = _optional_mapping(value, "references.mirrors")
    mirrors: dict[str, Path] = {}
    for prefix, directory in section.items():
        prefix_text = _require_non_empty_string(prefix, "references.mirrors key")
        directory_text = _require_non_empty_string(directory, f"references.mirrors['{prefix_text}']")
        mirror_path = _resolve_path(base_path, directory_text)
        if not mirror_path.is_dir():
            raise ConfigurationError(f"Mirror directory not found: {mirror_path}")
        mirrors[prefix_text] = mirror_path
    return mirrors


def _parse_extensions_section(value: Any) -> ExtensionSettings:
    section = _optional_mapping(value, "extensions")
    number_range = section.get("number_range")
    if number_range is None or number_range is False:
        return ExtensionSettings()
    if number_range is True:
        return ExtensionSettings(number_range=NumberRangeSettings())
    options = _optional_mapping(number_range, "extensions.number_range")
    defaults = NumberRangeSettings()
    min_key = _require_non_empty_string(
        options.get("min_key", defaults.min_key), "extensions.number_range.min_key"
    )
    max_key = _require_non_empty_string(
        options.get("max_key", defaults.max_key), "extensions.number_range.max_key"
    )
    if min_key == max_key:
        raise ConfigurationError("extensions.number_range keys must differ.")
    return ExtensionSettings(number_range=NumberRangeSettings(min_key=min_key, max_key=max_key))


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
