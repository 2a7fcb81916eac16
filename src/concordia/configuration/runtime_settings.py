"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from concordia.reference_resolution.schema_fetchers import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)


@dataclass(frozen=True)
class ReferenceSettings:
    """How referenced schema documents are retrieved."""

    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    allow_remote: bool = True
    mirrors: Mapping[str, Path] = field(default_factory=dict)


@dataclass(frozen=True)
class NumberRangeSettings:
    """Property names read by the bundled number range extension."""

    min_key: str = "min"
    max_key: str = "max"


@dataclass(frozen=True)
class ExtensionSettings:
    """Bundled extensions enabled for controllers built from configuration."""

    number_range: NumberRangeSettings | None = None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    references: ReferenceSettings
    extensions: ExtensionSettings
