"""Data validation outcome entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from concordia.failures.failure_types import DataValidationError, ErrorCode


@dataclass(frozen=True)
class DataValidationResult:
    """Outcome of validating one payload without raising."""

    value: Any
    error: DataValidationError | None

    @property
    def is_ok(self) -> bool:
        """Return True when the payload satisfied the schema."""
        return self.error is None

    @property
    def code(self) -> ErrorCode | None:
        return None if self.error is None else self.error.code

    @staticmethod
    def passed(value: Any) -> DataValidationResult:
        return DataValidationResult(value=value, error=None)

    @staticmethod
    def failed(error: DataValidationError) -> DataValidationResult:
        return DataValidationResult(value=None, error=error)
