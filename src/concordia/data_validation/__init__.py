"""Data validation exports."""

from .data_validator import ABSENT, validate_value

__all__ = ["ABSENT", "validate_value"]
