"""Concordia instance exports."""

from .concordia import Concordia, SchemaSource, construct, construct_from_file
from .validation_outcomes import DataValidationResult

__all__ = [
    "Concordia",
    "SchemaSource",
    "DataValidationResult",
    "construct",
    "construct_from_file",
]
