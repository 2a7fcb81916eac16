"""Failure taxonomy exports."""

from .failure_types import (
    ConcordiaError,
    ConstructionError,
    CyclicReferenceError,
    DataValidationError,
    DuplicateFieldError,
    ErrorCode,
    ExtensionValidationError,
    InvalidArraySchemaError,
    InvalidReferenceError,
    LengthMismatchError,
    MalformedDataError,
    PathSegment,
    RequiredFieldMissingError,
    RootConstraintError,
    RootTypeMismatchError,
    SchemaFetchFailedError,
    SchemaStructureError,
    SchemaSyntaxError,
    TypeMismatchError,
    UnknownTypeError,
    describe_fragment,
    format_pointer,
)

__all__ = [
    "ErrorCode",
    "PathSegment",
    "ConcordiaError",
    "ConstructionError",
    "SchemaSyntaxError",
    "SchemaStructureError",
    "UnknownTypeError",
    "DuplicateFieldError",
    "InvalidArraySchemaError",
    "InvalidReferenceError",
    "CyclicReferenceError",
    "SchemaFetchFailedError",
    "RootTypeMismatchError",
    "RootConstraintError",
    "DataValidationError",
    "MalformedDataError",
    "RequiredFieldMissingError",
    "TypeMismatchError",
    "LengthMismatchError",
    "ExtensionValidationError",
    "describe_fragment",
    "format_pointer",
]
