"""Structured failures raised while constructing schemas or validating data."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

_FRAGMENT_PREVIEW_LIMIT = 200

PathSegment = str | int


class ErrorCode(str, Enum):
    """Machine-readable identifier for every failure kind."""

    SCHEMA_SYNTAX = "schema_syntax"
    SCHEMA_STRUCTURE = "schema_structure"
    UNKNOWN_TYPE = "unknown_type"
    DUPLICATE_FIELD = "duplicate_field"
    INVALID_ARRAY_SCHEMA = "invalid_array_schema"
    INVALID_REFERENCE = "invalid_reference"
    CYCLIC_REFERENCE = "cyclic_reference"
    SCHEMA_FETCH_FAILED = "schema_fetch_failed"
    ROOT_TYPE_MISMATCH = "root_type_mismatch"
    ROOT_CONSTRAINT = "root_constraint"
    MALFORMED_DATA = "malformed_data"
    REQUIRED_FIELD_MISSING = "required_field_missing"
    TYPE_MISMATCH = "type_mismatch"
    LENGTH_MISMATCH = "length_mismatch"
    EXTENSION_REJECTED = "extension_rejected"


class ConcordiaError(Exception):
    """Base failure carrying a code, the offending path and fragment."""

    code: ErrorCode = ErrorCode.SCHEMA_STRUCTURE

    def __init__(
        self,
        message: str,
        *,
        path: tuple[PathSegment, ...] = (),
        fragment: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = tuple(path)
        self.fragment = fragment

    def locate(self, path: tuple[PathSegment, ...]) -> ConcordiaError:
        """Attach a path unless the failure already knows where it happened."""
        if not self.path:
            self.path = tuple(path)
        return self

    @property
    def pointer(self) -> str:
        return format_pointer(self.path)

    def __str__(self) -> str:
        rendered = f"{self.message} (at {self.pointer})"
        if self.fragment is not None:
            rendered = f"{rendered}: {describe_fragment(self.fragment)}"
        return rendered


class ConstructionError(ConcordiaError):
    """Raised when a schema document cannot be turned into a schema tree."""


class SchemaSyntaxError(ConstructionError):
    code = ErrorCode.SCHEMA_SYNTAX


class SchemaStructureError(ConstructionError):
    code = ErrorCode.SCHEMA_STRUCTURE


class UnknownTypeError(ConstructionError):
    code = ErrorCode.UNKNOWN_TYPE


class DuplicateFieldError(ConstructionError):
    code = ErrorCode.DUPLICATE_FIELD


class InvalidArraySchemaError(ConstructionError):
    code = ErrorCode.INVALID_ARRAY_SCHEMA


class InvalidReferenceError(ConstructionError):
    code = ErrorCode.INVALID_REFERENCE


class CyclicReferenceError(InvalidReferenceError):
    """A reference chain leads back to a URL that is still being resolved."""

    code = ErrorCode.CYCLIC_REFERENCE


class SchemaFetchFailedError(ConstructionError):
    code = ErrorCode.SCHEMA_FETCH_FAILED


class RootTypeMismatchError(ConstructionError):
    code = ErrorCode.ROOT_TYPE_MISMATCH


class RootConstraintError(ConstructionError):
    code = ErrorCode.ROOT_CONSTRAINT


class DataValidationError(ConcordiaError):
    """Raised when a JSON value does not satisfy a schema tree."""

    code = ErrorCode.TYPE_MISMATCH


class MalformedDataError(DataValidationError):
    code = ErrorCode.MALFORMED_DATA


class RequiredFieldMissingError(DataValidationError):
    code = ErrorCode.REQUIRED_FIELD_MISSING


class TypeMismatchError(DataValidationError):
    code = ErrorCode.TYPE_MISMATCH


class LengthMismatchError(DataValidationError):
    code = ErrorCode.LENGTH_MISMATCH


class ExtensionValidationError(ConstructionError, DataValidationError):
    """Raised by extension hooks to reject a schema node or a data value."""

    code = ErrorCode.EXTENSION_REJECTED


def describe_fragment(fragment: Any) -> str:
    """Return a short JSON rendering of a schema fragment or data value."""
    try:
        text = json.dumps(fragment, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        text = repr(fragment)
    if len(text) > _FRAGMENT_PREVIEW_LIMIT:
        return text[: _FRAGMENT_PREVIEW_LIMIT - 3] + "..."
    return text


def format_pointer(path: tuple[PathSegment, ...]) -> str:
    """Render a path as a JSON-pointer-like string."""
    if not path:
        return "/"
    return "".join(f"/{segment}" for segment in path)
