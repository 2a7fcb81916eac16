"""Concordia: a compact JSON schema language and its validator."""

import logging

from .extension_registry import ExtensionHook, ExtensionRegistry, number_range_hook
from .failures import (
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
    RequiredFieldMissingError,
    RootConstraintError,
    RootTypeMismatchError,
    SchemaFetchFailedError,
    SchemaStructureError,
    SchemaSyntaxError,
    TypeMismatchError,
    UnknownTypeError,
)
from .reference_resolution import (
    FetchResponse,
    MirroredSchemaFetcher,
    SchemaFetcher,
    StaticSchemaFetcher,
    UrllibSchemaFetcher,
)
from .schema_instance import Concordia, DataValidationResult, construct, construct_from_file
from .schema_model import SchemaKind
from .validation_control import ValidationController, default_controller

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Concordia",
    "DataValidationResult",
    "construct",
    "construct_from_file",
    "SchemaKind",
    "ValidationController",
    "default_controller",
    "ExtensionHook",
    "ExtensionRegistry",
    "number_range_hook",
    "FetchResponse",
    "SchemaFetcher",
    "UrllibSchemaFetcher",
    "MirroredSchemaFetcher",
    "StaticSchemaFetcher",
    "ErrorCode",
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
]
