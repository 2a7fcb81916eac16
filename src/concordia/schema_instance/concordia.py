"""The Concordia driver: construct a schema once, validate many payloads."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import partial
from pathlib import Path
from typing import Any

from concordia.failures.failure_types import (
    DataValidationError,
    MalformedDataError,
    PathSegment,
    SchemaSyntaxError,
)
from concordia.reference_resolution.reference_resolver import ReferenceResolver
from concordia.schema_model.schema_nodes import SchemaNode, render_schema
from concordia.validation_control.validation_controller import (
    ValidationController,
    default_controller,
)

from .validation_outcomes import DataValidationResult

_LOGGER = logging.getLogger(__name__)

SchemaSource = str | bytes | bytearray | Mapping[str, Any]


class Concordia:
    """An immutable, validated Concordia schema.

    Construction checks the schema document, resolves every ``$ref`` through
    the controller's fetcher and stores the resulting tree. A failure raises
    a :class:`~concordia.failures.ConstructionError` and leaves no instance.
    """

    __slots__ = ("_controller", "_root")

    _controller: ValidationController
    _root: SchemaNode

    def __init__(
        self, schema_source: SchemaSource, controller: ValidationController | None = None
    ) -> None:
        active = controller if controller is not None else default_controller()
        resolver = active.new_resolver(partial(_build_referenced, controller=active))
        self._setup(_decode_schema(schema_source), active, resolver)
        _LOGGER.debug(
            "Constructed %s schema (%d referenced schemas)",
            self._root.kind.value,
            len(resolver.resolved_urls),
        )

    @classmethod
    def _assemble(
        cls, document: Any, controller: ValidationController, resolver: ReferenceResolver
    ) -> Concordia:
        instance = cls.__new__(cls)
        instance._setup(document, controller, resolver)
        return instance

    def _setup(
        self, document: Any, controller: ValidationController, resolver: ReferenceResolver
    ) -> None:
        self._controller = controller
        self._root = controller.build(document, resolver)

    @property
    def root(self) -> SchemaNode:
        """The root node of the schema tree, an object or an array node."""
        return self._root

    @property
    def controller(self) -> ValidationController:
        return self._controller

    def schema_document(self) -> dict[str, Any]:
        """Render the schema tree back into a Concordia schema document."""
        return render_schema(self._root)

    def validate_data(self, data: Any) -> Any:
        """Validate ``data`` and return its decoded form.

        Strings and bytes are decoded as JSON first. Raises a
        :class:`~concordia.failures.DataValidationError` on the first violation.
        """
        payload = _decode_data(data)
        self.validate_at(payload, ())
        return payload

    def check_data(self, data: Any) -> DataValidationResult:
        """Like :meth:`validate_data` but report the outcome instead of raising."""
        try:
            return DataValidationResult.passed(self.validate_data(data))
        except DataValidationError as exc:
            return DataValidationResult.failed(exc)

    def validate_at(self, value: Any, path: tuple[PathSegment, ...]) -> None:
        """Validate an already decoded value found at ``path`` of a larger document."""
        self._controller.validate(self._root, value, path=path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Concordia):
            return NotImplemented
        return self._root == other._root

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Concordia(root={self._root.kind.value!r})"


def construct(
    schema_source: SchemaSource, controller: ValidationController | None = None
) -> Concordia:
    """Validate a schema document and return the Concordia instance for it."""
    return Concordia(schema_source, controller)


def construct_from_file(
    path: Path | str, controller: ValidationController | None = None
) -> Concordia:
    """Read a schema document from disk and construct it."""
    return Concordia(Path(path).read_text(encoding="utf-8"), controller)


def _build_referenced(
    document: str, resolver: ReferenceResolver, *, controller: ValidationController
) -> Concordia:
    return Concordia._assemble(_decode_schema(document), controller, resolver)


def _decode_schema(source: SchemaSource) -> Any:
    if not isinstance(source, str | bytes | bytearray):
        return source
    try:
        return _load_json(source)
    except ValueError as exc:
        raise SchemaSyntaxError(f"The schema is not valid JSON: {exc}") from exc


def _decode_data(data: Any) -> Any:
    if not isinstance(data, str | bytes | bytearray):
        return data
    try:
        return _load_json(data)
    except ValueError as exc:
        raise MalformedDataError(f"The data is not valid JSON: {exc}") from exc


def _load_json(text: str | bytes | bytearray) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")
