"""Validation controller orchestrating definition-time and data-time traversal."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from concordia.data_validation.data_validator import validate_value
from concordia.extension_registry.extension_hooks import ExtensionRegistry
from concordia.failures.failure_types import ConcordiaError, PathSegment
from concordia.reference_resolution.reference_resolver import InstanceBuilder, ReferenceResolver
from concordia.reference_resolution.schema_fetchers import SchemaFetcher, UrllibSchemaFetcher
from concordia.schema_definition.definition_validator import (
    build_schema_tree,
    check_root_constraints,
)
from concordia.schema_model.schema_nodes import SchemaKind, SchemaNode, SchemaSlot

ALL_KINDS = frozenset(SchemaKind)


class ValidationController:
    """Decides which kinds are legal and how extension hooks are dispatched.

    A controller owns its extension registry and its schema fetcher, so two
    controllers never share hooks. Subclasses may override
    :meth:`run_schema_extensions` and :meth:`run_data_extensions` to change
    the dispatch policy; the traversals themselves stay untouched.
    """

    def __init__(
        self,
        *,
        kinds: Iterable[SchemaKind | str] | None = None,
        registry: ExtensionRegistry | None = None,
        fetcher: SchemaFetcher | None = None,
    ) -> None:
        self._kinds = ALL_KINDS if kinds is None else frozenset(SchemaKind(kind) for kind in kinds)
        self._registry = registry if registry is not None else ExtensionRegistry()
        self._fetcher = fetcher if fetcher is not None else UrllibSchemaFetcher()

    @property
    def kinds(self) -> frozenset[SchemaKind]:
        return self._kinds

    @property
    def registry(self) -> ExtensionRegistry:
        return self._registry

    @property
    def fetcher(self) -> SchemaFetcher:
        return self._fetcher

    def new_resolver(self, build_instance: InstanceBuilder) -> ReferenceResolver:
        """Start a resolution pass for one top-level construction."""
        return ReferenceResolver(self._fetcher, build_instance)

    def build(self, document: Any, resolver: ReferenceResolver) -> SchemaNode:
        """Check the root constraints and build the schema tree of ``document``."""
        root_document = check_root_constraints(document)
        return build_schema_tree(root_document, controller=self, resolver=resolver)

    def validate(self, slot: SchemaSlot, value: Any, *, path: tuple[PathSegment, ...] = ()) -> None:
        validate_value(slot, value, controller=self, path=path)

    def run_schema_extensions(
        self, kind: SchemaKind, raw: Mapping[str, Any], path: tuple[PathSegment, ...]
    ) -> None:
        for check in self._registry.schema_checks(kind):
            try:
                check(raw)
            except ConcordiaError as exc:
                exc.locate(path)
                raise

    def run_data_extensions(
        self, node: SchemaNode, value: Any, path: tuple[PathSegment, ...]
    ) -> None:
        for check in self._registry.data_checks(node.kind):
            try:
                check(node, value)
            except ConcordiaError as exc:
                exc.locate(path)
                raise


def default_controller(*, fetcher: SchemaFetcher | None = None) -> ValidationController:
    """Return a fresh controller with every kind and no extensions."""
    return ValidationController(fetcher=fetcher)
