"""Builds fetchers and validation controllers from configuration."""

from __future__ import annotations

from concordia.extension_registry.extension_hooks import ExtensionRegistry
from concordia.extension_registry.range_bounds import register_number_range
from concordia.reference_resolution.schema_fetchers import (
    MirroredSchemaFetcher,
    SchemaFetcher,
    UrllibSchemaFetcher,
)
from concordia.validation_control.validation_controller import ValidationController

from .runtime_settings import Configuration, ReferenceSettings


def build_schema_fetcher(settings: ReferenceSettings) -> SchemaFetcher:
    """Return the fetcher described by ``settings``.

    Mirrors are consulted first; remote retrieval is the fallback unless it
    is disabled, in which case unmirrored URLs are reported as not found.
    """
    remote: SchemaFetcher | None = None
    if settings.allow_remote:
        remote = UrllibSchemaFetcher(
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )
    if remote is not None and not settings.mirrors:
        return remote
    return MirroredSchemaFetcher(settings.mirrors, fallback=remote)


def build_controller(
    configuration: Configuration, registry: ExtensionRegistry | None = None
) -> ValidationController:
    """Return a controller wired with the configured fetcher and extensions.

    A supplied ``registry`` is copied before the configured extensions are
    added, so the caller's registry is left unchanged.
    """
    active_registry = registry.copy() if registry is not None else ExtensionRegistry()
    number_range = configuration.extensions.number_range
    if number_range is not None:
        register_number_range(
            active_registry, min_key=number_range.min_key, max_key=number_range.max_key
        )
    return ValidationController(
        registry=active_registry,
        fetcher=build_schema_fetcher(configuration.references),
    )
