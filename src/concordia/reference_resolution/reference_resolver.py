"""Detects, fetches and constructs referenced schemas during one construction pass."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from concordia.failures.failure_types import (
    ConcordiaError,
    CyclicReferenceError,
    InvalidReferenceError,
    PathSegment,
    RootTypeMismatchError,
    SchemaFetchFailedError,
    format_pointer,
)
from concordia.schema_model.schema_nodes import KEYWORD_REFERENCE, SchemaKind

from .schema_fetchers import SchemaFetcher

if TYPE_CHECKING:
    from concordia.schema_instance.concordia import Concordia

_LOGGER = logging.getLogger(__name__)

InstanceBuilder = Callable[[str, "ReferenceResolver"], "Concordia"]


class ReferenceResolver:
    """Resolves ``$ref`` slots for a single top-level construction.

    The resolver keeps the chain of URLs currently being constructed, so a
    reference back into that chain fails instead of recursing, and caches every
    sub-instance it built so a URL is fetched at most once per pass.
    """

    def __init__(self, fetcher: SchemaFetcher, build_instance: InstanceBuilder) -> None:
        self._fetcher = fetcher
        self._build_instance = build_instance
        self._stack: list[str] = []
        self._resolved: dict[str, Concordia] = {}

    @property
    def resolved_urls(self) -> tuple[str, ...]:
        return tuple(self._resolved)

    def resolve(
        self,
        raw: Mapping[str, Any],
        *,
        required_kind: SchemaKind | None,
        path: tuple[PathSegment, ...],
    ) -> Concordia | None:
        """Return the referenced sub-instance, or None when ``raw`` is not a reference."""
        if KEYWORD_REFERENCE not in raw:
            return None
        url = raw[KEYWORD_REFERENCE]
        if not isinstance(url, str) or not url.strip():
            raise InvalidReferenceError(
                f"The '{KEYWORD_REFERENCE}' value must be a non-empty string URL.",
                path=path,
                fragment=dict(raw),
            )

        target = self._instance_for(url, path)
        if required_kind is not None and target.root.kind is not required_kind:
            raise RootTypeMismatchError(
                f"The schema referenced by {url} must have a root type of "
                f"'{required_kind.value}', not '{target.root.kind.value}'.",
                path=path,
                fragment=dict(raw),
            )
        return target

    def _instance_for(self, url: str, path: tuple[PathSegment, ...]) -> Concordia:
        if url in self._stack:
            chain = " -> ".join([*self._stack, url])
            raise CyclicReferenceError(f"Cyclic schema reference: {chain}", path=path, fragment=url)

        cached = self._resolved.get(url)
        if cached is not None:
            _LOGGER.debug("Reusing schema already resolved for %s", url)
            return cached

        document = self._fetch(url, path)
        self._stack.append(url)
        try:
            instance = self._build_instance(document, self)
        except ConcordiaError as exc:
            exc.add_note(f"Raised while resolving {url} referenced at {format_pointer(path)}")
            raise
        finally:
            self._stack.pop()

        _LOGGER.debug("Resolved schema reference %s", url)
        self._resolved[url] = instance
        return instance

    def _fetch(self, url: str, path: tuple[PathSegment, ...]) -> str:
        _LOGGER.debug("Fetching referenced schema %s", url)
        try:
            response = self._fetcher.fetch(url)
        except OSError as exc:
            raise SchemaFetchFailedError(
                f"The referenced schema {url} could not be retrieved: {exc}",
                path=path,
                fragment=url,
            ) from exc

        if not response.is_success:
            raise SchemaFetchFailedError(
                f"The referenced schema {url} could not be retrieved ({response.status}).",
                path=path,
                fragment=response.body or None,
            )
        if not response.body or not response.body.strip():
            raise SchemaFetchFailedError(
                f"The referenced schema {url} returned an empty document.",
                path=path,
                fragment=url,
            )
        return response.body
