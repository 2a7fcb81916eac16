"""Reference resolution exports."""

from .reference_resolver import InstanceBuilder, ReferenceResolver
from .schema_fetchers import (
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    FetchResponse,
    MirroredSchemaFetcher,
    SchemaFetcher,
    StaticSchemaFetcher,
    UrllibSchemaFetcher,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_USER_AGENT",
    "FetchResponse",
    "SchemaFetcher",
    "UrllibSchemaFetcher",
    "MirroredSchemaFetcher",
    "StaticSchemaFetcher",
    "InstanceBuilder",
    "ReferenceResolver",
]
