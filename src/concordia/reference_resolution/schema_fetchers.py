"""Schema fetcher collaborators used to retrieve referenced schema documents."""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import unquote

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = "concordia"


@dataclass(frozen=True)
class FetchResponse:
    """Status and body returned for one fetched URL."""

    status: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @staticmethod
    def ok(body: str) -> FetchResponse:
        return FetchResponse(status=200, body=body)

    @staticmethod
    def not_found(url: str) -> FetchResponse:
        return FetchResponse(status=404, body=f"No schema document is available for {url}.")


class SchemaFetcher(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for retrieving a referenced schema document.

    Transport problems are reported by raising ``OSError``; a reachable but
    unsuccessful location is reported through the response status.
    """

    def fetch(self, url: str) -> FetchResponse: ...


class UrllibSchemaFetcher:  # pylint: disable=too-few-public-methods
    """Blocking HTTP(S) fetcher built on urllib."""

    def __init__(
        self,
        *,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent

    def fetch(self, url: str) -> FetchResponse:
        _LOGGER.debug("Requesting schema document %s", url)
        try:
            request = urllib.request.Request(
                url,
                headers={"User-Agent": self._user_agent, "Accept": "application/json"},
            )
            with urllib.request.urlopen(request, timeout=self._timeout_seconds) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                return FetchResponse(status=response.status, body=response.read().decode(charset))
        except urllib.error.HTTPError as exc:
            body = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
            return FetchResponse(status=exc.code, body=body)
        except (ValueError, LookupError, http.client.HTTPException) as exc:
            # Malformed URLs, truncated bodies and undecodable text.
            raise OSError(f"Schema document {url} could not be read: {exc}") from exc


class MirroredSchemaFetcher:  # pylint: disable=too-few-public-methods
    """Serves URL prefixes from local directories before falling back."""

    def __init__(
        self,
        mirrors: Mapping[str, Path | str],
        *,
        fallback: SchemaFetcher | None = None,
    ) -> None:
        # Longest prefix first so nested mirrors win over their parents.
        self._mirrors = sorted(
            ((prefix, Path(directory)) for prefix, directory in mirrors.items()),
            key=lambda item: len(item[0]),
            reverse=True,
        )
        self._fallback = fallback

    def fetch(self, url: str) -> FetchResponse:
        for prefix, directory in self._mirrors:
            if url.startswith(prefix):
                relative = unquote(url[len(prefix) :]).lstrip("/")
                return self._read_mirrored(url, directory, relative)
        if self._fallback is not None:
            return self._fallback.fetch(url)
        return FetchResponse.not_found(url)

    @staticmethod
    def _read_mirrored(url: str, directory: Path, relative: str) -> FetchResponse:
        try:
            base = directory.resolve()
            candidate = (base / relative).resolve()
            if not candidate.is_relative_to(base) or not candidate.is_file():
                return FetchResponse.not_found(url)
            _LOGGER.debug("Serving %s from mirror file %s", url, candidate)
            return FetchResponse.ok(candidate.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise OSError(f"Mirror file for {url} could not be read: {exc}") from exc


class StaticSchemaFetcher:  # pylint: disable=too-few-public-methods
    """In-memory fetcher over a fixed URL to document mapping."""

    def __init__(self, documents: Mapping[str, str | Mapping[str, Any]]) -> None:
        self._documents = {
            url: document if isinstance(document, str) else json.dumps(document)
            for url, document in documents.items()
        }
        self.requested: list[str] = []

    def fetch(self, url: str) -> FetchResponse:
        self.requested.append(url)
        document = self._documents.get(url)
        if document is None:
            return FetchResponse.not_found(url)
        return FetchResponse.ok(document)
