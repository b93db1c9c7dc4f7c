"""HTTP fetcher with a read-through disk cache.

All network I/O goes through a single Fetcher instance. The Fetcher receives
an ``httpx.Client`` and an optional cache via constructor injection; the
owning WattpadClient controls both lifetimes.

Every call performs at most one request. Nothing here retries.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import structlog

from wattpadkit.errors import (
    ApiError,
    EmptyBodyError,
    NetworkError,
    NotFoundError,
    NotJsonError,
)

if TYPE_CHECKING:
    from wattpadkit.config import HttpSettings
    from wattpadkit.protocols import CacheProtocol

log = structlog.get_logger()


def build_http_client(settings: HttpSettings) -> httpx.Client:
    """Create the shared httpx client. Called once per WattpadClient."""
    return httpx.Client(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.read_timeout, connect=settings.connect_timeout),
        headers={"User-Agent": settings.user_agent},
    )


def _error_envelope(payload: dict) -> bool:
    """True when a JSON object is one of the API's error envelopes."""
    error = payload.get("error")
    if error is not None and not isinstance(error, (dict, list)):
        return True
    return "error_code" in payload


class Fetcher:
    """Issues GET requests and mediates every access to the response cache."""

    def __init__(
        self,
        client: httpx.Client,
        cache: CacheProtocol | None = None,
        *,
        use_cache: bool = True,
    ) -> None:
        self._client = client
        self._cache = cache
        self._use_cache = use_cache

    @property
    def caching_enabled(self) -> bool:
        return self._use_cache and self._cache is not None

    def fetch_raw(self, url: str, allow_cache: bool = True) -> str:
        """Return the body of ``url`` as text.

        The cache is consulted and populated only when caching is enabled on
        the fetcher *and* ``allow_cache`` is true. The cache key is the exact
        request URL, query string included.
        """
        url = str(url)
        cache = self._cache if self._use_cache and allow_cache else None

        if cache is not None:
            cached = cache.get(url)
            if cached is not None:
                log.debug("cache_hit", url=url)
                return cached
            log.debug("cache_miss", url=url)

        try:
            response = self._client.get(url)
            body = response.text
        except httpx.HTTPError as exc:
            raise NetworkError(f"Network error fetching {url}: {exc}", url=url) from exc

        if not response.is_success:
            if response.status_code == 404:
                raise NotFoundError(url)
            raise ApiError(
                f"HTTP {response.status_code} {response.reason_phrase} fetching {url}",
                url=url,
            )

        if not body:
            raise EmptyBodyError(url)

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(body),
        )

        if cache is not None:
            cache.put(url, body)
        return body

    def fetch_json(self, url: str) -> dict:
        """Fetch ``url`` (cache allowed) and parse it as a JSON object.

        Raises NotJsonError if the body does not parse or its root is not an
        object, and ApiError if the object is an API error envelope.
        """
        url = str(url)
        raw = self.fetch_raw(url, allow_cache=True)

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise NotJsonError(
                f"Failed to parse response as JSON for {url}", url=url, body=raw
            ) from exc

        if not isinstance(payload, dict):
            raise NotJsonError(
                f"Expected a JSON object but got {type(payload).__name__} for {url}",
                url=url,
                body=raw,
            )

        if _error_envelope(payload):
            message = payload.get("message") or payload.get("error") or "unknown error"
            raise ApiError(f"API returned an error: {message}", url=url, payload=payload)

        return payload
