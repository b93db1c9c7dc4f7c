"""Client facade: story lookup, part rendering, cache management.

WattpadClient builds its collaborators once (settings, httpx client, disk
cache, fetcher) and injects the cache into the fetcher. Each public call is
a synchronous chain: resolve URL, fetch (through the cache), parse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from wattpadkit import urls
from wattpadkit.cache import DiskCache
from wattpadkit.config import Settings
from wattpadkit.errors import InvalidResponseError
from wattpadkit.fetcher import Fetcher, build_http_client
from wattpadkit.models.story import Story
from wattpadkit.renderer import render_html

if TYPE_CHECKING:
    import httpx

    from wattpadkit.models.document import RenderedPage
    from wattpadkit.models.story import Part
    from wattpadkit.protocols import CacheProtocol

log = structlog.get_logger()


def _parse_story(payload: Any, url: str) -> Story:
    try:
        return Story.model_validate(payload)
    except ValidationError as exc:
        raise InvalidResponseError(
            f"Unexpected story record shape for {url}: {exc}", url=url
        ) from exc


class WattpadClient:
    """Entry point for fetching stories and rendering parts."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.Client | None = None,
        cache: CacheProtocol | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self._owns_http_client = http_client is None
        self._http_client = http_client or build_http_client(self.settings.http)

        if cache is None and self.settings.cache.enabled:
            cache = DiskCache(self.settings.cache.directory)
        self.cache = cache
        self.fetcher = Fetcher(
            self._http_client, cache, use_cache=self.settings.cache.enabled
        )

    def __enter__(self) -> WattpadClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http_client:
            self._http_client.close()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_story_by_id(self, story_id: int) -> Story:
        url = urls.story_by_id(story_id, self.settings.http.base_url)
        return _parse_story(self.fetcher.fetch_json(url), url)

    def get_story_by_part_id(self, part_id: int) -> Story:
        """Look up the story a part belongs to. The story sits under ``group``."""
        url = urls.part_by_id(part_id, self.settings.http.base_url)
        payload = self.fetcher.fetch_json(url)
        group = payload.get("group")
        if not isinstance(group, dict):
            raise InvalidResponseError(
                f"Part response has no 'group' object for {url}", url=url
            )
        return _parse_story(group, url)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_part(self, part: Part) -> RenderedPage:
        """Fetch a part's HTML text (cache allowed) and render it."""
        text_url = urls.resolve_text_url(part.text_url, self.settings.http.base_url)
        bound = log.bind(part_id=part.id, url=text_url)

        html = self.fetcher.fetch_raw(text_url, allow_cache=True)
        page = render_html(html, title=part.title, base_url=text_url)

        bound.info("part_rendered", blocks=len(page.blocks))
        return page

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        if self.fetcher.caching_enabled and self.cache is not None:
            self.cache.clear()
