"""API URL builders and text-location resolution."""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit

import httpx

from wattpadkit.errors import InvalidLocationError

STORY_FIELDS = (
    "id,title,description,url,cover,user(name,username,avatar),isPaywalled,"
    "lastPublishedPart(id,createDate),parts(id,title,text_url),tags"
)
PART_FIELDS = f"text_url,group({STORY_FIELDS})"


def story_by_id(story_id: int, base_url: str) -> str:
    url = httpx.URL(base_url).join(f"/api/v3/stories/{story_id}")
    return str(url.copy_merge_params({"fields": STORY_FIELDS}))


def part_by_id(part_id: int, base_url: str) -> str:
    url = httpx.URL(base_url).join(f"/api/v4/parts/{part_id}")
    return str(url.copy_merge_params({"fields": PART_FIELDS}))


def resolve_text_url(text_url: str | None, base_url: str) -> str:
    """Resolve a part's text location (often site-relative) to an absolute URL.

    >>> resolve_text_url("/apiv2/?m=storytext&id=1", "https://www.wattpad.com")
    'https://www.wattpad.com/apiv2/?m=storytext&id=1'
    """
    if not text_url or not text_url.strip():
        raise InvalidLocationError("Part has no text URL")

    resolved = urljoin(base_url, text_url.strip())
    parts = urlsplit(resolved)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidLocationError(f"Cannot resolve text URL to an absolute URL: {text_url!r}")
    return resolved
