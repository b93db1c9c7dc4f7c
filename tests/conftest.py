"""Shared test fixtures for the wattpadkit test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from wattpadkit.cache import DiskCache
from wattpadkit.config import CacheSettings, Settings

if TYPE_CHECKING:
    from pathlib import Path

BASE_URL = "https://www.wattpad.com"
TEXT_URL = "https://www.wattpad.com/apiv2/?m=storytext&id=1321853334"


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture()
def cache(cache_dir: Path) -> DiskCache:
    """Disk cache rooted in an isolated tmp directory (not created yet)."""
    return DiskCache(cache_dir)


@pytest.fixture()
def settings(cache_dir: Path) -> Settings:
    return Settings(cache=CacheSettings(enabled=True, directory=str(cache_dir)))


@pytest.fixture()
def story_payload() -> dict:
    """Story record as returned by /api/v3/stories/{id}."""
    return {
        "id": 336166598,
        "title": "Wounded Love",
        "user": {
            "name": "Jane Writer",
            "username": "janewrites",
            "avatar": "https://img.wattpad.com/useravatar/janewrites.128.jpg",
        },
        "description": "A story about a wound and a love.",
        "url": "https://www.wattpad.com/story/336166598-wounded-love",
        "cover": "https://img.wattpad.com/cover/336166598-256-k.jpg",
        "isPaywalled": False,
        "lastPublishedPart": {"id": 1321853400, "createDate": "2023-05-01T10:20:30Z"},
        "parts": [
            {
                "id": 1321853334,
                "title": "Author's Note",
                "text_url": {"text": TEXT_URL, "refresh_token": "abc"},
            },
            {
                "id": 1321853400,
                "title": "Chapter One",
                "text_url": {"text": "/apiv2/?m=storytext&id=1321853400"},
            },
        ],
        "tags": ["romance", "drama"],
    }


@pytest.fixture()
def chapter_html() -> str:
    """Story text as served by the storytext endpoint."""
    return (
        "<html><body>"
        '<div class="header">Boilerplate <b>nav</b></div>'
        '<p data-p-id="a1">It was <b>cold</b> that night.</p>'
        '<p data-p-id="a2"><img src="/images/map.png"></p>'
        "<p>Not story text.</p>"
        '<p data-p-id="a3">She <i>whispered</i> his name.</p>'
        "</body></html>"
    )
