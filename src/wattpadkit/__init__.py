"""wattpadkit: fetch Wattpad stories and render chapters into a styled document model.

Typical use::

    from wattpadkit import WattpadClient

    with WattpadClient() as client:
        story = client.get_story_by_id(123)
        page = client.render_part(story.parts[0])
"""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wattpadkit")
except PackageNotFoundError:
    # Running from a source checkout with no installed metadata.
    warnings.warn(
        "wattpadkit is not installed; reporting version '0.0.0+unknown'.",
        RuntimeWarning,
        stacklevel=2,
    )
    __version__ = "0.0.0+unknown"

# __version__ is bound first because cli imports it from here.
from wattpadkit.cache import DiskCache  # noqa: E402
from wattpadkit.client import WattpadClient  # noqa: E402
from wattpadkit.config import Settings  # noqa: E402
from wattpadkit.errors import ErrorCode, WattpadError  # noqa: E402
from wattpadkit.models import (  # noqa: E402
    ImageBlock,
    Part,
    RenderedPage,
    Story,
    Style,
    StyledWord,
    TextBlock,
    User,
)
from wattpadkit.renderer import render_html  # noqa: E402

__all__ = [
    "DiskCache",
    "ErrorCode",
    "ImageBlock",
    "Part",
    "RenderedPage",
    "Settings",
    "Story",
    "Style",
    "StyledWord",
    "TextBlock",
    "User",
    "WattpadClient",
    "WattpadError",
    "__version__",
    "render_html",
]
