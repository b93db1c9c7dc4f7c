from __future__ import annotations

from wattpadkit.models.document import (
    ContentBlock,
    ImageBlock,
    RenderedPage,
    Style,
    StyledWord,
    TextBlock,
)
from wattpadkit.models.story import Part, PublishedPart, Story, User

__all__ = [
    # document
    "Style",
    "StyledWord",
    "TextBlock",
    "ImageBlock",
    "ContentBlock",
    "RenderedPage",
    # story
    "User",
    "PublishedPart",
    "Part",
    "Story",
]
