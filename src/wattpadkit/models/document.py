"""Rendered document model.

A RenderedPage owns an ordered tuple of content blocks. Each block is either
a TextBlock (a non-empty run of styled words) or an ImageBlock (an absolute
image URL). It is a discriminated union on ``kind``, so a block can never carry
both payloads. All models are frozen.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Style(StrEnum):
    GENERAL = "general"
    BOLD = "bold"
    ITALIC = "italic"


class StyledWord(BaseModel):
    """Smallest unit of rendered text: one token with one inline style."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    style: Style = Style.GENERAL


class TextBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    words: tuple[StyledWord, ...] = Field(min_length=1)

    @property
    def text(self) -> str:
        return "".join(word.text for word in self.words)


class ImageBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    url: str = Field(min_length=1)

    @property
    def text(self) -> str:
        return f"[Image: {self.url}]"


ContentBlock = Annotated[TextBlock | ImageBlock, Field(discriminator="kind")]


class RenderedPage(BaseModel):
    """One rendered part: its title and its blocks in document order."""

    model_config = ConfigDict(frozen=True)

    title: str
    blocks: tuple[ContentBlock, ...] = ()

    @property
    def full_text(self) -> str:
        """Plain text of every block, images as placeholders, separated by blank lines."""
        return "\n\n".join(block.text for block in self.blocks)
