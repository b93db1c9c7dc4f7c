"""Story metadata records deserialized from the Wattpad JSON API."""

from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

if TYPE_CHECKING:
    from wattpadkit.client import WattpadClient
    from wattpadkit.models.document import RenderedPage

_TRAILING_ID_RE = re.compile(r"-\d+$")


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    username: str
    avatar: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _map_fullname(cls, data: Any) -> Any:
        # Story payloads send {"name", "username"}; user payloads send
        # {"fullname", "name"} where "name" is the handle.
        if isinstance(data, dict) and data.get("fullname") is not None:
            return {
                "name": data["fullname"],
                "username": data.get("name"),
                "avatar": data.get("avatar"),
            }
        return data


class PublishedPart(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str | None = None
    create_date: datetime = Field(alias="createDate")


class Part(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    text_url: str | None = None

    @field_validator("text_url", mode="before")
    @classmethod
    def _flatten_text_url(cls, v: Any) -> Any:
        # {"text": "https://...", "refresh_token": "..."}
        if isinstance(v, dict):
            return v.get("text")
        return v

    def render_with(self, client: WattpadClient) -> RenderedPage:
        return client.render_part(self)


class Story(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    author: User = Field(alias="user")
    description: str = ""
    cover: str | None = None
    url: str | None = None
    last_published_part: PublishedPart | None = Field(default=None, alias="lastPublishedPart")
    parts: tuple[Part, ...] = ()
    is_paywalled: bool = Field(default=False, alias="isPaywalled")
    tags: tuple[str, ...] = ()

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("url")
    @classmethod
    def _strip_trailing_id(cls, v: str | None) -> str | None:
        """``https://www.wattpad.com/story/123-title-456`` keeps the path but drops ``-456``."""
        if v is None:
            return v
        head, sep, tail = v.rpartition("/")
        return head + sep + _TRAILING_ID_RE.sub("", tail)

    @field_validator("last_published_part", mode="before")
    @classmethod
    def _ignore_malformed_last_part(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, PublishedPart)) else None

    @field_validator("parts", mode="before")
    @classmethod
    def _none_parts(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def _string_tags_only(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            return ()
        return tuple(tag for tag in v if isinstance(tag, str))
