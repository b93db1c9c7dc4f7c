"""Unit tests for wattpadkit.models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from wattpadkit.models import (
    ContentBlock,
    ImageBlock,
    Part,
    PublishedPart,
    RenderedPage,
    Story,
    Style,
    StyledWord,
    TextBlock,
    User,
)

# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------


class TestStyledWord:
    def test_default_style(self) -> None:
        assert StyledWord(text="hi").style == Style.GENERAL

    def test_empty_text_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StyledWord(text="", style=Style.BOLD)

    def test_frozen(self) -> None:
        word = StyledWord(text="hi")
        with pytest.raises(ValidationError):
            word.text = "bye"  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert StyledWord(text="a", style=Style.BOLD) == StyledWord(text="a", style=Style.BOLD)


class TestContentBlock:
    def test_text_block_rejects_empty_words(self) -> None:
        with pytest.raises(ValidationError):
            TextBlock(words=())

    def test_image_block_rejects_empty_url(self) -> None:
        with pytest.raises(ValidationError):
            ImageBlock(url="")

    def test_wrong_accessor_on_image(self) -> None:
        block = ImageBlock(url="https://img.example.com/a.png")
        with pytest.raises(AttributeError):
            block.words  # noqa: B018

    def test_wrong_accessor_on_text(self) -> None:
        block = TextBlock(words=(StyledWord(text="x"),))
        with pytest.raises(AttributeError):
            block.url  # noqa: B018

    def test_text_joins_words(self) -> None:
        words = (
            StyledWord(text="Hello"),
            StyledWord(text=" "),
            StyledWord(text="there", style=Style.ITALIC),
        )
        assert TextBlock(words=words).text == "Hello there"

    def test_image_placeholder_text(self) -> None:
        assert ImageBlock(url="https://x.test/a.png").text == "[Image: https://x.test/a.png]"

    def test_discriminated_union(self) -> None:
        adapter = TypeAdapter(ContentBlock)
        image = adapter.validate_python({"kind": "image", "url": "https://x.test/a.png"})
        text = adapter.validate_python({"kind": "text", "words": [{"text": "hi"}]})
        assert isinstance(image, ImageBlock)
        assert isinstance(text, TextBlock)

    def test_union_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            TypeAdapter(ContentBlock).validate_python({"kind": "video", "url": "x"})


class TestRenderedPage:
    def test_full_text(self) -> None:
        page = RenderedPage(
            title="Chapter One",
            blocks=(
                TextBlock(words=(StyledWord(text="First."),)),
                ImageBlock(url="https://x.test/a.png"),
                TextBlock(words=(StyledWord(text="Last."),)),
            ),
        )
        assert page.full_text == "First.\n\n[Image: https://x.test/a.png]\n\nLast."

    def test_empty_page(self) -> None:
        page = RenderedPage(title="Empty")
        assert page.blocks == ()
        assert page.full_text == ""

    def test_frozen(self) -> None:
        page = RenderedPage(title="T")
        with pytest.raises(ValidationError):
            page.title = "U"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Story metadata
# ---------------------------------------------------------------------------


class TestUser:
    def test_name_and_username(self) -> None:
        user = User.model_validate({"name": "Jane", "username": "jane", "avatar": None})
        assert (user.name, user.username, user.avatar) == ("Jane", "jane", None)

    def test_fullname_mapping(self) -> None:
        user = User.model_validate({"fullname": "Jane Writer", "name": "janewrites"})
        assert user.name == "Jane Writer"
        assert user.username == "janewrites"

    def test_fullname_without_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User.model_validate({"fullname": "Jane Writer"})

    def test_missing_username_rejected(self) -> None:
        with pytest.raises(ValidationError):
            User.model_validate({"name": "Jane"})


class TestPart:
    def test_nested_text_url(self) -> None:
        part = Part.model_validate(
            {"id": 7, "title": "One", "text_url": {"text": "/apiv2/?id=7", "refresh_token": "r"}}
        )
        assert part.text_url == "/apiv2/?id=7"

    def test_plain_text_url(self) -> None:
        part = Part.model_validate({"id": 7, "title": "One", "text_url": "/apiv2/?id=7"})
        assert part.text_url == "/apiv2/?id=7"

    def test_missing_text_url(self) -> None:
        assert Part.model_validate({"id": 7, "title": "One"}).text_url is None


class TestPublishedPart:
    def test_zulu_timestamp(self) -> None:
        part = PublishedPart.model_validate({"id": 1, "createDate": "2023-05-01T10:20:30Z"})
        assert part.create_date == datetime(2023, 5, 1, 10, 20, 30, tzinfo=UTC)


class TestStory:
    def test_full_record(self, story_payload: dict) -> None:
        story = Story.model_validate(story_payload)
        assert story.id == 336166598
        assert story.author.username == "janewrites"
        assert story.is_paywalled is False
        assert story.tags == ("romance", "drama")
        assert [p.title for p in story.parts] == ["Author's Note", "Chapter One"]
        assert story.last_published_part is not None
        assert story.last_published_part.id == 1321853400

    def test_url_trailing_id_stripped(self, story_payload: dict) -> None:
        story_payload["url"] = "https://www.wattpad.com/story/336166598-wounded-love-77"
        story = Story.model_validate(story_payload)
        assert story.url == "https://www.wattpad.com/story/336166598-wounded-love"

    def test_url_without_trailing_id_kept(self, story_payload: dict) -> None:
        story = Story.model_validate(story_payload)
        assert story.url == "https://www.wattpad.com/story/336166598-wounded-love"

    def test_defaults(self) -> None:
        story = Story.model_validate(
            {"id": 1, "title": "T", "user": {"name": "N", "username": "n"}}
        )
        assert story.description == ""
        assert story.parts == ()
        assert story.tags == ()
        assert story.last_published_part is None
        assert story.url is None

    def test_null_description(self, story_payload: dict) -> None:
        story_payload["description"] = None
        assert Story.model_validate(story_payload).description == ""

    def test_non_string_tags_dropped(self, story_payload: dict) -> None:
        story_payload["tags"] = ["ok", 5, None, {"x": 1}, "fine"]
        assert Story.model_validate(story_payload).tags == ("ok", "fine")

    def test_malformed_last_published_part_ignored(self, story_payload: dict) -> None:
        story_payload["lastPublishedPart"] = "yesterday"
        assert Story.model_validate(story_payload).last_published_part is None

    def test_missing_user_rejected(self, story_payload: dict) -> None:
        del story_payload["user"]
        with pytest.raises(ValidationError):
            Story.model_validate(story_payload)
