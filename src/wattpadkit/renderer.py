"""Chapter markup renderer.

Turns the HTML body of a story part into an ordered sequence of content
blocks. Only ``<p data-p-id>`` elements are story text; everything else on
the page is boilerplate and is ignored.

Per paragraph, in document order:
  1. Every ``<img src>`` becomes one ImageBlock, its source resolved against
     the document base URL.
  2. If the paragraph has no text left besides its images (or only
     whitespace), it contributes nothing more.
  3. Otherwise its child nodes are walked and tokenized into styled words,
     which become one TextBlock.

So a paragraph mixing images and text yields its images first, then its text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlsplit

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from wattpadkit.models.document import (
    ContentBlock,
    ImageBlock,
    RenderedPage,
    Style,
    StyledWord,
    TextBlock,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bs4.element import PageElement

log = structlog.get_logger()

PARAGRAPH_SELECTOR = "p[data-p-id]"

_TAG_STYLES: dict[str, Style] = {
    "b": Style.BOLD,
    "strong": Style.BOLD,
    "i": Style.ITALIC,
    "em": Style.ITALIC,
}
_NON_TEXT_TAGS = frozenset({"script", "style", "template"})

# HTML whitespace plus the non-breaking space. Other Unicode spaces are text.
_WHITESPACE_CHARS = " \t\n\f\r\xa0"
_WHITESPACE_RE = re.compile(r"[ \t\n\f\r\xa0]+")
# Zero-width split before and after every whitespace character, so words and
# the spaces between them come out as separate tokens.
_TOKEN_BOUNDARY_RE = re.compile(r"(?<=[ \t\n\f\r\xa0])|(?=[ \t\n\f\r\xa0])")


def tokenize(text: str, style: Style = Style.GENERAL) -> list[StyledWord]:
    """Split a text node into styled tokens.

    Whitespace runs collapse to a single space first, then the text is cut at
    every whitespace boundary. Spaces are kept as their own tokens so joining
    the token texts reproduces the normalized text exactly.
    """
    normalized = _WHITESPACE_RE.sub(" ", text)
    return [
        StyledWord(text=token, style=style)
        for token in _TOKEN_BOUNDARY_RE.split(normalized)
        if token
    ]


def style_for(element: Tag) -> Style:
    """Style an element imposes on the text it directly owns."""
    return _TAG_STYLES.get(element.name.lower(), Style.GENERAL)


def walk(nodes: Iterable[PageElement], style: Style = Style.GENERAL) -> list[StyledWord]:
    """Collect styled words from ``nodes`` and their descendants, in document order.

    Text nodes take the active ``style``. Each element re-resolves the style
    for its own subtree: the innermost ``b``/``strong``/``i``/``em`` wins, and
    any other element resets to GENERAL. Styles never combine.
    """
    words: list[StyledWord] = []
    for node in nodes:
        if isinstance(node, PreformattedString):
            # comments, CDATA, doctype, processing instructions
            continue
        if isinstance(node, NavigableString):
            words.extend(tokenize(str(node), style))
        elif isinstance(node, Tag):
            if node.name.lower() in _NON_TEXT_TAGS:
                continue
            words.extend(walk(node.children, style_for(node)))
    return words


def _document_base(soup: BeautifulSoup, base_url: str) -> str:
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        return urljoin(base_url, str(base_tag["href"]).strip())
    return base_url


def _absolute_src(img: Tag, base_url: str) -> str | None:
    src = str(img.get("src") or "").strip()
    if not src:
        return None
    resolved = urljoin(base_url, src)
    return resolved if urlsplit(resolved).scheme else None


def extract_blocks(html: str, base_url: str) -> list[ContentBlock]:
    """Walk the story paragraphs of ``html`` and return their blocks in order."""
    soup = BeautifulSoup(html, "html.parser")
    base = _document_base(soup, base_url)
    blocks: list[ContentBlock] = []

    for paragraph in soup.select(PARAGRAPH_SELECTOR):
        for img in paragraph.select("img[src]"):
            url = _absolute_src(img, base)
            if url is not None:
                blocks.append(ImageBlock(url=url))

        if not paragraph.get_text().strip(_WHITESPACE_CHARS):
            continue

        words = walk(paragraph.children)
        if words:
            blocks.append(TextBlock(words=tuple(words)))

    return blocks


def build_page(title: str, blocks: Iterable[ContentBlock]) -> RenderedPage:
    return RenderedPage(title=title, blocks=tuple(blocks))


def render_html(html: str, *, title: str, base_url: str) -> RenderedPage:
    """Render a part's HTML body into a RenderedPage."""
    blocks = extract_blocks(html, base_url)
    page = build_page(title, blocks)
    log.debug(
        "render_complete",
        title=title,
        blocks=len(page.blocks),
        images=sum(1 for block in page.blocks if isinstance(block, ImageBlock)),
    )
    return page
