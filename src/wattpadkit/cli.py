"""Command-line entry point.

Responsibilities (and nothing more):
- Configure structlog
- Build a WattpadClient from Settings plus command-line overrides
- Print story summaries and rendered parts to stdout
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

import structlog

from wattpadkit import __version__
from wattpadkit.client import WattpadClient
from wattpadkit.config import Settings
from wattpadkit.errors import WattpadError
from wattpadkit.models.document import ImageBlock, TextBlock

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

    from wattpadkit.models.document import RenderedPage
    from wattpadkit.models.story import Story

log = structlog.get_logger()

_DESCRIPTION_PREVIEW = 150


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout carries the rendered output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def print_story(story: Story, out: TextIO) -> None:
    last_update = (
        story.last_published_part.create_date.isoformat()
        if story.last_published_part is not None
        else "N/A"
    )
    print(f"Title: {story.title}", file=out)
    print(f"Author: {story.author.name} (@{story.author.username})", file=out)
    print(f"Description: {_truncate(story.description, _DESCRIPTION_PREVIEW)}", file=out)
    print(f"Tags: {', '.join(story.tags)}", file=out)
    print(f"Parts: {len(story.parts)}", file=out)
    print(f"URL: {story.url}", file=out)
    print(f"Cover: {story.cover}", file=out)
    print(f"Is Paywalled: {story.is_paywalled}", file=out)
    print(f"Last Update: {last_update}", file=out)


def print_page(page: RenderedPage, out: TextIO) -> None:
    print(f"--- START OF PART: {page.title} ---", file=out)
    for block in page.blocks:
        if isinstance(block, TextBlock):
            print(block.text.strip(), file=out)
        elif isinstance(block, ImageBlock):
            print(f"[IMAGE: {block.url}]", file=out)
        print(file=out)
    print("--- END OF PART ---", file=out)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_story(client: WattpadClient, args: argparse.Namespace, out: TextIO) -> int:
    print_story(client.get_story_by_id(args.story_id), out)
    return 0


def _cmd_render(client: WattpadClient, args: argparse.Namespace, out: TextIO) -> int:
    story = client.get_story_by_part_id(args.part_id)
    part = next((p for p in story.parts if p.id == args.part_id), None)
    if part is None:
        print(f"Part {args.part_id} not listed in story {story.id}", file=sys.stderr)
        return 1
    print_page(client.render_part(part), out)
    return 0


def _cmd_clear_cache(client: WattpadClient, args: argparse.Namespace, out: TextIO) -> int:
    client.clear_cache()
    print("Cache cleared.", file=out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wattpadkit",
        description="Fetch Wattpad stories and render their parts as styled text.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass the on-disk response cache",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Override the configured log format",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    story = sub.add_parser("story", help="Print a story's metadata")
    story.add_argument("story_id", type=int)
    story.set_defaults(handler=_cmd_story)

    render = sub.add_parser("render", help="Render one part of a story")
    render.add_argument("part_id", type=int)
    render.set_defaults(handler=_cmd_render)

    clear = sub.add_parser("clear-cache", help="Delete all cached responses")
    clear.set_defaults(handler=_cmd_clear_cache)

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings()
    updates: dict[str, object] = {}
    if args.no_cache:
        updates["cache"] = settings.cache.model_copy(update={"enabled": False})
    logging_updates = {
        key: value
        for key, value in (("level", args.log_level), ("format", args.log_format))
        if value is not None
    }
    if logging_updates:
        updates["logging"] = settings.logging.model_copy(update=logging_updates)
    return settings.model_copy(update=updates) if updates else settings


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _settings_from_args(args)
    _setup_logging(settings)

    try:
        with WattpadClient(settings) as client:
            return args.handler(client, args, sys.stdout)
    except WattpadError as exc:
        log.error("command_failed", command=args.command, code=exc.code)
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
