"""Command line entry point: load a section and print its country map and highlights."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, Union

from .classifier import load_blocklist
from .config import Settings, load_settings
from .core import Ingestor, Session
from .exceptions import AuthError, NewsFetchError
from .fetcher import FeedSource, GuardianSource
from .gazetteer import load_gazetteer
from .models import ALL_SECTIONS, QueryContext

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="happy-news", description="Positive news, grouped by country")
    parser.add_argument("--section", default=ALL_SECTIONS, help="Section id, or 'all' (default)")
    parser.add_argument("--pages", type=int, default=1, help="Number of load cycles to run")
    parser.add_argument("--query", default="", help="Free-text filter on title, excerpt or country")
    parser.add_argument("--feed", metavar="URL_TEMPLATE", help="Read RSS feeds ('{section}' placeholder) instead of the API")
    parser.add_argument("--json", action="store_true", help="Print a JSON document")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def make_source(settings: Settings, feed_template: Optional[str]) -> Union[GuardianSource, FeedSource]:
    if feed_template:
        return FeedSource(url_template=feed_template, sections=settings.sections)
    return GuardianSource(
        api_key=settings.api_key,
        base_url=settings.base_url,
        sections=settings.sections,
        page_size=settings.page_size,
        timeout_sec=settings.timeout_sec,
    )


async def run(settings: Settings, args: argparse.Namespace) -> Session:
    blocklist = load_blocklist(settings.blocklist_path)
    gazetteer = load_gazetteer(settings.gazetteer_path)
    source = make_source(settings, args.feed)
    ingestor = Ingestor(
        source,
        blocklist=blocklist,
        gazetteer=gazetteer,
        min_accepted=settings.min_accepted,
    )
    session = Session(highlight_limit=settings.highlight_limit)
    context = QueryContext(section=args.section)
    try:
        await ingestor.load(session, context, reset=True)
        for _ in range(max(0, args.pages - 1)):
            await ingestor.load(session, context)
    finally:
        if isinstance(source, GuardianSource):
            await source.aclose()
    session.search_query = args.query
    return session


def render_json(session: Session) -> Dict[str, Any]:
    return {
        "section": session.context.section if session.context else None,
        "query": session.search_query,
        "items": [it.to_dict() for it in session.visible_items()],
        "countries": [agg.to_dict() for agg in session.aggregates()],
        "highlights": [it.to_dict() for it in session.highlights()],
    }


def render_text(session: Session) -> str:
    visible = session.visible_items()
    lines: List[str] = [f"{len(visible)} stories ({len(session.items)} loaded)", "", "Countries:"]
    for agg in session.aggregates():
        loc = agg.location
        lines.append(f"  {loc.flag} {loc.name:<16} {agg.display_count:>3}  ({loc.lat:.2f}, {loc.lng:.2f})")
    lines += ["", "Around the world:"]
    for it in session.highlights():
        if it.location is None:
            continue
        lines.append(f"  {it.location.flag} {it.location.name}: {it.title}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        settings = load_settings()
        session = asyncio.run(run(settings, args))
    except ValueError as e:
        LOGGER.error("Invalid configuration: %s", e)
        return 1
    except AuthError as e:
        LOGGER.error("Invalid API key (%s). Set GUARDIAN_API_KEY in the environment or .env.", e)
        return 2
    except NewsFetchError as e:
        LOGGER.error("Fetching news failed: %s", e)
        return 1

    if args.json:
        print(json.dumps(render_json(session), ensure_ascii=False, indent=2))
    else:
        print(render_text(session))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
