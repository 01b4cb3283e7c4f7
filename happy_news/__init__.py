"""
happy_news

A small library that pulls news pages from a source, drops items matching a
keyword blocklist, guesses each remaining item's country and groups them for a map.

Core ideas:
- Input: a page source (Guardian content API or RSS/Atom feeds) and a query context
- Process: fetch → classify (blocklist) → locate (gazetteer) → append to a session
- Output: Session.items, plus per-country aggregates, highlights and a text filter

Example
-------
import asyncio
from happy_news import GuardianSource, Ingestor, QueryContext, Session, aggregate

async def main():
    async with GuardianSource(api_key="test") as source:
        ingestor = Ingestor(source)
        session = Session()
        await ingestor.load(session, QueryContext(section="science"), reset=True)

    for agg in aggregate(session.items):
        print(agg.location.flag, agg.location.name, agg.display_count)

asyncio.run(main())
"""
from .aggregator import aggregate
from .classifier import Blocklist, classify, is_acceptable, is_blocked, load_blocklist
from .core import Ingestor, Session
from .exceptions import AuthError, NewsFetchError, TransportError
from .fetcher import FeedSource, GuardianSource, PageSource
from .gazetteer import Gazetteer, load_gazetteer
from .geolocator import locate
from .models import ALL_SECTIONS, Location, LocationAggregate, NewsItem, QueryContext, Verdict
from .selector import filter_items, pick_distinct_locations

__all__ = [
    "ALL_SECTIONS",
    "AuthError",
    "Blocklist",
    "FeedSource",
    "Gazetteer",
    "GuardianSource",
    "Ingestor",
    "Location",
    "LocationAggregate",
    "NewsFetchError",
    "NewsItem",
    "PageSource",
    "QueryContext",
    "Session",
    "TransportError",
    "Verdict",
    "aggregate",
    "classify",
    "filter_items",
    "is_acceptable",
    "is_blocked",
    "load_blocklist",
    "load_gazetteer",
    "locate",
    "pick_distinct_locations",
]
