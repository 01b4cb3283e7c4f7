from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .aggregator import aggregate
from .classifier import Blocklist, is_acceptable, load_blocklist
from .exceptions import NewsFetchError
from .fetcher import PageSource
from .gazetteer import Gazetteer, load_gazetteer
from .geolocator import locate
from .models import LocationAggregate, NewsItem, QueryContext
from .normalizer import to_news_item
from .selector import HIGHLIGHT_LIMIT, filter_items, pick_distinct_locations

LOGGER = logging.getLogger(__name__)

FIRST_PAGE = 1
MIN_ACCEPTED = 6


@dataclass
class Session:
    """
    Working set and pagination state for one query context, owned by the caller.

    `items` is replaced by a new tuple on every successful load, so a snapshot
    taken by a reader never changes under it.
    """
    context: Optional[QueryContext] = None
    items: Tuple[NewsItem, ...] = ()
    next_page: int = FIRST_PAGE
    loading: bool = False
    search_query: str = ""
    highlight_limit: int = HIGHLIGHT_LIMIT

    def visible_items(self) -> Tuple[NewsItem, ...]:
        return filter_items(self.items, self.search_query)

    def aggregates(self) -> List[LocationAggregate]:
        return aggregate(self.visible_items())

    def highlights(self) -> List[NewsItem]:
        return pick_distinct_locations(self.visible_items(), self.highlight_limit)


class Ingestor:
    """
    High-level API: fetch pages from a source and grow a session's working set.

    Pipeline: fetch → parse → classify (blocklist) → locate (gazetteer) → normalize → append
    """

    def __init__(
        self,
        source: PageSource,
        *,
        blocklist: Optional[Blocklist] = None,
        gazetteer: Optional[Gazetteer] = None,
        min_accepted: int = MIN_ACCEPTED,
    ) -> None:
        self.source = source
        self.blocklist = blocklist if blocklist is not None else load_blocklist()
        self.gazetteer = gazetteer if gazetteer is not None else load_gazetteer()
        self.min_accepted = min_accepted

    def process(self, entries: Iterable[Dict[str, Any]]) -> List[NewsItem]:
        """Classify and locate one page of entries, keeping source order."""
        items: List[NewsItem] = []
        for e in entries:
            if not is_acceptable(e, self.blocklist):
                continue
            try:
                items.append(to_news_item(e, locate(e, self.gazetteer)))
            except ValueError:
                LOGGER.debug("Skipping malformed entry: %r", e.get("title"))
                continue
        return items

    async def load(
        self,
        session: Session,
        context: Optional[QueryContext] = None,
        reset: bool = False,
    ) -> Tuple[NewsItem, ...]:
        """
        Fetch the next page for `context` and append its accepted items.

        A reset, a first load or a context switch starts over from page 1. When
        page 1 yields fewer than `min_accepted` items one more page is fetched,
        once. Calls made while a load is in flight are dropped. Errors from the
        main fetch propagate and leave the session untouched.
        """
        if session.loading:
            LOGGER.debug("Load already in flight; dropping request for %s", context)
            return session.items

        ctx = context or session.context or QueryContext()
        fresh = reset or session.context is None or ctx != session.context
        page = FIRST_PAGE if fresh else session.next_page
        items: List[NewsItem] = [] if fresh else list(session.items)

        session.loading = True
        try:
            accepted = self.process(await self.source.fetch_page(ctx, page))
            items.extend(accepted)
            LOGGER.info("Loaded page %d for %s: %d accepted", page, ctx.section, len(accepted))
            fetched = page
            page += 1

            if fetched == FIRST_PAGE and len(accepted) < self.min_accepted:
                try:
                    extra = self.process(await self.source.fetch_page(ctx, page))
                except NewsFetchError as e:
                    LOGGER.warning("Backfill page %d for %s failed: %s", page, ctx.section, e)
                else:
                    items.extend(extra)
                    LOGGER.info("Backfilled page %d for %s: %d accepted", page, ctx.section, len(extra))
                    page += 1

            session.context = ctx
            session.items = tuple(items)
            session.next_page = page
        finally:
            session.loading = False
        return session.items
