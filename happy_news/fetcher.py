from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

import feedparser
import httpx

from .exceptions import NewsFetchError, TransportError, error_for_status
from .models import ALL_SECTIONS, QueryContext
from .parser import parse_feed_entry, parse_guardian_result

LOGGER = logging.getLogger(__name__)

GUARDIAN_SEARCH_URL = "https://content.guardianapis.com/search"
GUARDIAN_FEED_TEMPLATE = "https://www.theguardian.com/{section}/rss"

# Sections that tend to carry positive stories.
HAPPY_SECTIONS: Tuple[str, ...] = (
    "science", "technology", "culture", "sport", "travel",
    "food", "music", "film", "books", "lifeandstyle",
    "environment", "artanddesign", "stage", "education",
)


class PageSource(Protocol):
    async def fetch_page(self, context: QueryContext, page: int) -> List[Dict[str, Any]]:  # pragma: no cover - interface
        """Return one page of normalized entry dicts, newest first."""
        ...


class GuardianSource:
    """
    Page source backed by the Guardian content search API.

    Raises AuthError on 401/403 and TransportError on any other failure.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = GUARDIAN_SEARCH_URL,
        sections: Sequence[str] = HAPPY_SECTIONS,
        page_size: int = 50,
        timeout_sec: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.sections = tuple(sections)
        self.page_size = page_size
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout_sec)

    def section_param(self, context: QueryContext) -> str:
        if context.section == ALL_SECTIONS:
            return "|".join(self.sections)
        return context.section

    def build_params(self, context: QueryContext, page: int) -> Dict[str, Any]:
        return {
            "api-key": self.api_key,
            "section": self.section_param(context),
            "page-size": self.page_size,
            "page": page,
            "show-fields": "thumbnail,trailText,byline",
            "show-tags": "keyword",
            "order-by": "newest",
        }

    async def fetch_page(self, context: QueryContext, page: int) -> List[Dict[str, Any]]:
        params = self.build_params(context, page)
        try:
            resp = await self._client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to reach news API: {self.base_url} ({e})") from e

        if not resp.is_success:
            raise error_for_status(resp.status_code, f"API error: {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from news API ({e})", resp.status_code) from e

        body = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(body, dict):
            raise TransportError("Unexpected response shape from news API", resp.status_code)
        results = body.get("results") or []
        if not isinstance(results, list):
            raise TransportError("Unexpected results shape from news API", resp.status_code)
        LOGGER.debug("Fetched %d results | section=%s | page=%d", len(results), context.section, page)
        return [parse_guardian_result(r) for r in results if isinstance(r, dict)]

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "GuardianSource":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def fetch_feed_entries(url: str) -> List[Dict[str, Any]]:
    """
    Fetch a single feed URL (or raw feed document) and return its entries.

    Raises AuthError/TransportError on HTTP errors, or when the feed is malformed
    (bozo) and yielded no entries.
    """
    try:
        feed = feedparser.parse(url)
    except Exception as e:  # pragma: no cover - surface as domain error
        raise TransportError(f"Failed to fetch feed: {url} ({e})") from e

    status = getattr(feed, "status", None)
    if status and status >= 400:
        raise error_for_status(status, f"Feed error: {status} ({url})")

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise TransportError(f"Feed has no entries: {url}")

    if getattr(feed, "bozo", 0) and not entries:
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        raise TransportError(msg)
    return entries


def fetch_many(urls: Iterable[Tuple[str, str]]) -> List[Dict[str, Any]]:
    """
    Fetch several (section, url) feeds and aggregate their parsed entries.

    Failures on individual feeds are skipped to favor best-effort aggregation;
    the last error is raised only when every feed failed.
    """
    all_entries: List[Dict[str, Any]] = []
    last_error: Optional[NewsFetchError] = None
    succeeded = 0
    for section, url in urls:
        try:
            raw = fetch_feed_entries(url)
        except NewsFetchError as e:
            LOGGER.warning("Skipping feed %s: %s", url, e)
            last_error = e
            continue
        succeeded += 1
        all_entries.extend(parse_feed_entry(e, section=section) for e in raw)
    if not succeeded and last_error is not None:
        raise last_error
    return all_entries


class FeedSource:
    """
    Page source backed by per-section RSS/Atom feeds.

    Feeds are not paginated: page 1 holds every entry, later pages are empty.
    """

    def __init__(
        self,
        *,
        url_template: str = GUARDIAN_FEED_TEMPLATE,
        sections: Sequence[str] = HAPPY_SECTIONS,
    ) -> None:
        self.url_template = url_template
        self.sections = tuple(sections)

    def feed_urls(self, context: QueryContext) -> List[Tuple[str, str]]:
        if context.section == ALL_SECTIONS:
            names: Sequence[str] = self.sections
        else:
            names = (context.section,)
        return [(name, self.url_template.format(section=name)) for name in names]

    async def fetch_page(self, context: QueryContext, page: int) -> List[Dict[str, Any]]:
        if page > 1:
            return []
        # feedparser is blocking
        return await asyncio.to_thread(fetch_many, self.feed_urls(context))
