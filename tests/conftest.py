from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from happy_news.classifier import Blocklist
from happy_news.exceptions import NewsFetchError
from happy_news.gazetteer import Gazetteer
from happy_news.models import Location, NewsItem, QueryContext


FR = Location(key="france", name="France", lat=46.23, lng=2.21, flag="🇫🇷")
DE = Location(key="germany", name="Germany", lat=51.17, lng=10.45, flag="🇩🇪")
JP = Location(key="japan", name="Japan", lat=36.20, lng=138.25, flag="🇯🇵")


def make_entry(n: int, *, title: Optional[str] = None, excerpt: str = "", tags=(), url: Optional[str] = None) -> Dict[str, Any]:
    return {
        "id": f"item-{n}",
        "title": title if title is not None else f"Good news number {n}",
        "excerpt": excerpt,
        "media_ref": None,
        "byline": None,
        "category_id": "science",
        "category_name": "Science",
        "published_at": "2024-05-01T10:00:00Z",
        "source_url": url or f"https://example.org/science/{n}",
        "tags": list(tags),
    }


def make_item(n: int, location: Optional[Location] = None, *, title: Optional[str] = None, excerpt: str = "") -> NewsItem:
    return NewsItem(
        id=f"item-{n}",
        title=title if title is not None else f"Story {n}",
        excerpt=excerpt,
        source_url=f"https://example.org/{n}",
        published_at="2024-05-01T10:00:00Z",
        location=location,
    )


class FakeSource:
    """Serves canned pages and records every (section, page) request."""

    def __init__(self, pages: Dict[int, Any]) -> None:
        self.pages = pages
        self.calls: List[tuple] = []

    async def fetch_page(self, context: QueryContext, page: int) -> List[Dict[str, Any]]:
        self.calls.append((context.section, page))
        result = self.pages.get(page, [])
        if isinstance(result, NewsFetchError):
            raise result
        return list(result)


class GatedSource(FakeSource):
    """Blocks every fetch until `gate` is set. Build it inside a running loop."""

    def __init__(self, pages: Dict[int, Any]) -> None:
        super().__init__(pages)
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def fetch_page(self, context: QueryContext, page: int) -> List[Dict[str, Any]]:
        self.calls.append((context.section, page))
        self.started.set()
        await self.gate.wait()
        return list(self.pages.get(page, []))


@pytest.fixture
def blocklist() -> Blocklist:
    return Blocklist(["war", "bomb", "murder", "killed"])


@pytest.fixture
def gazetteer() -> Gazetteer:
    return Gazetteer([FR, DE, JP])
