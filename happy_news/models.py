from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


ALL_SECTIONS = "all"

# Aggregate counts above this are shown as "9+".
DISPLAY_CAP = 9


class Verdict(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True)
class Location:
    """A gazetteer entry. Only ever created by the gazetteer loader."""
    key: str
    name: str
    lat: float
    lng: float
    flag: str

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.lat, self.lng)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "flag": self.flag,
        }


@dataclass(frozen=True)
class QueryContext:
    section: str = ALL_SECTIONS


@dataclass(frozen=True)
class NewsItem:
    """
    Accepted news item with its resolved location.

    WARNING: Do not change fields lightly. This is the library's contract.
    `location` is resolved once while the item is built and is never recomputed.
    """
    id: str
    title: str
    excerpt: str
    source_url: str
    published_at: str
    category_id: str = ""
    category_name: str = ""
    media_ref: Optional[str] = None
    byline: Optional[str] = None
    tags: Tuple[str, ...] = ()
    location: Optional[Location] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "excerpt": self.excerpt,
            "media_ref": self.media_ref,
            "byline": self.byline,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "published_at": self.published_at,
            "source_url": self.source_url,
            "tags": list(self.tags),
            "location": self.location.to_dict() if self.location else None,
        }


@dataclass(frozen=True)
class LocationAggregate:
    location: Location
    items: Tuple[NewsItem, ...]

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def display_count(self) -> str:
        if self.count > DISPLAY_CAP:
            return f"{DISPLAY_CAP}+"
        return str(self.count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location.to_dict(),
            "count": self.count,
            "display_count": self.display_count,
            "items": [it.id for it in self.items],
        }
