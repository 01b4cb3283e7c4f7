from __future__ import annotations

from typing import Any, Dict, Optional

from .models import Location, NewsItem


def to_news_item(entry: Dict[str, Any], location: Optional[Location] = None) -> NewsItem:
    """
    Convert a parsed entry dict into a NewsItem, fixing its location for good.
    Requires:
    - id, or a source_url to stand in for it
    Optional:
    - everything else; missing text fields become empty strings
    """
    source_url = entry.get("source_url") or ""
    item_id = entry.get("id") or source_url
    if not item_id:
        raise ValueError("Entry lacks required fields for NewsItem: id/source_url")

    return NewsItem(
        id=item_id,
        title=entry.get("title") or "",
        excerpt=entry.get("excerpt") or "",
        source_url=source_url,
        published_at=entry.get("published_at") or "",
        category_id=entry.get("category_id") or "",
        category_name=entry.get("category_name") or "",
        media_ref=entry.get("media_ref"),
        byline=entry.get("byline"),
        tags=tuple(entry.get("tags") or ()),
        location=location,
    )
