from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from .models import NewsItem


HIGHLIGHT_LIMIT = 8


def pick_distinct_locations(items: Iterable[NewsItem], limit: int = HIGHLIGHT_LIMIT) -> List[NewsItem]:
    """
    First item for each unseen location, in order, until `limit` locations are collected.
    Items without a location are skipped.
    """
    seen: Set[str] = set()
    out: List[NewsItem] = []
    if limit <= 0:
        return out

    for it in items:
        if it.location is None or it.location.key in seen:
            continue
        seen.add(it.location.key)
        out.append(it)
        if len(out) >= limit:
            break
    return out


def _matches(it: NewsItem, q: str) -> bool:
    if q in it.title.lower() or q in it.excerpt.lower():
        return True
    return it.location is not None and q in it.location.name.lower()


def filter_items(items: Iterable[NewsItem], query: str) -> Tuple[NewsItem, ...]:
    q = (query or "").strip().lower()
    if not q:
        return tuple(items)
    return tuple(it for it in items if _matches(it, q))
