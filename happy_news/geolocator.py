from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .gazetteer import Gazetteer
from .models import Location, NewsItem


EXCERPT_SCAN_CHARS = 200


def _field(entry: Union[Dict[str, Any], NewsItem], name: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def build_haystack(entry: Union[Dict[str, Any], NewsItem]) -> str:
    """Tags, then source URL, then the start of the excerpt, space-joined and lowercased."""
    parts = [str(t or "") for t in _field(entry, "tags") or ()]
    parts.append(_field(entry, "source_url") or "")
    parts.append((_field(entry, "excerpt") or "")[:EXCERPT_SCAN_CHARS])
    return " ".join(parts).lower()


def locate(entry: Union[Dict[str, Any], NewsItem], gazetteer: Gazetteer) -> Optional[Location]:
    """
    Greedy substring match in gazetteer table order; the first key found wins.

    Accepts a parsed entry dict or a NewsItem. Returns None when nothing matches.
    Such items stay in the working set but are left out of country aggregation
    and highlights.
    """
    haystack = build_haystack(entry)
    if not haystack.strip():
        return None
    for loc in gazetteer:
        if loc.key in haystack:
            return loc
    return None
