from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Location, LocationAggregate, NewsItem


def aggregate(items: Iterable[NewsItem]) -> List[LocationAggregate]:
    """
    Group items by resolved location key, in first-seen key order.
    Items without a location are skipped. Membership is never truncated; the
    "9+" cap lives on LocationAggregate.display_count.
    """
    locations: Dict[str, Location] = {}
    members: Dict[str, List[NewsItem]] = {}

    for it in items:
        loc = it.location
        if loc is None:
            continue
        if loc.key not in members:
            locations[loc.key] = loc
            members[loc.key] = []
        members[loc.key].append(it)

    return [LocationAggregate(location=locations[k], items=tuple(v)) for k, v in members.items()]
