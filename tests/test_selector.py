from happy_news.models import Location
from happy_news.selector import filter_items, pick_distinct_locations

from conftest import DE, FR, JP, make_item


def _locations(count):
    return [Location(key=f"loc-{i}", name=f"Place {i}", lat=0.0, lng=float(i), flag="") for i in range(count)]


def test_picks_stop_at_eight_distinct_locations():
    locs = _locations(8)
    items = []
    for i, loc in enumerate(locs):
        items.append(make_item(i, loc))
        if i < 5:
            items.append(make_item(100 + i, locs[0]))
    items += [make_item(200 + i) for i in range(7)]
    assert len(items) == 20

    picks = pick_distinct_locations(items)

    assert len(picks) == 8
    assert [it.location.key for it in picks] == [loc.key for loc in locs]
    assert [it.id for it in picks] == [f"item-{i}" for i in range(8)]


def test_picks_cap_with_more_locations():
    items = [make_item(i, loc) for i, loc in enumerate(_locations(12))]
    picks = pick_distinct_locations(items)
    assert [it.id for it in picks] == [f"item-{i}" for i in range(8)]


def test_picks_skip_unlocated_and_keep_first_per_location():
    items = [make_item(1), make_item(2, JP), make_item(3, JP), make_item(4, FR)]
    assert [it.id for it in pick_distinct_locations(items)] == ["item-2", "item-4"]


def test_picks_respect_custom_limit():
    items = [make_item(1, FR), make_item(2, DE), make_item(3, JP)]
    assert [it.id for it in pick_distinct_locations(items, limit=2)] == ["item-1", "item-2"]
    assert pick_distinct_locations(items, limit=0) == []


def test_filter_matches_location_name():
    items = [make_item(1, JP, title="Robot chef opens restaurant"), make_item(2, FR, title="Cheese festival")]
    assert [it.id for it in filter_items(items, "japan")] == ["item-1"]


def test_filter_is_case_insensitive_substring_across_fields():
    items = [
        make_item(1, title="New Species Of Frog Found"),
        make_item(2, excerpt="Scientists describe a frogmouth bird"),
        make_item(3, title="Orchestra tour"),
    ]
    assert [it.id for it in filter_items(items, "FROG")] == ["item-1", "item-2"]


def test_filter_skips_location_for_unlocated_items():
    items = [make_item(1, title="Story"), make_item(2, DE, title="Story")]
    assert [it.id for it in filter_items(items, "germany")] == ["item-2"]


def test_empty_query_returns_everything():
    items = [make_item(1), make_item(2, FR)]
    assert filter_items(items, "") == tuple(items)
    assert filter_items(items, "   ") == tuple(items)
