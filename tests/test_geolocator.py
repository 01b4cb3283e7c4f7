import pytest

from happy_news.gazetteer import Gazetteer, load_gazetteer
from happy_news.geolocator import build_haystack, locate
from happy_news.models import Location
from happy_news.normalizer import to_news_item

from conftest import DE, FR, JP, make_entry


def test_locates_from_tags(gazetteer):
    entry = make_entry(1, tags=["world/japan", "science/space"])
    assert locate(entry, gazetteer) == JP


def test_locates_from_url(gazetteer):
    entry = make_entry(1, url="https://example.org/world/2024/may/01/germany-rail-upgrade")
    assert locate(entry, gazetteer) == DE


def test_excerpt_only_first_200_chars_scanned(gazetteer):
    near = make_entry(1, excerpt="Vineyards in France celebrate a record harvest")
    far = make_entry(2, excerpt="x" * 200 + " france")
    assert locate(near, gazetteer) == FR
    assert locate(far, gazetteer) is None


def test_no_match_returns_none(gazetteer):
    assert locate(make_entry(1, tags=["science/space"]), gazetteer) is None
    assert locate({}, gazetteer) is None


def test_table_order_breaks_ties():
    country = Location(key="spain", name="Spain", lat=40.46, lng=-3.75, flag="🇪🇸")
    region = Location(key="catalonia", name="Catalonia", lat=41.59, lng=1.52, flag="")
    entry = make_entry(1, tags=["world/catalonia", "world/spain"])

    assert locate(entry, Gazetteer([country, region])) == country
    assert locate(entry, Gazetteer([region, country])) == region


def test_locate_is_idempotent(gazetteer):
    entry = make_entry(1, tags=["world/france"], excerpt="Berlin and Germany too")
    assert locate(entry, gazetteer) == locate(entry, gazetteer) == FR


def test_haystack_joins_tags_url_and_excerpt():
    entry = make_entry(1, tags=["World/Japan"], url="https://Example.org/a", excerpt="Hello")
    assert build_haystack(entry) == "world/japan https://example.org/a hello"


def test_locates_news_item(gazetteer):
    item = to_news_item(make_entry(1, tags=["world/japan"], excerpt="Fresh ramen"))
    assert build_haystack(item) == "world/japan https://example.org/science/1 fresh ramen"
    assert locate(item, gazetteer) == JP


def test_bundled_gazetteer_keeps_authored_order():
    gz = load_gazetteer()
    keys = gz.keys()
    assert len(gz) == 73
    assert keys[0] == "united-kingdom"
    assert keys.index("uk") < keys.index("england")
    assert keys.index("us-news") < keys.index("us")
    assert gz.get("japan").name == "Japan"
    assert gz.get("japan").coordinates == (36.20, 138.25)


def test_bundled_gazetteer_prefers_earlier_key():
    gz = load_gazetteer()
    entry = make_entry(1, tags=["uk/england", "travel/travel"], url="https://example.org/travel/x")
    assert locate(entry, gz).key == "uk"


def test_duplicate_keys_rejected():
    with pytest.raises(ValueError):
        Gazetteer([FR, FR])


def test_invalid_gazetteer_row(tmp_path):
    path = tmp_path / "gazetteer.json"
    path.write_text('{"locations": [{"key": "fr", "name": "France"}]}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_gazetteer(path)
