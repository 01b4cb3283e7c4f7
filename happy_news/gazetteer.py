from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .models import Location


DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_GAZETTEER_PATH = DATA_DIR / "gazetteer.json"


class Gazetteer:
    """
    Ordered, immutable table of location keys.

    Table order is the match priority: when several keys occur in the same text,
    the one listed first wins. Keep the order as authored when editing the table.
    """

    def __init__(self, locations: Iterable[Location], version: Optional[int] = None) -> None:
        self._locations: Tuple[Location, ...] = tuple(locations)
        self._by_key: Dict[str, Location] = {}
        for loc in self._locations:
            if loc.key in self._by_key:
                raise ValueError(f"Duplicate gazetteer key: {loc.key!r}")
            self._by_key[loc.key] = loc
        self.version = version

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> Optional[Location]:
        return self._by_key.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(loc.key for loc in self._locations)


def load_gazetteer(path: Union[str, Path, None] = None) -> Gazetteer:
    """
    Load a gazetteer JSON table.

    Expected shape: {"version": 1, "locations": [{"key", "name", "lat", "lng", "flag"}, ...]}
    """
    p = Path(path) if path else DEFAULT_GAZETTEER_PATH
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read gazetteer table: {p} ({e})") from e

    locations = []
    for row in raw.get("locations", []):
        try:
            locations.append(
                Location(
                    key=str(row["key"]).lower(),
                    name=str(row["name"]),
                    lat=float(row["lat"]),
                    lng=float(row["lng"]),
                    flag=str(row.get("flag") or ""),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid gazetteer row in {p}: {row!r}") from e
    return Gazetteer(locations, version=raw.get("version"))
