from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Pattern, Tuple, Union

from .models import Verdict


DEFAULT_BLOCKLIST_PATH = Path(__file__).resolve().parent / "data" / "blocklist.json"

# Patterns up to this length only match whole words ("war" must not hit "award").
# Word characters are ASCII only, so "caféwar" still contains the word "war".
_WHOLE_WORD_MAX_LEN = 5


def _compile(pattern: str) -> Pattern[str]:
    escaped = re.escape(pattern)
    if len(pattern) <= _WHOLE_WORD_MAX_LEN:
        return re.compile(rf"\b{escaped}\b", re.IGNORECASE | re.ASCII)
    return re.compile(escaped, re.IGNORECASE)


class Blocklist:
    """Ordered set of lowercase keyword patterns, compiled once."""

    def __init__(self, patterns: Iterable[str], version: Any = None) -> None:
        self.patterns: Tuple[str, ...] = tuple(p.strip().lower() for p in patterns if p and p.strip())
        self._compiled: Tuple[Pattern[str], ...] = tuple(_compile(p) for p in self.patterns)
        self.version = version

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def matches(self, text: str) -> bool:
        if not text:
            return False
        t = text.lower()
        return any(rx.search(t) for rx in self._compiled)


def load_blocklist(path: Union[str, Path, None] = None) -> Blocklist:
    p = Path(path) if path else DEFAULT_BLOCKLIST_PATH
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read blocklist table: {p} ({e})") from e
    patterns = raw.get("patterns") if isinstance(raw, dict) else raw
    if not isinstance(patterns, list):
        raise ValueError(f"Blocklist table has no patterns: {p}")
    return Blocklist(patterns, version=raw.get("version") if isinstance(raw, dict) else None)


def is_blocked(text: str, blocklist: Blocklist) -> bool:
    return blocklist.matches(text or "")


def classify(text: str, blocklist: Blocklist) -> Verdict:
    """
    Binary keyword test. Any matching pattern rejects; the first match ends the scan.
    Empty text is always accepted.
    """
    return Verdict.REJECT if is_blocked(text, blocklist) else Verdict.ACCEPT


def is_acceptable(entry: Dict[str, Any], blocklist: Blocklist) -> bool:
    """
    Entry-level filter: title and excerpt are tested separately and either one
    being blocked rejects the entry.

    This function expects an entry dict produced by `happy_news.parser`.
    """
    title = entry.get("title") or ""
    excerpt = entry.get("excerpt") or ""
    if classify(title, blocklist) is Verdict.REJECT:
        return False
    if classify(excerpt, blocklist) is Verdict.REJECT:
        return False
    return True
