from __future__ import annotations

from typing import Any, Dict, List, Optional


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


def _raw_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _opt_text(value: Any) -> Optional[str]:
    s = _text(value)
    return s or None


def parse_guardian_result(result: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map one Guardian content API result to a normalized entry dict.
    Fields: id, title, excerpt, media_ref, byline, category_id, category_name,
    published_at, source_url, tags
    """
    fields = result.get("fields") or {}
    tags: List[str] = []
    for tag in result.get("tags") or []:
        if isinstance(tag, dict):
            tid = _text(tag.get("id"))
            if tid:
                tags.append(tid)

    return {
        "id": _text(result.get("id")),
        "title": _text(result.get("webTitle")),
        "excerpt": _raw_text(fields.get("trailText")),
        "media_ref": _opt_text(fields.get("thumbnail")),
        "byline": _opt_text(fields.get("byline")),
        "category_id": _text(result.get("sectionId")),
        "category_name": _text(result.get("sectionName")),
        "published_at": _text(result.get("webPublicationDate")),
        "source_url": _text(result.get("webUrl")),
        "tags": tags,
    }


def _feed_thumbnail(entry: Dict[str, Any]) -> Optional[str]:
    for key in ("media_thumbnail", "media_content"):
        media = entry.get(key)
        if isinstance(media, list):
            for m in media:
                if isinstance(m, dict) and _text(m.get("url")):
                    return _text(m.get("url"))
    return None


def parse_feed_entry(entry: Dict[str, Any], section: str = "") -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to the same normalized dict shape.
    Tag terms stand in for tag identifiers; the first term doubles as the category.
    """
    link = _text(entry.get("link")) or _text(entry.get("feedburner_origlink"))

    guid = None
    for k in ("id", "guid"):
        v = _text(entry.get(k))
        if v:
            guid = v
            break

    tags: List[str] = []
    for t in entry.get("tags") or []:
        if isinstance(t, dict):
            term = _text(t.get("term"))
            if term:
                tags.append(term)

    published = ""
    for key in ("published", "updated", "created"):
        published = _text(entry.get(key))
        if published:
            break

    category_name = tags[0] if tags else section
    return {
        "id": guid or link,
        "title": _text(entry.get("title")),
        "excerpt": _text(entry.get("summary")) or _text(entry.get("description")),
        "media_ref": _feed_thumbnail(entry),
        "byline": _opt_text(entry.get("author")),
        "category_id": section,
        "category_name": category_name,
        "published_at": published,
        "source_url": link,
        "tags": tags,
    }
