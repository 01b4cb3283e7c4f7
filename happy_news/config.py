"""Settings for the happy-news pipeline, read from the environment (and a .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from .fetcher import GUARDIAN_SEARCH_URL, HAPPY_SECTIONS


@dataclass
class Settings:
    # "test" is the Guardian's rate-limited public developer key.
    api_key: str = "test"
    base_url: str = GUARDIAN_SEARCH_URL
    page_size: int = 50
    min_accepted: int = 6
    highlight_limit: int = 8
    timeout_sec: float = 15.0
    sections: Tuple[str, ...] = field(default_factory=lambda: HAPPY_SECTIONS)
    blocklist_path: Optional[Path] = None
    gazetteer_path: Optional[Path] = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _path_env(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else None


def load_settings(dotenv: bool = True) -> Settings:
    """Load settings from environment variables with sensible defaults."""
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    sections_env = os.getenv("HAPPY_NEWS_SECTIONS")
    if sections_env:
        sections = tuple(s.strip() for s in sections_env.split(",") if s.strip())
    else:
        sections = HAPPY_SECTIONS

    timeout_env = os.getenv("HAPPY_NEWS_TIMEOUT")
    try:
        timeout_sec = float(timeout_env) if timeout_env else 15.0
    except ValueError as e:
        raise ValueError(f"HAPPY_NEWS_TIMEOUT must be a number, got {timeout_env!r}") from e

    return Settings(
        api_key=os.getenv("GUARDIAN_API_KEY") or "test",
        base_url=os.getenv("GUARDIAN_BASE_URL") or GUARDIAN_SEARCH_URL,
        page_size=_int_env("HAPPY_NEWS_PAGE_SIZE", 50),
        min_accepted=_int_env("HAPPY_NEWS_MIN_ACCEPTED", 6),
        highlight_limit=_int_env("HAPPY_NEWS_HIGHLIGHTS", 8),
        timeout_sec=timeout_sec,
        sections=sections,
        blocklist_path=_path_env("HAPPY_NEWS_BLOCKLIST"),
        gazetteer_path=_path_env("HAPPY_NEWS_GAZETTEER"),
    )
