from __future__ import annotations

import os
from dataclasses import dataclass, field


FEATURED_SOURCES = [
    "https://raw.githubusercontent.com/FunctionError/PiratesTv/main/combined_playlist.m3u",
    "https://iptv-org.github.io/iptv/countries/in.m3u",
]


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_positive_int(name: str, default: int) -> int:
    value = _env_int(name, default)
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


@dataclass
class Settings:
    user_agent: str = "TvDeck/1.0"
    timeout_s: int = 15
    page_size: int = 50
    featured_sources: list[str] = field(default_factory=lambda: list(FEATURED_SOURCES))
    combined_name: str = "Featured Channels"

    @classmethod
    def from_env(cls) -> Settings:
        s = cls()
        s.user_agent = os.environ.get("TVDECK_USER_AGENT", "").strip() or s.user_agent
        s.timeout_s = _env_positive_int("TVDECK_TIMEOUT", s.timeout_s)
        s.page_size = _env_positive_int("TVDECK_PAGE_SIZE", s.page_size)

        sources = [u.strip() for u in os.environ.get("TVDECK_SOURCES", "").split(",") if u.strip()]
        if sources:
            s.featured_sources = sources
        return s
