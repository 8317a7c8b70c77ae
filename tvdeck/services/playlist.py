from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import requests

from tvdeck.models import Playlist
from tvdeck.services.m3u import IdFactory, extract_groups, parse_m3u
from tvdeck.settings import Settings


logger = logging.getLogger(__name__)

INVALID_PLAYLIST_MESSAGE = "Failed to parse playlist. Please ensure it is a valid M3U file."


class PlaylistLoadError(Exception):
    """Playlist text could not be fetched or read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load {source}: {reason}")
        self.source = source
        self.reason = reason


class InvalidPlaylistError(Exception):
    pass


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class PlaylistService:
    def __init__(self, settings: Settings | None = None, id_factory: IdFactory | None = None):
        self.settings = settings or Settings()
        self.id_factory = id_factory
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.settings.user_agent})

    def fetch_text(self, url: str) -> str:
        try:
            r = self.session.get(url, timeout=self.settings.timeout_s, allow_redirects=True)
            r.raise_for_status()
        except requests.RequestException as e:
            raise PlaylistLoadError(url, str(e)) from e
        r.encoding = r.encoding or "utf-8"
        return r.text

    def read_file(self, path: str | Path) -> str:
        p = Path(path)
        try:
            return p.read_text(encoding="utf-8-sig", errors="replace")
        except OSError as e:
            raise PlaylistLoadError(str(p), e.strerror or str(e)) from e

    def load_source(self, source: str) -> str:
        if is_url(source):
            logger.info("fetching playlist %s", source)
            return self.fetch_text(source)
        logger.info("reading playlist %s", source)
        return self.read_file(source)

    def load_sources(self, sources: Iterable[str]) -> str:
        texts = [self.load_source(s) for s in sources]
        return "\n".join(texts)

    def build_playlist(self, name: str, content: str) -> Playlist:
        try:
            channels = parse_m3u(content, id_factory=self.id_factory)
            groups = extract_groups(channels)
        except Exception as e:  # noqa: BLE001
            logger.exception("failed to parse playlist %s", name)
            raise InvalidPlaylistError(INVALID_PLAYLIST_MESSAGE) from e

        logger.info("playlist %s: %d channels in %d groups", name, len(channels), len(groups))
        return Playlist(name=name, channels=channels, groups=groups)

    def open_playlist(self, sources: list[str], name: str | None = None) -> Playlist:
        if not sources:
            raise ValueError("at least one playlist source is required")
        content = self.load_sources(sources)
        return self.build_playlist(name or self.default_name(sources), content)

    def load_featured(self) -> Playlist:
        return self.open_playlist(self.settings.featured_sources, self.settings.combined_name)

    def default_name(self, sources: list[str]) -> str:
        if len(sources) != 1:
            return self.settings.combined_name
        src = sources[0]
        if is_url(src):
            tail = src.rstrip("/").rsplit("/", 1)[-1]
            return tail.split("?", 1)[0] or src
        return Path(src).name
