from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


UNKNOWN_CHANNEL = "Unknown Channel"
UNCATEGORIZED = "Uncategorized"

SortOption = Literal["name", "group"]


@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    url: str
    group: str = UNCATEGORIZED
    logo: str | None = None
    tvg_id: str | None = None


@dataclass(frozen=True)
class Playlist:
    name: str
    channels: tuple[Channel, ...] = field(default_factory=tuple)
    groups: tuple[str, ...] = field(default_factory=tuple)

    @property
    def channel_count(self) -> int:
        return len(self.channels)

    @property
    def is_empty(self) -> bool:
        return not self.channels

    def find(self, channel_id: str) -> Channel | None:
        for c in self.channels:
            if c.id == channel_id:
                return c
        return None
