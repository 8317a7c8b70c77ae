from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from tvdeck.models import Channel, SortOption


ALL_GROUPS = "All"
DEFAULT_PAGE_SIZE = 50


def filter_channels(
    channels: Iterable[Channel],
    group: str = ALL_GROUPS,
    search: str = "",
) -> list[Channel]:
    result = list(channels)

    if group != ALL_GROUPS:
        result = [c for c in result if c.group == group]

    if search.strip():
        term = search.lower()
        result = [c for c in result if term in c.name.lower()]

    return result


def sort_channels(channels: Iterable[Channel], by: SortOption = "name") -> list[Channel]:
    if by == "name":
        return sorted(channels, key=lambda c: c.name.lower())
    if by == "group":
        return sorted(channels, key=lambda c: (c.group.lower(), c.name.lower()))
    raise ValueError(f"unknown sort option: {by!r}")


def page(channels: list[Channel], limit: int) -> list[Channel]:
    if limit <= 0:
        raise ValueError("page limit must be positive")
    return channels[:limit]


@dataclass(frozen=True)
class ChannelQuery:
    """Group/search selection with "show more" paging over a channel list."""

    group: str = ALL_GROUPS
    search: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def first_page(cls, page_size: int = DEFAULT_PAGE_SIZE) -> ChannelQuery:
        return cls(page_size=page_size, limit=page_size)

    def with_group(self, group: str) -> ChannelQuery:
        return replace(self, group=group, limit=self.page_size)

    def with_search(self, search: str) -> ChannelQuery:
        return replace(self, search=search, limit=self.page_size)

    def show_more(self) -> ChannelQuery:
        return replace(self, limit=self.limit + self.page_size)

    def apply(self, channels: Iterable[Channel]) -> tuple[list[Channel], int]:
        matches = filter_channels(channels, group=self.group, search=self.search)
        return page(matches, self.limit), len(matches)
