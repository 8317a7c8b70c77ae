from __future__ import annotations

import itertools
import logging
import re
import uuid
from typing import Callable, Iterable

from tvdeck.models import UNCATEGORIZED, UNKNOWN_CHANNEL, Channel


logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

_EXTINF_PREFIX = "#EXTINF:"
_EXTINF_RE = re.compile(r"#EXTINF:(?P<dur>-?[0-9]+)(?:\s+(?P<attrs>.*))?,(?P<name>.*)")
_LOGO_RE = re.compile(r'tvg-logo="([^"]*)"')
_GROUP_RE = re.compile(r'group-title="([^"]*)"')
_TVG_ID_RE = re.compile(r'tvg-id="([^"]*)"')


def uuid_ids() -> IdFactory:
    return lambda: str(uuid.uuid4())


def sequential_ids(prefix: str = "ch") -> IdFactory:
    """Deterministic ids: ``ch-1``, ``ch-2``, ... per factory instance."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def _attr(pattern: re.Pattern[str], attrs: str) -> str | None:
    m = pattern.search(attrs)
    return m.group(1) if m else None


def parse_m3u(content: str, id_factory: IdFactory | None = None) -> tuple[Channel, ...]:
    """Parse extended M3U text into channels, in order of their URL lines.

    Parsing is lenient: malformed ``#EXTINF`` lines, URLs without a preceding
    info line and info lines without a URL are skipped, never reported.
    """
    if not isinstance(content, str):
        raise TypeError(f"playlist content must be str, not {type(content).__name__}")

    next_id = id_factory or uuid_ids()
    channels: list[Channel] = []
    pending: dict[str, str | None] | None = None
    dropped = 0

    for raw in content.split("\n"):
        ln = raw.strip().lstrip("\ufeff").strip()
        if not ln:
            continue

        if ln.startswith(_EXTINF_PREFIX):
            m = _EXTINF_RE.search(ln)
            if not m:
                dropped += 1
                continue
            if pending is not None:
                dropped += 1

            # a record without an id never completes
            cid = next_id()
            if not cid:
                pending = None
                dropped += 1
                continue

            attrs = m.group("attrs") or ""
            name = m.group("name").strip()
            pending = {
                "id": cid,
                "name": name or UNKNOWN_CHANNEL,
                "group": UNCATEGORIZED,
                "logo": _attr(_LOGO_RE, attrs),
                "tvg_id": _attr(_TVG_ID_RE, attrs),
            }
            group = _attr(_GROUP_RE, attrs)
            if group is not None:
                pending["group"] = group
            continue

        if ln.startswith("#"):
            continue

        if pending is None:
            continue

        channels.append(
            Channel(
                id=pending["id"],
                name=pending["name"],
                url=ln,
                group=pending["group"],
                logo=pending["logo"],
                tvg_id=pending["tvg_id"],
            )
        )
        pending = None

    if pending is not None:
        dropped += 1

    logger.debug("parsed %d channels, dropped %d entries", len(channels), dropped)
    return tuple(channels)


def extract_groups(channels: Iterable[Channel]) -> tuple[str, ...]:
    return tuple(sorted({c.group for c in channels}))
