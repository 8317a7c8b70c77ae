from __future__ import annotations

import faulthandler
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path

import click

from tvdeck.models import Playlist
from tvdeck.services.browse import ALL_GROUPS, filter_channels, page, sort_channels
from tvdeck.services.playlist import InvalidPlaylistError, PlaylistLoadError, PlaylistService
from tvdeck.settings import Settings


logger = logging.getLogger("tvdeck")


def _crash_dir() -> Path:
    return Path.home() / ".tvdeck" / "crash_logs"


def _write_crash_log(text: str) -> str | None:
    try:
        base = _crash_dir()
        base.mkdir(parents=True, exist_ok=True)
        p = base / f"tvdeck_crash_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
        p.write_text(text, encoding="utf-8")
        return str(p)
    except OSError:
        return None


def _setup_faulthandler() -> None:
    try:
        base = _crash_dir()
        base.mkdir(parents=True, exist_ok=True)
        f = open(base / "tvdeck_faulthandler.txt", "a", encoding="utf-8")
        f.write(f"\n=== START {datetime.now().isoformat()} ===\n")
        f.flush()
        faulthandler.enable(file=f, all_threads=True)
    except OSError:
        pass


def _excepthook(exc_type, exc, tb):
    text = "".join(traceback.format_exception(exc_type, exc, tb))
    _write_crash_log(text)
    sys.__excepthook__(exc_type, exc, tb)


def _print_summary(playlist: Playlist) -> None:
    if playlist.is_empty:
        click.echo(f"{playlist.name}: no channels found")
        return
    click.echo(f"{playlist.name}: {playlist.channel_count} channels in {len(playlist.groups)} groups")


@click.command()
@click.argument("sources", nargs=-1)
@click.option("--name", default=None, help="Playlist name (defaults to the source file name)")
@click.option("--groups", "show_groups", is_flag=True, help="Print the group labels")
@click.option("--list", "show_list", is_flag=True, help="Print the channels")
@click.option("--group", default=ALL_GROUPS, show_default=True, help="Only list channels of this group")
@click.option("--search", default="", help="Only list channels whose name contains this text")
@click.option("--sort", "sort_by", type=click.Choice(["name", "group"]), default=None, help="Sort the channel list")
@click.option("--limit", type=int, default=None, help="Maximum channels to list (defaults to one page)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(sources, name, show_groups, show_list, group, search, sort_by, limit, verbose):
    """Load M3U playlists from files or URLs and show their channels.

    Without SOURCES the featured playlists are loaded and combined.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    service = PlaylistService(settings)
    try:
        if sources:
            playlist = service.open_playlist(list(sources), name=name)
        else:
            playlist = service.load_featured()
    except (PlaylistLoadError, InvalidPlaylistError) as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        sys.exit(1)

    if show_groups:
        for g in playlist.groups:
            click.echo(g)

    if show_list:
        channels = filter_channels(playlist.channels, group=group, search=search)
        if sort_by:
            channels = sort_channels(channels, by=sort_by)
        try:
            visible = page(channels, settings.page_size if limit is None else limit)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--limit") from e
        for c in visible:
            click.echo(f"{c.name}\t{c.group}\t{c.url}")
        if len(visible) < len(channels):
            click.echo(f"... {len(channels) - len(visible)} more")

    if not show_groups and not show_list:
        _print_summary(playlist)


def run() -> None:
    sys.excepthook = _excepthook
    _setup_faulthandler()
    cli()


if __name__ == "__main__":
    run()
