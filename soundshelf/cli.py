"""Command-line interface for Soundshelf."""

import logging
import random
import sys
from typing import List

# Configure logging BEFORE any imports - default to WARNING for normal runs
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("soundshelf")

# Suppress noisy third-party loggers
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("requests").setLevel(logging.WARNING)

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from soundshelf import Soundshelf, __version__
from soundshelf.models import Album, Artist, LibraryItem, Track
from soundshelf.utils.helpers import format_duration

app = typer.Typer(help="Soundshelf - browse music and keep a local library")
favorites_app = typer.Typer(help="Manage favorite artists, albums and tracks")
playlists_app = typer.Typer(help="Manage local playlists")
app.add_typer(favorites_app, name="favorites")
app.add_typer(playlists_app, name="playlists")
console = Console()


def debug_callback(value: bool):
    """Enable debug mode."""
    if value:
        logging.getLogger("soundshelf").setLevel(logging.DEBUG)
        logging.getLogger("urllib3").setLevel(logging.INFO)
        console.print("[dim]Debug mode enabled[/dim]")


def config_option():
    return typer.Option(
        "soundshelf.yaml",
        "--config",
        "-c",
        help="Path to config file",
    )


def _open(config_path: str) -> Soundshelf:
    try:
        return Soundshelf(config_path=config_path)
    except Exception as e:
        console.print(f"[red]✗[/red] Could not start Soundshelf: {e}")
        sys.exit(1)


def _print_artists(artists: List[Artist]) -> None:
    for artist in artists:
        genre = f" [dim]{escape(artist.genre)}[/dim]" if artist.genre else ""
        console.print(f"  [cyan]{artist.id}[/cyan] {escape(artist.name)}{genre}")


def _print_albums(albums: List[Album]) -> None:
    for album in albums:
        year = f" ({album.year_released})" if album.year_released else ""
        console.print(f"  [cyan]{album.id}[/cyan] {escape(str(album))}{year}")


def _print_tracks(tracks: List[Track]) -> None:
    for index, track in enumerate(tracks, start=1):
        marker = "" if track.playable else " [dim](no preview)[/dim]"
        console.print(
            f"  {index:>2}. [cyan]{track.id}[/cyan] {escape(str(track))} "
            f"\\[{format_duration(track.duration_ms)}]{marker}"
        )


def _play(shelf: Soundshelf, track: Track) -> None:
    url = shelf.stream_url(track)
    if not url:
        console.print(f"[yellow]⚠[/yellow] {escape(str(track))} is not available for playback")
        return
    console.print(f"[green]▶[/green] {escape(str(track))}")
    console.print(url)


@app.callback()
def common_options(
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
        callback=debug_callback,
        is_eager=True,
    ),
):
    """Soundshelf - browse music and keep a local library."""
    pass


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Soundshelf[/bold] v{__version__}")


@app.command()
def home(config_path: str = config_option()) -> None:
    """Show popular artists, albums and tracks."""
    shelf = _open(config_path)
    feed = shelf.home()
    console.print("[bold]Trending artists[/bold]")
    _print_artists(feed.artists)
    console.print("[bold]Trending albums[/bold]")
    _print_albums(feed.albums)
    console.print("[bold]Popular tracks[/bold]")
    _print_tracks(feed.tracks)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    config_path: str = config_option(),
) -> None:
    """Search artists, albums and tracks."""
    shelf = _open(config_path)
    results = shelf.search(query)
    if results.is_empty:
        console.print("[yellow]No results found[/yellow]")
        return
    if results.artists:
        console.print(f"[bold]Artists ({len(results.artists)})[/bold]")
        _print_artists(results.artists)
    if results.albums:
        console.print(f"[bold]Albums ({len(results.albums)})[/bold]")
        _print_albums(results.albums)
    if results.tracks:
        console.print(f"[bold]Tracks ({len(results.tracks)})[/bold]")
        _print_tracks(results.tracks)


@app.command()
def artist(
    artist_id: str = typer.Argument(..., help="Artist id"),
    config_path: str = config_option(),
) -> None:
    """Show an artist with albums and tracks."""
    shelf = _open(config_path)
    detail = shelf.artist(artist_id)
    if detail is None:
        console.print(f"[red]✗[/red] Artist not found: {artist_id}")
        sys.exit(1)
    heart = " [red]♥[/red]" if detail.is_favorite else ""
    console.print(f"[bold]{escape(detail.artist.name)}[/bold]{heart}")
    console.print("[bold]Albums[/bold]")
    _print_albums(detail.albums)
    console.print("[bold]Tracks[/bold]")
    _print_tracks(detail.tracks)


@app.command()
def album(
    album_id: str = typer.Argument(..., help="Album id"),
    play_all: bool = typer.Option(False, "--play", help="Play the album from its first track"),
    config_path: str = config_option(),
) -> None:
    """Show an album with its tracks."""
    shelf = _open(config_path)
    detail = shelf.album(album_id)
    if detail is None:
        console.print(f"[red]✗[/red] Album not found: {album_id}")
        sys.exit(1)
    heart = " [red]♥[/red]" if detail.is_favorite else ""
    year = f" ({detail.album.year_released})" if detail.album.year_released else ""
    console.print(f"[bold]{escape(str(detail.album))}{year}[/bold]{heart}")
    _print_tracks(detail.tracks)
    if play_all:
        if not detail.tracks:
            console.print("[yellow]⚠[/yellow] No playable tracks found for this album")
            return
        _play(shelf, detail.tracks[0])


@app.command()
def play(
    track_id: str = typer.Argument(..., help="Track id"),
    config_path: str = config_option(),
) -> None:
    """Print the preview URL for a track."""
    shelf = _open(config_path)
    track = shelf.track(track_id)
    if track is None:
        console.print(f"[red]✗[/red] Track not found: {track_id}")
        sys.exit(1)
    _play(shelf, track)


@favorites_app.command("list")
def favorites_list(config_path: str = config_option()) -> None:
    """List favorites."""
    shelf = _open(config_path)
    favorites = shelf.favorites()
    if not favorites:
        console.print("[yellow]No favorites yet[/yellow]")
        return
    table = Table("Type", "Id", "Title")
    for item in favorites:
        table.add_row(item.type, item.id, escape(item.display_title))
    console.print(table)


@favorites_app.command("add")
def favorites_add(
    item_type: str = typer.Argument(..., help="artist, album or track"),
    item_id: str = typer.Argument(..., help="Item id"),
    config_path: str = config_option(),
) -> None:
    """Add an artist, album or track to favorites."""
    shelf = _open(config_path)
    item = _lookup(shelf, item_type, item_id)
    if shelf.library.add_to_favorites(item):
        console.print(f"[green]✓[/green] Added {escape(str(item))} to favorites")
    elif shelf.library.last_error is not None:
        console.print(f"[red]✗[/red] Could not update favorites: {shelf.library.last_error}")
        sys.exit(1)
    else:
        console.print(f"[yellow]⚠[/yellow] {escape(str(item))} is already a favorite")


@favorites_app.command("toggle")
def favorites_toggle(
    item_type: str = typer.Argument(..., help="artist, album or track"),
    item_id: str = typer.Argument(..., help="Item id"),
    config_path: str = config_option(),
) -> None:
    """Add or remove an item depending on whether it is a favorite."""
    _check_type(item_type)
    shelf = _open(config_path)
    if shelf.library.is_favorite(item_id):
        item = LibraryItem(id=item_id, type=item_type)
    else:
        item = _lookup(shelf, item_type, item_id)
    now_favorite = shelf.library.toggle_favorite(item)
    if shelf.library.last_error is not None:
        console.print(f"[red]✗[/red] Could not update favorites: {shelf.library.last_error}")
        sys.exit(1)
    state = "added to" if now_favorite else "removed from"
    console.print(f"[green]✓[/green] {item_id} {state} favorites")


@favorites_app.command("remove")
def favorites_remove(
    item_id: str = typer.Argument(..., help="Item id"),
    config_path: str = config_option(),
) -> None:
    """Remove an item from favorites."""
    shelf = _open(config_path)
    if not shelf.library.remove_from_favorites(item_id):
        console.print(f"[red]✗[/red] Could not update favorites: {shelf.library.last_error}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Removed {item_id} from favorites")


@favorites_app.command("play")
def favorites_play(
    item_id: str = typer.Argument(..., help="Id of a favorite track"),
    config_path: str = config_option(),
) -> None:
    """Play a favorite track."""
    shelf = _open(config_path)
    item = next((fav for fav in shelf.favorites() if fav.id == item_id), None)
    if item is None:
        console.print(f"[red]✗[/red] Not a favorite: {item_id}")
        sys.exit(1)
    track = item.to_track()
    if track is None:
        console.print(f"[red]✗[/red] {escape(str(item))} is not a track")
        sys.exit(1)
    _play(shelf, track)


def _check_type(item_type: str) -> None:
    if item_type not in ("artist", "album", "track"):
        console.print(f"[red]✗[/red] Unknown type '{item_type}' (use artist, album or track)")
        sys.exit(1)


def _lookup(shelf: Soundshelf, item_type: str, item_id: str) -> LibraryItem:
    _check_type(item_type)
    item = shelf.favorite_item(item_type, item_id)
    if item is None:
        console.print(f"[red]✗[/red] {item_type.capitalize()} not found: {item_id}")
        sys.exit(1)
    return item


@playlists_app.command("list")
def playlists_list(config_path: str = config_option()) -> None:
    """List playlists."""
    shelf = _open(config_path)
    playlists = shelf.playlists()
    if not playlists:
        console.print("[yellow]No playlists yet[/yellow]")
        return
    table = Table("Id", "Name", "Tracks", "Length")
    for playlist in playlists:
        table.add_row(
            playlist.id,
            escape(playlist.name),
            str(len(playlist.tracks)),
            format_duration(playlist.total_duration_ms),
        )
    console.print(table)


@playlists_app.command("show")
def playlists_show(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    config_path: str = config_option(),
) -> None:
    """Show the tracks of a playlist."""
    shelf = _open(config_path)
    playlist = shelf.library.get_playlist(playlist_id)
    if playlist is None:
        console.print(f"[red]✗[/red] Playlist not found: {playlist_id}")
        sys.exit(1)
    console.print(f"[bold]{escape(playlist.name)}[/bold]")
    if not playlist.tracks:
        console.print("[dim]This playlist is empty[/dim]")
    _print_tracks(playlist.tracks)


@playlists_app.command("play")
def playlists_play(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    shuffle: bool = typer.Option(False, "--shuffle", "-s", help="Start from a random track"),
    config_path: str = config_option(),
) -> None:
    """Play a playlist from its first track, or a random one with --shuffle."""
    shelf = _open(config_path)
    playlist = shelf.library.get_playlist(playlist_id)
    if playlist is None:
        console.print(f"[red]✗[/red] Playlist not found: {playlist_id}")
        sys.exit(1)
    if not playlist.tracks:
        console.print("[yellow]⚠[/yellow] This playlist is empty")
        return
    track = random.choice(playlist.tracks) if shuffle else playlist.tracks[0]
    _play(shelf, track)


@playlists_app.command("create")
def playlists_create(
    name: str = typer.Argument(..., help="Playlist name"),
    config_path: str = config_option(),
) -> None:
    """Create an empty playlist."""
    if not name.strip():
        console.print("[red]✗[/red] Playlist name cannot be empty")
        sys.exit(1)
    shelf = _open(config_path)
    playlist = shelf.library.create_playlist(name.strip())
    if playlist is None:
        console.print(f"[red]✗[/red] Could not create playlist: {shelf.library.last_error}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Created playlist '{escape(playlist.name)}' ({playlist.id})")


@playlists_app.command("rename")
def playlists_rename(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    name: str = typer.Argument(..., help="New name"),
    config_path: str = config_option(),
) -> None:
    """Rename a playlist."""
    if not name.strip():
        console.print("[red]✗[/red] Playlist name cannot be empty")
        sys.exit(1)
    shelf = _open(config_path)
    if not shelf.library.update_playlist_name(playlist_id, name.strip()):
        console.print(f"[red]✗[/red] Could not rename playlist {playlist_id}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Renamed playlist to '{escape(name.strip())}'")


@playlists_app.command("delete")
def playlists_delete(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    config_path: str = config_option(),
) -> None:
    """Delete a playlist."""
    shelf = _open(config_path)
    if not shelf.library.delete_playlist(playlist_id):
        console.print(f"[red]✗[/red] Could not delete playlist: {shelf.library.last_error}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Deleted playlist {playlist_id}")


@playlists_app.command("add")
def playlists_add(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    track_id: str = typer.Argument(..., help="Track id"),
    config_path: str = config_option(),
) -> None:
    """Append a track to a playlist."""
    shelf = _open(config_path)
    track = shelf.track(track_id)
    if track is None:
        console.print(f"[red]✗[/red] Track not found: {track_id}")
        sys.exit(1)
    if shelf.library.add_to_playlist(playlist_id, track):
        console.print(f"[green]✓[/green] Added {escape(str(track))} to playlist {playlist_id}")
    elif shelf.library.last_error is not None:
        console.print(f"[red]✗[/red] Could not update playlist: {shelf.library.last_error}")
        sys.exit(1)
    else:
        console.print(f"[yellow]⚠[/yellow] Playlist {playlist_id} not found or already has {escape(str(track))}")


@playlists_app.command("remove")
def playlists_remove(
    playlist_id: str = typer.Argument(..., help="Playlist id"),
    track_id: str = typer.Argument(..., help="Track id"),
    config_path: str = config_option(),
) -> None:
    """Remove a track from a playlist."""
    shelf = _open(config_path)
    if not shelf.library.remove_from_playlist(playlist_id, track_id):
        console.print(f"[red]✗[/red] Could not update playlist {playlist_id}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Removed {track_id} from playlist {playlist_id}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
