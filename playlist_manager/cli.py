"""Command-line interface for Playlist Manager."""

import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config.settings import Settings
from .config.storage import PlaylistStore
from .core.codec import printable
from .core.collection import TrackCollection
from .core.player import Player
from .models.errors import PlaylistError
from .service import PlaylistSession, build_track_table, parse_index
from .utils.logger import setup_logger
from .utils.platform import get_config_dir

app = typer.Typer(help="Music Playlist Manager")
console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file"
)
FILE_OPTION = typer.Option(
    None,
    "--file",
    "-f",
    help="Playlist CSV file (default: from config, playlist.csv)"
)


def get_settings(config_path: Optional[Path] = None, playlist_file: Optional[Path] = None) -> Settings:
    """Load settings from file or defaults, applying a playlist file override."""
    settings = Settings.from_file_or_default(config_path)
    if playlist_file is not None:
        settings.playlist.path = playlist_file
    return settings


def get_logger(settings: Settings):
    """Get logger configured from settings."""
    return setup_logger(
        log_file=settings.logging.path,
        level=settings.logging.level,
        max_size_mb=settings.logging.max_size_mb,
        backup_count=settings.logging.backup_count,
        console=settings.logging.console
    )


def open_playlist(settings: Settings, store: PlaylistStore) -> TrackCollection:
    """Create a collection holding the tracks of the configured playlist file.

    Exits with an error if the file exists but cannot be read, so a later
    save never replaces a playlist that was not loaded.
    """
    path = settings.playlist.path
    collection = TrackCollection(rng=random.Random(settings.shuffle.seed))
    if not store.load(collection, path) and path.exists():
        console.print(f"[red]Failed to load from {escape(str(path))}[/red]")
        raise typer.Exit(1)
    return collection


def save_playlist(settings: Settings, store: PlaylistStore, collection: TrackCollection) -> None:
    """Save the collection back, exiting with an error if that fails."""
    path = settings.playlist.path
    if not store.save(collection, path):
        console.print(f"[red]Failed to save to {escape(str(path))}[/red]")
        raise typer.Exit(1)


@app.command()
def shell(
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Start the interactive playlist shell."""
    settings = get_settings(config, file)
    logger = get_logger(settings)

    session = PlaylistSession(settings, logger, console)
    session.run()


@app.command(name="list")
def list_tracks(
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """List all tracks."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    if not len(collection):
        console.print("[yellow]Playlist is empty.[/yellow]")
        return

    results = list(enumerate(collection))
    console.print(build_track_table(results, title="Playlist"))
    console.print(f"{len(collection)} track(s)")


@app.command()
def add(
    title: str = typer.Argument(..., help="Track title"),
    artist: str = typer.Option("Unknown", "--artist", "-a", help="Artist name"),
    album: str = typer.Option("Unknown", "--album", "-b", help="Album name"),
    duration: int = typer.Option(0, "--duration", "-d", help="Duration in seconds"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Add a track to the end of the playlist."""
    if not title:
        console.print("[red]Error: Title required[/red]")
        raise typer.Exit(1)

    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    track = collection.add(title=title, artist=artist, album=album, duration=duration)
    save_playlist(settings, store, collection)

    console.print(f"[green]Added: {escape(printable(track.title))} - {escape(printable(track.artist))}[/green]")


@app.command()
def remove(
    number: str = typer.Argument(..., help="Track number (1-based)"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Remove the track at a position."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    index = parse_index(number, len(collection))
    if index is None:
        console.print(f"[red]Invalid index. Usage: remove N (1..{len(collection)})[/red]")
        raise typer.Exit(1)

    track = collection.remove_at(index)
    save_playlist(settings, store, collection)

    console.print(f"[green]Removed track {index + 1}: {escape(printable(track.title))}[/green]")


@app.command()
def search(
    term: str = typer.Argument(..., help="Text to find in title, artist or album"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Search tracks by title, artist or album."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    results = collection.search(term)
    if not results:
        console.print(f'[yellow]No matches for "{escape(term)}".[/yellow]')
        return

    console.print(build_track_table(results, title=f'Matches for "{escape(term)}"'))


@app.command()
def sort(
    key: str = typer.Argument(..., help="title | artist | dur"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Sort the playlist by title, artist or duration."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    try:
        sort_key = collection.sort_by(key)
    except PlaylistError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    save_playlist(settings, store, collection)
    console.print(f"[green]Sorted by {sort_key.value}.[/green]")


@app.command()
def shuffle(
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Shuffle the playlist."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    collection.shuffle()
    save_playlist(settings, store, collection)
    console.print("[green]Playlist shuffled.[/green]")


@app.command()
def play(
    number: str = typer.Argument(..., help="Track number (1-based)"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Play a track (simulated)."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    index = parse_index(number, len(collection))
    if index is None:
        console.print(f"[red]Invalid index. Usage: play N (1..{len(collection)})[/red]")
        raise typer.Exit(1)

    player = Player(console, preview_seconds=settings.player.preview_seconds)
    player.play(collection.get(index))


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    config: Optional[Path] = CONFIG_OPTION,
    file: Optional[Path] = FILE_OPTION
):
    """Remove every track from the playlist."""
    settings = get_settings(config, file)
    store = PlaylistStore(get_logger(settings))
    collection = open_playlist(settings, store)

    if not yes and not typer.confirm(f"Remove all {len(collection)} track(s)?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    collection.clear()
    save_playlist(settings, store, collection)
    console.print("[green]Playlist cleared.[/green]")


@app.command()
def init_config(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file"
    )
):
    """Initialize a configuration file with defaults."""
    if output is None:
        output = get_config_dir() / 'config.yaml'

    if output.exists():
        overwrite = typer.confirm(
            f"Config file already exists at {output}. Overwrite?",
            default=False
        )
        if not overwrite:
            console.print("[yellow]Cancelled[/yellow]")
            return

    settings = Settings()
    settings.save(output)

    console.print(f"[green]Configuration file created: {output}[/green]")
    console.print("\nEdit this file to customize your settings")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
