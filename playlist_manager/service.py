"""Interactive playlist session for Playlist Manager."""

import logging
import random
import re
from pathlib import Path
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.settings import Settings
from .config.storage import PlaylistStore
from .core.codec import parse_duration, printable
from .core.collection import TrackCollection
from .core.player import Player
from .models.errors import PlaylistError
from .models.track import SearchResult

HELP_TEXT = """
Commands:
 add         - add a new track
 list        - list all tracks
 remove N    - remove track at index N (1-based)
 search X    - search title/artist/album for X
 shuffle     - shuffle playlist
 sort title  - sort by title
 sort artist - sort by artist then title
 sort dur    - sort by duration ascending
 play N      - play track N (simulated)
 save [f]    - save playlist to file (default: playlist.csv)
 load [f]    - load playlist from file and append (default: playlist.csv)
 clear       - clear playlist (destructive)
 help        - show this help
 quit        - save and exit
"""

_INDEX_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_index(token: Optional[str], size: int) -> Optional[int]:
    """Convert a one-based index typed by the user to a zero-based one.

    Args:
        token: User input
        size: Number of tracks in the playlist

    Returns:
        Zero-based index, or None if token is not an integer in 1..size
    """
    if not token or not _INDEX_TOKEN.fullmatch(token):
        return None
    value = int(token)
    if value < 1 or value > size:
        return None
    return value - 1


def build_track_table(results: Iterable[SearchResult], title: Optional[str] = None) -> Table:
    """Render tracks with their one-based positions as a rich table."""
    table = Table(title=title)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Duration", justify="right")

    for position, track in results:
        table.add_row(
            str(position + 1),
            escape(printable(track.title)),
            escape(printable(track.artist)),
            escape(printable(track.album)),
            track.formatted_duration
        )

    return table


class PlaylistSession:
    """Command loop operating on a track collection."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        console: Console,
        collection: Optional[TrackCollection] = None,
        store: Optional[PlaylistStore] = None,
        player: Optional[Player] = None,
        prompt: Optional[Callable[[str], str]] = None
    ):
        """Initialize the session.

        Args:
            settings: Application settings
            logger: Logger instance
            console: Rich console for output
            collection: Track collection (a new one is created if omitted)
            store: Playlist file store
            player: Playback simulator
            prompt: Input function (default: console.input)
        """
        self.settings = settings
        self.logger = logger
        self.console = console

        if collection is None:
            collection = TrackCollection(rng=random.Random(settings.shuffle.seed))
        self.collection = collection

        self.store = store or PlaylistStore(logger)
        self.player = player or Player(
            console,
            preview_seconds=settings.player.preview_seconds
        )
        self.prompt = prompt or console.input

        self.commands = {
            "add": self.cmd_add,
            "list": self.cmd_list,
            "remove": self.cmd_remove,
            "search": self.cmd_search,
            "shuffle": self.cmd_shuffle,
            "sort": self.cmd_sort,
            "play": self.cmd_play,
            "save": self.cmd_save,
            "load": self.cmd_load,
            "clear": self.cmd_clear,
            "help": self.cmd_help,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
        }

    @property
    def playlist_path(self) -> Path:
        return self.settings.playlist.path

    def _ask(self, message: str) -> Optional[str]:
        """Prompt for a line of input, None at end of input."""
        try:
            return self.prompt(message).strip()
        except EOFError:
            return None

    def start(self) -> None:
        """Load the default playlist if configured to."""
        if self.settings.playlist.autoload:
            self.store.load(self.collection, self.playlist_path)

        self.console.print("[cyan]Music Playlist Manager[/cyan]")
        self.console.print(
            f"Type 'help' for commands. Starting with {len(self.collection)} tracks loaded."
        )

    def run(self) -> None:
        """Run the interactive loop until quit or end of input."""
        self.start()

        while True:
            try:
                line = self.prompt("\n> ")
                if not self.execute(line):
                    break
            except (EOFError, KeyboardInterrupt):
                # Ctrl-C at any prompt, including inside a command
                self.console.print()
                self.cmd_quit(None)
                break

    def execute(self, line: str) -> bool:
        """Run a single command line.

        Args:
            line: Command and optional argument

        Returns:
            False if the session should end
        """
        line = line.strip()
        if not line:
            return True

        parts = line.split(None, 1)
        name = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else None

        handler = self.commands.get(name)
        if handler is None:
            self.console.print(
                f"[red]Unknown command: {escape(parts[0])}. Type 'help' for commands.[/red]"
            )
            return True

        self.logger.debug(f"Executing command: {line}")
        try:
            return handler(arg) is not False
        except PlaylistError as e:
            self.logger.warning(str(e))
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return True

    def _usage_index(self, command: str) -> None:
        self.console.print(
            f"[red]Invalid index. Usage: {command} N (1..{len(self.collection)})[/red]"
        )

    def cmd_add(self, arg: Optional[str]) -> None:
        """Prompt for track fields and append the track."""
        title = self._ask("Title: ")
        artist = self._ask("Artist: ")
        album = self._ask("Album: ")
        duration = self._ask("Duration (seconds): ")

        if not title:
            self.console.print("[red]Title required.[/red]")
            return

        track = self.collection.add(
            title=title,
            artist=artist,
            album=album,
            duration=parse_duration(duration or "0")
        )
        self.logger.info(f"Added track: {track.title} - {track.artist}")
        self.console.print(f"[green]Added:[/green] {escape(track.title)} - {escape(track.artist)}")

    def cmd_list(self, arg: Optional[str]) -> None:
        """Show every track."""
        if not len(self.collection):
            self.console.print("Playlist is empty.")
            return

        results = [SearchResult(i, track) for i, track in enumerate(self.collection)]
        self.console.print(build_track_table(results))

    def cmd_remove(self, arg: Optional[str]) -> None:
        """Remove the track at a one-based position."""
        index = parse_index(arg, len(self.collection))
        if index is None:
            self._usage_index("remove")
            return

        track = self.collection.remove_at(index)
        self.logger.info(f"Removed track {index + 1}: {printable(track.title)}")
        self.console.print(f"Removed track {index + 1}.")

    def cmd_search(self, arg: Optional[str]) -> None:
        """List tracks matching a search term."""
        term = arg if arg is not None else self._ask("Search term: ")
        if term is None:
            return

        results = self.collection.search(term)
        if not results:
            self.console.print(f'No matches for "{escape(term)}".')
            return

        self.console.print(build_track_table(results, title=f'Matches for "{escape(term)}"'))

    def cmd_shuffle(self, arg: Optional[str]) -> None:
        self.collection.shuffle()
        self.console.print("Playlist shuffled.")

    def cmd_sort(self, arg: Optional[str]) -> None:
        """Sort by title, artist or duration."""
        if not arg:
            self.console.print("sort title | artist | dur")
            return

        key = self.collection.sort_by(arg.split()[0])
        self.console.print(f"Sorted by {key.value}.")

    def cmd_play(self, arg: Optional[str]) -> None:
        """Play the track at a one-based position."""
        index = parse_index(arg, len(self.collection))
        if index is None:
            self._usage_index("play")
            return

        self.player.play(self.collection.get(index))

    def cmd_save(self, arg: Optional[str]) -> None:
        path = Path(arg) if arg else self.playlist_path
        if self.store.save(self.collection, path):
            self.console.print(f"[green]Saved to {escape(str(path))}[/green]")
        else:
            self.console.print(f"[red]Failed to save to {escape(str(path))}[/red]")

    def cmd_load(self, arg: Optional[str]) -> None:
        path = Path(arg) if arg else self.playlist_path
        if self.store.load(self.collection, path):
            self.console.print(f"[green]Loaded (appended) from {escape(str(path))}[/green]")
        else:
            self.console.print(f"[red]Failed to load from {escape(str(path))}[/red]")

    def cmd_clear(self, arg: Optional[str]) -> None:
        self.collection.clear()
        self.logger.info("Playlist cleared")
        self.console.print("Playlist cleared.")

    def cmd_help(self, arg: Optional[str]) -> None:
        self.console.print(HELP_TEXT, markup=False, highlight=False)

    def cmd_quit(self, arg: Optional[str]) -> bool:
        """Save (if configured) and end the session."""
        if not self.settings.playlist.save_on_exit:
            self.console.print("Bye!")
        elif self.store.save(self.collection, self.playlist_path):
            self.console.print(f"Saved to {escape(str(self.playlist_path))}. Bye!")
        else:
            self.console.print(f"[red]Failed to save to {escape(str(self.playlist_path))}[/red]")
            self.console.print("Bye!")
        return False
