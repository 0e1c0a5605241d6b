"""Simulated playback."""

import time
from typing import Callable

from rich.console import Console
from rich.markup import escape

from ..models.track import Track
from .codec import printable


class Player:
    """Prints the playing track and blocks for a short preview."""

    def __init__(
        self,
        console: Console,
        sleep: Callable[[float], None] = time.sleep,
        preview_seconds: int = 5
    ):
        """Initialize player.

        Args:
            console: Rich console for output
            sleep: Blocking wait function
            preview_seconds: Upper bound on the simulated play time
        """
        self.console = console
        self.sleep = sleep
        self.preview_seconds = preview_seconds

    def preview_length(self, track: Track) -> int:
        """Seconds a track is played for: min(duration, preview_seconds)."""
        return max(0, min(track.duration, self.preview_seconds))

    def play(self, track: Track) -> int:
        """Play a track (simulated).

        Args:
            track: Track to play

        Returns:
            Number of seconds waited
        """
        seconds = self.preview_length(track)
        self.console.print(
            f"[green]Now playing:[/green] {escape(printable(track.title))} - {escape(printable(track.artist))} "
            f"{escape('[' + track.formatted_duration + ']')}  (demo {seconds} sec)",
            highlight=False
        )
        if seconds:
            self.sleep(seconds)
        return seconds
