"""Core functionality for Playlist Manager."""

from .collection import TrackCollection
from .player import Player

__all__ = ["TrackCollection", "Player"]
