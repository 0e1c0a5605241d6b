"""Configuration module for Playlist Manager."""

from .settings import Settings
from .storage import DEFAULT_PLAYLIST_FILE, PlaylistStore

__all__ = ["DEFAULT_PLAYLIST_FILE", "PlaylistStore", "Settings"]
