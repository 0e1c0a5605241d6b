"""Music Playlist Manager."""

__version__ = "0.1.0"
