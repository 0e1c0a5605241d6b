"""Playlist file persistence for Playlist Manager."""

import logging
from pathlib import Path

from ..core.codec import decode_tracks, encode_tracks
from ..core.collection import TrackCollection

DEFAULT_PLAYLIST_FILE = "playlist.csv"


class PlaylistStore:
    """Reads and writes playlists as CSV files."""

    def __init__(self, logger: logging.Logger, encoding: str = "utf-8"):
        """Initialize store.

        Args:
            logger: Logger instance
            encoding: Text encoding of playlist files (undecodable bytes are kept as-is)
        """
        self.logger = logger
        self.encoding = encoding

    def save(self, collection: TrackCollection, path: Path) -> bool:
        """Write the collection to a CSV file, replacing it.

        Args:
            collection: Tracks to save
            path: Destination file

        Returns:
            True if the file was written
        """
        path = Path(path)
        try:
            if path.parent != Path():
                path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding=self.encoding, errors="surrogateescape", newline="\n") as f:
                f.write(encode_tracks(collection))
        except OSError as e:
            self.logger.error(f"Failed to save playlist to {path}: {e}")
            return False

        self.logger.info(f"Saved {len(collection)} track(s) to {path}")
        return True

    def load(self, collection: TrackCollection, path: Path) -> bool:
        """Append the tracks of a CSV file to the collection.

        Args:
            collection: Collection to append to
            path: Source file

        Returns:
            True if the file was read
        """
        path = Path(path)
        if not path.exists():
            self.logger.debug(f"Playlist file not found: {path}")
            return False

        try:
            with open(path, "r", encoding=self.encoding, errors="surrogateescape") as f:
                text = f.read()
        except OSError as e:
            self.logger.error(f"Failed to load playlist from {path}: {e}")
            return False

        added = collection.extend(decode_tracks(text))
        self.logger.info(f"Loaded {added} track(s) from {path}")
        return True
