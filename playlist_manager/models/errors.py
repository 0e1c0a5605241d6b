"""Exceptions raised by playlist operations."""


class PlaylistError(Exception):
    """Base class for recoverable playlist errors."""


class InvalidIndexError(PlaylistError, IndexError):
    """Raised when a track position is outside the collection."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Invalid index {index} for playlist of {size} track(s)")


class UnknownSortKeyError(PlaylistError, ValueError):
    """Raised when a sort key is not one of title, artist or duration."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown sort key '{key}'. Use title|artist|dur")
