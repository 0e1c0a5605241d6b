"""Data models for Playlist Manager."""

from .errors import InvalidIndexError, PlaylistError, UnknownSortKeyError
from .track import SearchResult, SortKey, Track

__all__ = [
    "InvalidIndexError",
    "PlaylistError",
    "SearchResult",
    "SortKey",
    "Track",
    "UnknownSortKeyError",
]
