"""Track data models."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .errors import UnknownSortKeyError

UNKNOWN = "Unknown"


@dataclass
class Track:
    """Track metadata model."""

    title: str = UNKNOWN
    artist: str = UNKNOWN
    album: str = UNKNOWN
    duration: int = 0  # Duration in seconds

    @property
    def formatted_duration(self) -> str:
        """Duration as M:SS.

        Division truncates toward zero, so -65 is shown as -1:-5.
        """
        minutes = abs(self.duration) // 60
        if self.duration < 0:
            minutes = -minutes
        seconds = self.duration - minutes * 60
        return f"{minutes}:{seconds:02d}"


class SortKey(str, Enum):
    """Sort key enumeration."""

    TITLE = "title"
    ARTIST = "artist"
    DURATION = "duration"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        """Convert user input to a sort key.

        Args:
            value: Key name, case-insensitive ("dur" is accepted for duration)

        Returns:
            Matching SortKey

        Raises:
            UnknownSortKeyError: If the key is not recognised
        """
        if isinstance(value, cls):
            return value

        name = (value or "").strip().lower()
        if name == "dur":
            return cls.DURATION
        try:
            return cls(name)
        except ValueError:
            raise UnknownSortKeyError(value) from None


class SearchResult(NamedTuple):
    """A matching track and its zero-based position."""

    position: int
    track: Track
