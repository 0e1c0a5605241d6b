"""In-memory ordered track collection."""

import random
import string
from typing import Iterable, Iterator, List, Optional, Union

from ..models.errors import InvalidIndexError
from ..models.track import UNKNOWN, SearchResult, SortKey, Track

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_fold(text: str) -> str:
    """Lowercase ASCII letters only, leaving other characters untouched."""
    return text.translate(_ASCII_LOWER)


def _title_key(track: Track) -> str:
    return ascii_fold(track.title)


def _artist_key(track: Track) -> tuple:
    return ascii_fold(track.artist), ascii_fold(track.title)


def _duration_key(track: Track) -> int:
    return track.duration


_SORT_KEYS = {
    SortKey.TITLE: _title_key,
    SortKey.ARTIST: _artist_key,
    SortKey.DURATION: _duration_key,
}


class TrackCollection:
    """Ordered, mutable sequence of tracks.

    Insertion order is the listing and playback order. Only sort_by and
    shuffle reorder the collection.
    """

    def __init__(
        self,
        tracks: Optional[Iterable[Track]] = None,
        rng: Optional[random.Random] = None
    ):
        """Initialize the collection.

        Args:
            tracks: Initial tracks (optional)
            rng: Random generator used by shuffle (seeded once if omitted)
        """
        self._tracks: List[Track] = list(tracks) if tracks else []
        self.rng = rng if rng is not None else random.Random()

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self._tracks)

    def __getitem__(self, index: int) -> Track:
        return self.get(index)

    @property
    def tracks(self) -> List[Track]:
        """Copy of the tracks in collection order."""
        return list(self._tracks)

    @property
    def total_duration(self) -> int:
        return sum(track.duration for track in self._tracks)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tracks):
            raise InvalidIndexError(index, len(self._tracks))

    def add(
        self,
        title: Optional[str] = None,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        duration: int = 0
    ) -> Track:
        """Append a new track to the end of the collection.

        Args:
            title: Track title ("Unknown" if None)
            artist: Artist name ("Unknown" if None)
            album: Album name ("Unknown" if None)
            duration: Duration in seconds, stored as given

        Returns:
            The appended Track
        """
        track = Track(
            title=UNKNOWN if title is None else title,
            artist=UNKNOWN if artist is None else artist,
            album=UNKNOWN if album is None else album,
            duration=duration
        )
        self._tracks.append(track)
        return track

    def extend(self, tracks: Iterable[Track]) -> int:
        """Append tracks in order.

        Returns:
            Number of tracks appended
        """
        before = len(self._tracks)
        self._tracks.extend(tracks)
        return len(self._tracks) - before

    def get(self, index: int) -> Track:
        """Get the track at a zero-based position.

        Raises:
            InvalidIndexError: If index is outside [0, size)
        """
        self._check_index(index)
        return self._tracks[index]

    def remove_at(self, index: int) -> Track:
        """Remove the track at a zero-based position.

        Later tracks shift left by one, keeping their relative order.

        Args:
            index: Position of the track to remove

        Returns:
            The removed Track

        Raises:
            InvalidIndexError: If index is outside [0, size)
        """
        self._check_index(index)
        return self._tracks.pop(index)

    def search(self, term: str) -> List[SearchResult]:
        """Find tracks whose title, artist or album contains term.

        Matching is a case-insensitive (ASCII) substring test.

        Args:
            term: Text to look for

        Returns:
            Matching tracks with their positions, in collection order
        """
        needle = ascii_fold(term)
        return [
            SearchResult(position, track)
            for position, track in enumerate(self._tracks)
            if needle in ascii_fold(track.title)
            or needle in ascii_fold(track.artist)
            or needle in ascii_fold(track.album)
        ]

    def sort_by(self, key: Union[SortKey, str]) -> SortKey:
        """Reorder the collection in place.

        Args:
            key: SortKey or its name ("title", "artist", "duration"/"dur")

        Returns:
            The SortKey that was applied

        Raises:
            UnknownSortKeyError: If key is not recognised (nothing is changed)
        """
        sort_key = SortKey.parse(key)
        self._tracks.sort(key=_SORT_KEYS[sort_key])
        return sort_key

    def shuffle(self) -> None:
        """Shuffle the collection with Fisher-Yates."""
        items = self._tracks
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def clear(self) -> None:
        """Remove every track."""
        self._tracks.clear()
