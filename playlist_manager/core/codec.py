"""CSV encoding and decoding of track lists.

Format::

    title,artist,album,duration_seconds
    <title>,<artist>,<album>,<duration>

Text fields are wrapped in double quotes only when they contain a comma or
a double quote; embedded quotes are doubled. Fields must not contain
newlines.
"""

import re
from typing import Iterable, List, Optional, Tuple

from ..models.track import Track

HEADER = "title,artist,album,duration_seconds"
DELIMITER = ","
QUOTE = '"'
MAX_FIELDS = 4

_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")


def escape_field(text: str) -> str:
    """Quote a field if it contains the delimiter or a quote."""
    if DELIMITER in text or QUOTE in text:
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def encode_track(track: Track) -> str:
    """Encode one track as a record (without line terminator)."""
    return DELIMITER.join([
        escape_field(track.title),
        escape_field(track.artist),
        escape_field(track.album),
        str(int(track.duration)),
    ])


def encode_tracks(tracks: Iterable[Track]) -> str:
    """Encode tracks as CSV text, header first."""
    lines = [HEADER]
    lines.extend(encode_track(track) for track in tracks)
    return "\n".join(lines) + "\n"


def read_field(line: str, pos: int) -> Tuple[str, Optional[int]]:
    """Read one field starting at pos.

    A field starting with a quote runs to the matching closing quote, with
    "" standing for a literal quote; anything between the closing quote and
    the next comma is dropped. Other fields run to the next comma.

    Args:
        line: Record text without line terminator
        pos: Offset of the field

    Returns:
        Tuple of (field value, offset of the next field or None at end of line)
    """
    end = len(line)
    if pos >= end:
        return "", None

    if line[pos] == QUOTE:
        chars = []
        pos += 1
        while pos < end:
            ch = line[pos]
            if ch == QUOTE:
                if line.startswith(QUOTE * 2, pos):
                    chars.append(QUOTE)
                    pos += 2
                    continue
                pos += 1
                break
            chars.append(ch)
            pos += 1
        value = "".join(chars)
        comma = line.find(DELIMITER, pos)
        pos = end if comma == -1 else comma + 1
    else:
        comma = line.find(DELIMITER, pos)
        if comma == -1:
            value, pos = line[pos:], end
        else:
            value, pos = line[pos:comma], comma + 1

    return value, (pos if pos < end else None)


def split_record(line: str) -> List[str]:
    """Split a record into exactly MAX_FIELDS values.

    Missing fields are empty; content past the last field is ignored.
    """
    fields = []
    pos: Optional[int] = 0
    for _ in range(MAX_FIELDS):
        if pos is None:
            fields.append("")
            continue
        value, pos = read_field(line, pos)
        fields.append(value)
    return fields


def parse_duration(text: str) -> int:
    """Parse a leading integer the way C atoi does, 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def is_header(line: str) -> bool:
    """Check whether a line looks like the header row."""
    return "title" in line and "artist" in line


def decode_tracks(text: str) -> List[Track]:
    """Decode CSV text into tracks.

    The first line is skipped if it looks like a header. Records with an
    empty title are dropped. Malformed input never raises: short rows get
    empty fields and bad durations become 0.

    Args:
        text: CSV text

    Returns:
        Decoded tracks in file order
    """
    lines = text.split("\n")
    if lines and is_header(lines[0]):
        lines = lines[1:]

    tracks = []
    for line in lines:
        if line.endswith("\r"):
            line = line[:-1]
        title, artist, album, duration = split_record(line)
        if not title:
            continue
        tracks.append(Track(
            title=title,
            artist=artist,
            album=album,
            duration=parse_duration(duration)
        ))
    return tracks


def printable(text: str) -> str:
    """Make text read with surrogateescape safe to print.

    Bytes that were not valid in the file encoding are shown as U+FFFD.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
