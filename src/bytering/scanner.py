# src/bytering/scanner.py
"""Scan binary streams for a byte pattern using a ByteRing.

The stream is read in chunks (so the ring sees a buffered source) and every
byte is pushed through a ring sized to the pattern. A match means the last
len(pattern) bytes read equal the pattern, so the match start is simply
bytes_read - len(pattern).
"""

import io
from collections.abc import Iterator
from contextlib import closing
from dataclasses import dataclass
from typing import BinaryIO

import structlog

from bytering.ring import ByteRing

log = structlog.get_logger()

DEFAULT_READ_SIZE = 64 * 1024


@dataclass(frozen=True)
class Match:
    """Location of one pattern occurrence. end is exclusive."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def _base_offset(stream: BinaryIO) -> int:
    """Return current stream position, or 0 for unseekable streams."""
    if stream.seekable():
        return stream.tell()
    return 0


def iter_matches(
    stream: BinaryIO,
    pattern: bytes,
    *,
    read_size: int = DEFAULT_READ_SIZE,
) -> Iterator[Match]:
    """Yield every occurrence of pattern in stream, overlaps included.

    Reading starts at the current stream position. Offsets are absolute for
    seekable streams and relative to the starting position otherwise.

    Raises:
        ValueError: If pattern is empty or read_size < 1.
    """
    if not pattern:
        raise ValueError("pattern must not be empty")
    if read_size < 1:
        raise ValueError(f"read_size must be >= 1, got {read_size}")

    pattern = bytes(pattern)
    size = len(pattern)
    ring = ByteRing(size)
    offset = _base_offset(stream)
    matches = 0

    log.debug("scan_started", pattern_len=size, offset=offset, read_size=read_size)

    try:
        while True:
            chunk = stream.read(read_size)
            if not chunk:
                break
            for byte in chunk:
                ring.push(byte)
                offset += 1
                if ring.compare(pattern):
                    matches += 1
                    log.debug("pattern_matched", start=offset - size, end=offset)
                    yield Match(start=offset - size, end=offset)
    finally:
        # Also runs when the caller stops early and the generator is closed.
        log.debug("scan_finished", bytes_end=offset, matches=matches)


def find_in_stream(
    stream: BinaryIO,
    pattern: bytes,
    *,
    rewind: bool = True,
    read_size: int = DEFAULT_READ_SIZE,
) -> Match | None:
    """Return the first occurrence of pattern in stream, or None.

    With rewind=True and a seekable stream, the stream is left positioned at
    the start of the match. Otherwise the position is wherever reading
    stopped (EOF when nothing matched).
    """
    with closing(iter_matches(stream, pattern, read_size=read_size)) as matches:
        for match in matches:
            if rewind and stream.seekable():
                stream.seek(match.start)
            return match
    return None


def find_in_bytes(data: bytes, pattern: bytes) -> Match | None:
    """Return the first occurrence of pattern in an in-memory buffer."""
    return find_in_stream(io.BytesIO(data), pattern, rewind=False)
