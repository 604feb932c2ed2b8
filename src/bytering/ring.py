# src/bytering/ring.py
"""Circular byte buffer for scanning streams for a byte sequence.

A single fixed bytearray holds the data. push() and compare() never
allocate, so the ring can sit inside a per-byte read loop.

Typical use:

1. Create a ByteRing with the same capacity as the pattern you want to find.
2. push() bytes (from a buffered source) until compare() reports a match.
3. Rewind the source by len(pattern), if appropriate.
"""

from enum import Enum


class RingState(Enum):
    """Fill state of a ByteRing. FILLING -> FULL is one-way."""

    FILLING = "filling"
    FULL = "full"


class ByteRing:
    """Fixed-capacity circular window over the most recently pushed bytes."""

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity <= 0:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._data = bytearray(capacity)
        self._capacity = capacity
        self._idx = 0  # next slot to write
        self._oldest = 0  # start of the logical window
        self._length = 0

    def __len__(self) -> int:
        """Return number of bytes currently retained."""
        return self._length

    def __bytes__(self) -> bytes:
        return self.materialize()

    def __repr__(self) -> str:
        return f"ByteRing(capacity={self._capacity}, retained={self._length})"

    @property
    def capacity(self) -> int:
        """Return maximum number of bytes the ring can hold."""
        return self._capacity

    @property
    def is_empty(self) -> bool:
        """Return True if nothing has been pushed yet."""
        return self._length == 0

    @property
    def is_full(self) -> bool:
        """Return True once capacity bytes have been pushed."""
        return self._length == self._capacity

    @property
    def state(self) -> RingState:
        return RingState.FULL if self._length == self._capacity else RingState.FILLING

    def push(self, byte: int) -> None:
        """Write one byte, evicting the oldest byte when full.

        Raises:
            ValueError: If byte is outside range(0, 256). The ring is unchanged.
        """
        self._data[self._idx] = byte
        self._idx = (self._idx + 1) % self._capacity
        if self._length < self._capacity:
            self._length += 1
        else:
            self._oldest = (self._oldest + 1) % self._capacity

    def compare(self, pattern: bytes | bytearray | memoryview) -> bool:
        """Check whether the window content matches pattern.

        Comparison begins at the oldest retained byte. A ring that has not yet
        retained len(pattern) bytes never matches, and neither does a pattern
        longer than the capacity. An empty pattern always matches.
        """
        n = len(pattern)
        if n > self._length:
            return False
        data = self._data
        cap = self._capacity
        j = self._oldest
        for c in pattern:
            if data[j] != c:
                return False
            j += 1
            if j == cap:
                j = 0
        return True

    def materialize(self) -> bytes:
        """Return a linear copy of the window, oldest byte first.

        Allocates a new bytes object, so keep it out of hot loops.
        """
        start = self._oldest
        end = start + self._length
        if end <= self._capacity:
            return bytes(self._data[start:end])
        return bytes(self._data[start:]) + bytes(self._data[: end - self._capacity])

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Return the window decoded as text. See materialize() for caveats."""
        return self.materialize().decode(encoding, errors)
