# tests/test_ring.py
"""Tests for the circular byte ring."""

import pytest

from bytering.ring import ByteRing, RingState


def fill(ring: ByteRing, data: bytes) -> None:
    """Push every byte of data into ring."""
    for b in data:
        ring.push(b)


def find_position(data: bytes, pattern: bytes) -> int | None:
    """Return bytes written when a ring sized to pattern first matches."""
    ring = ByteRing(len(pattern))
    for i, b in enumerate(data):
        ring.push(b)
        if ring.compare(pattern):
            assert ring.materialize() == pattern
            return i + 1
    return None


class TestConstruction:
    """Tests for ByteRing creation."""

    def test_new_ring_is_empty(self) -> None:
        """A new ring retains nothing and is filling."""
        ring = ByteRing(8)
        assert len(ring) == 0
        assert ring.capacity == 8
        assert ring.is_empty
        assert not ring.is_full
        assert ring.state is RingState.FILLING
        assert ring.materialize() == b""

    @pytest.mark.parametrize("capacity", [0, -1, -100])
    def test_rejects_non_positive_capacity(self, capacity: int) -> None:
        """Capacity <= 0 is refused at construction."""
        with pytest.raises(ValueError, match="capacity must be >= 1"):
            ByteRing(capacity)

    @pytest.mark.parametrize("capacity", [1.5, "8", None, True])
    def test_rejects_non_int_capacity(self, capacity: object) -> None:
        """Capacity must be a real int."""
        with pytest.raises(TypeError):
            ByteRing(capacity)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        ring = ByteRing(4)
        ring.push(1)
        assert repr(ring) == "ByteRing(capacity=4, retained=1)"


class TestPush:
    """Tests for push() and fill state."""

    @pytest.mark.parametrize("capacity", [1, 8, 17, 267])
    def test_capacity_bound(self, capacity: int) -> None:
        """Retained length is min(pushes, capacity), including non-ASCII bytes."""
        ring = ByteRing(capacity)
        for i in range(2 * capacity):
            ring.push(255 - i % 256)
            assert len(ring) == min(i + 1, capacity)
            assert len(ring.materialize()) == min(i + 1, capacity)

    def test_transitions_to_full_once(self) -> None:
        """The push that reaches capacity switches the state to FULL for good."""
        ring = ByteRing(3)
        ring.push(1)
        ring.push(2)
        assert ring.state is RingState.FILLING
        ring.push(3)
        assert ring.state is RingState.FULL
        for b in range(10):
            ring.push(b)
            assert ring.is_full
            assert len(ring) == 3

    def test_capacity_one_keeps_last_byte(self) -> None:
        """A one-byte ring only holds the most recent push."""
        ring = ByteRing(1)
        fill(ring, b"xyz")
        assert ring.materialize() == b"z"
        assert ring.compare(b"z")
        assert not ring.compare(b"y")

    @pytest.mark.parametrize("value", [-1, 256, 1000])
    def test_out_of_range_value_leaves_ring_unchanged(self, value: int) -> None:
        """Values that are not bytes are rejected before any cursor moves."""
        ring = ByteRing(4)
        fill(ring, b"ab")
        with pytest.raises(ValueError):
            ring.push(value)
        assert len(ring) == 2
        assert ring.materialize() == b"ab"


class TestMaterialize:
    """Tests for materialize(), text() and bytes()."""

    def test_partial_fill(self) -> None:
        """Only bytes actually written are returned."""
        ring = ByteRing(20)
        fill(ring, b"ABC")
        assert ring.materialize() == b"ABC"
        assert len(ring.text()) == 3

    def test_wraparound(self) -> None:
        """Pushing A..E into a 4-byte ring evicts A."""
        ring = ByteRing(4)
        for i in range(65, 70):
            ring.push(i)
        assert ring.materialize() == b"BCDE"
        assert ring.text() == "BCDE"

    def test_exactly_full_is_not_wrapped(self) -> None:
        ring = ByteRing(4)
        fill(ring, b"WXYZ")
        assert ring.materialize() == b"WXYZ"

    def test_many_wraps(self) -> None:
        """Content stays in temporal order after wrapping several times."""
        data = bytes(range(256)) * 3
        ring = ByteRing(7)
        fill(ring, data)
        assert ring.materialize() == data[-7:]

    def test_bytes_dunder(self) -> None:
        ring = ByteRing(3)
        fill(ring, b"hello")
        assert bytes(ring) == b"llo"

    def test_returns_copy(self) -> None:
        """Later pushes do not affect a materialized copy."""
        ring = ByteRing(3)
        fill(ring, b"abc")
        snapshot = ring.materialize()
        fill(ring, b"def")
        assert snapshot == b"abc"

    def test_text_with_encoding_errors(self) -> None:
        """Decoding is the caller's concern and follows the errors argument."""
        ring = ByteRing(4)
        fill(ring, "🍀".encode())
        ring.push(0x41)
        assert ring.text(errors="replace").endswith("A")
        with pytest.raises(UnicodeDecodeError):
            ring.text()


class TestCompare:
    """Tests for compare()."""

    @pytest.mark.parametrize(
        ("data", "pattern"),
        [
            (b"foofoo", b"foo"),
            (b"eedle eedle needl haysneedletack", b"needle"),
            (" test 🍀 stringLucky".encode(), b"Lucky"),
        ],
    )
    def test_finds_first_occurrence(self, data: bytes, pattern: bytes) -> None:
        """compare() first succeeds right after the last pattern byte is pushed."""
        assert find_position(data, pattern) == data.index(pattern) + len(pattern)

    def test_match_repeats_on_later_occurrence(self) -> None:
        """A match does not consume the window; later occurrences match again."""
        ring = ByteRing(3)
        results = []
        for b in b"foofoo":
            ring.push(b)
            results.append(ring.compare(b"foo"))
        assert results == [False, False, True, False, False, True]

    def test_not_found(self) -> None:
        """Byte values 0..254 never contain 'bogus'."""
        ring = ByteRing(200)
        for i in range(255):
            ring.push(i)
            assert not ring.compare(b"bogus")

    def test_pattern_larger_than_capacity(self) -> None:
        """A ring too small for the pattern never finds it."""
        ring = ByteRing(8)
        fill(ring, b"ABCDEFGHI")
        assert not ring.compare(b"ABCDEFGHI")
        assert ring.compare(b"BCDEFGHI")

    def test_pattern_larger_than_capacity_any_point(self) -> None:
        ring = ByteRing(2)
        for b in b"aaaaaa":
            ring.push(b)
            assert not ring.compare(b"aaa")

    def test_not_enough_bytes_never_matches(self) -> None:
        """Zero-filled storage is never compared before it is written."""
        ring = ByteRing(4)
        assert not ring.compare(b"\x00")
        ring.push(0)
        assert not ring.compare(b"\x00\x00")
        assert ring.compare(b"\x00")

    def test_compares_from_oldest_byte(self) -> None:
        """With a larger ring, compare() checks the oldest retained bytes."""
        ring = ByteRing(6)
        fill(ring, b"abcdef")
        assert ring.compare(b"abc")
        assert not ring.compare(b"def")
        ring.push(ord("g"))
        assert ring.compare(b"bcd")

    def test_empty_pattern_matches(self) -> None:
        """The empty pattern trivially matches, even on an empty ring."""
        ring = ByteRing(3)
        assert ring.compare(b"")
        fill(ring, b"xyzw")
        assert ring.compare(b"")

    def test_compare_is_idempotent(self) -> None:
        """Repeated compares without a push give the same answer."""
        ring = ByteRing(3)
        fill(ring, b"xfoo")
        assert [ring.compare(b"foo") for _ in range(5)] == [True] * 5
        assert [ring.compare(b"bar") for _ in range(5)] == [False] * 5
        assert ring.materialize() == b"foo"

    def test_accepts_bytearray_and_memoryview(self) -> None:
        ring = ByteRing(3)
        fill(ring, b"abc")
        assert ring.compare(bytearray(b"abc"))
        assert ring.compare(memoryview(b"abc"))

    @pytest.mark.parametrize("pushes", [0, 1, 3, 5, 11, 40])
    def test_materialize_round_trip(self, pushes: int) -> None:
        """A ring always matches its own materialized content."""
        ring = ByteRing(5)
        for i in range(pushes):
            ring.push((i * 37) % 256)
        assert ring.compare(ring.materialize())
