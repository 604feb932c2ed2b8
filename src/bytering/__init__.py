"""Fixed-capacity circular byte buffer for streaming pattern detection."""

from bytering.ring import ByteRing, RingState
from bytering.scanner import Match, find_in_bytes, find_in_stream, iter_matches

__all__ = [
    "ByteRing",
    "Match",
    "RingState",
    "find_in_bytes",
    "find_in_stream",
    "iter_matches",
]
