"""Formatting and parsing utilities shared by the CLI and logging."""

import string

_PRINTABLE = frozenset(
    ord(c) for c in string.ascii_letters + string.digits + string.punctuation + " "
)


def format_offset(offset: int) -> str:
    """Format a stream offset as hex with the decimal value alongside.

    Example: 42 -> "0x0000002a (42)"
    """
    return f"0x{offset:08x} ({offset})"


def format_bytes_preview(data: bytes, limit: int = 64) -> str:
    """Render bytes for a terminal: printable ASCII kept, the rest as \\xNN.

    Args:
        data: Bytes to render
        limit: Maximum number of input bytes rendered before truncating

    Returns:
        Escaped string, with a trailing "…" when data was longer than limit.
    """
    parts = []
    for b in data[:limit]:
        if b == 0x5C:
            parts.append("\\\\")
        elif b in _PRINTABLE:
            parts.append(chr(b))
        else:
            parts.append(f"\\x{b:02x}")
    suffix = "…" if len(data) > limit else ""
    return "".join(parts) + suffix


def parse_pattern(text: str, *, hex_input: bool = False, encoding: str = "utf-8") -> bytes:
    """Convert a command-line pattern to bytes.

    Args:
        text: Pattern as typed by the user
        hex_input: Treat text as hex digits; spaces and colons are ignored
        encoding: Text encoding used when hex_input is False

    Raises:
        ValueError: If the hex is malformed or the pattern is empty.
    """
    if hex_input:
        digits = "".join(text.replace(":", " ").split())
        try:
            pattern = bytes.fromhex(digits)
        except ValueError as e:
            raise ValueError(f"Invalid hex pattern {text!r}: {e}") from e
    else:
        pattern = text.encode(encoding)

    if not pattern:
        raise ValueError("Pattern must not be empty")
    return pattern
