"""Byte/UTF-16 offset helpers shared across modules."""
from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import List, Sequence

from ..exceptions import EncodingError

_SURROGATE_LOW = 0xD800
_SURROGATE_HIGH = 0xDFFF


def to_text(data: bytes | bytearray | memoryview) -> str:
    """Decode UTF-8 ``data`` strictly; invalid sequences raise :class:`EncodingError`."""

    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"text is not valid UTF-8: {exc.reason} at byte {exc.start + 1}", "utf-8") from exc


def to_bytes(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogatepass")


def utf16_units(text: str) -> List[int]:
    """Return the UTF-16 code units of ``text``; lone surrogates pass through unchanged."""

    units: List[int] = []
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            units.append(0xD800 + (code >> 10))
            units.append(0xDC00 + (code & 0x3FF))
        else:
            units.append(code)
    return units


def utf8_index_map(units: Sequence[int]) -> List[int]:
    """Map every UTF-16 unit to the byte offset where it starts in the UTF-8 encoding.

    Each half of a surrogate pair is credited two bytes so the pair spans the
    four bytes of its UTF-8 sequence.
    """

    offsets: List[int] = []
    byte_index = 0
    for unit in units:
        offsets.append(byte_index)
        if _SURROGATE_LOW <= unit <= _SURROGATE_HIGH:
            byte_index += 2
        elif unit > 0x07FF:
            byte_index += 3
        elif unit > 0x007F:
            byte_index += 2
        else:
            byte_index += 1
    return offsets


def snap_forward(offsets: Sequence[int], index: int) -> int:
    """Return the first entry of ``offsets`` at or after 1-based ``index``."""

    return bisect_left(offsets, index - 1)


def snap_containing(offsets: Sequence[int], index: int) -> int:
    """Return the entry of ``offsets`` whose element contains 1-based ``index``."""

    return bisect_right(offsets, index - 1) - 1


__all__ = [
    "to_text",
    "to_bytes",
    "utf16_units",
    "utf8_index_map",
    "snap_forward",
    "snap_containing",
]
