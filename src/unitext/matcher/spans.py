"""Translate between the caller's index space and regex engine positions."""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

import regex

from ..exceptions import InvalidArgumentType
from ..models import MatchResult, Span
from ..utf16.buffer import UTF16Text
from ..utils.text import snap_containing, snap_forward, to_bytes, to_text, utf16_units, utf8_index_map

TextInput = Union[bytes, bytearray, memoryview, UTF16Text]


class Subject:
    """Caller supplied text paired with the index space it is addressed in.

    ``offsets`` holds, for each codepoint position of :attr:`text`, the
    0-based caller offset where that codepoint begins, followed by the caller
    length.
    """

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        self.text = text

    @property
    def offsets(self) -> Sequence[int]:  # pragma: no cover - overridden
        raise NotImplementedError

    @property
    def length(self) -> int:
        return self.offsets[-1]

    def start_position(self, index: int) -> int:
        """Position of the first whole codepoint at or after 1-based ``index``."""
        return snap_forward(self.offsets, index)

    def end_position(self, index: int) -> int:
        """Exclusive position just past the codepoint containing 1-based ``index``."""
        return snap_containing(self.offsets, index) + 1

    def span(self, start: int, end: int) -> Span:
        offsets = self.offsets
        return Span(start=offsets[start] + 1, end=offsets[end])

    def value(self, piece: str) -> Union[bytes, UTF16Text]:  # pragma: no cover - overridden
        raise NotImplementedError

    def match_result(self, match: regex.Match[str], base: int = 0) -> MatchResult:
        spans: List[Optional[Span]] = []
        values: List[Optional[Union[bytes, UTF16Text]]] = []
        for group in range(match.re.groups + 1):
            start, end = match.span(group)
            if start < 0:
                spans.append(None)
                values.append(None)
                continue
            spans.append(self.span(start + base, end + base))
            values.append(self.value(match.group(group)))
        return MatchResult(spans=tuple(spans), values=tuple(values))


class UnitSubject(Subject):
    """A :class:`UTF16Text` addressed by UTF-16 code unit."""

    __slots__ = ("buffer",)

    def __init__(self, buffer: UTF16Text) -> None:
        super().__init__(buffer.text)
        self.buffer = buffer

    @property
    def offsets(self) -> Sequence[int]:
        return self.buffer.codepoint_starts

    def value(self, piece: str) -> UTF16Text:
        return UTF16Text(piece)


class ByteSubject(Subject):
    """UTF-8 bytes addressed by byte; the index map is built on first use."""

    __slots__ = ("data", "_offsets")

    def __init__(self, data: bytes) -> None:
        super().__init__(to_text(data))
        self.data = data
        self._offsets: Optional[List[int]] = None

    @property
    def offsets(self) -> Sequence[int]:
        if self._offsets is None:
            unit_map = utf8_index_map(utf16_units(self.text))
            offsets: List[int] = []
            unit = 0
            for char in self.text:
                offsets.append(unit_map[unit])
                unit += 2 if ord(char) > 0xFFFF else 1
            offsets.append(len(self.data))
            self._offsets = offsets
        return self._offsets

    @property
    def length(self) -> int:
        return len(self.data)

    def value(self, piece: str) -> bytes:
        return to_bytes(piece)


def make_subject(text: TextInput) -> Subject:
    if isinstance(text, UTF16Text):
        return UnitSubject(text)
    if isinstance(text, (bytes, bytearray, memoryview)):
        return ByteSubject(bytes(text))
    if isinstance(text, str):
        raise InvalidArgumentType("str input is ambiguous; pass UTF-8 bytes or a UTF16Text")
    raise InvalidArgumentType(f"expected bytes or UTF16Text, got {type(text).__name__}")


__all__ = ["Subject", "UnitSubject", "ByteSubject", "TextInput", "make_subject"]
