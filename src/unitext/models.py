"""Shared result models used across unitext."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .utf16.buffer import UTF16Text

    TextValue = Union[bytes, UTF16Text]


@dataclass(slots=True, frozen=True)
class Span:
    """1-based inclusive range in the caller's index space.

    An empty match at position ``p`` is reported as ``Span(p, p - 1)``.
    """

    start: int
    end: int

    def length(self) -> int:
        return self.end - self.start + 1

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


@dataclass(slots=True)
class MatchResult:
    spans: Tuple[Optional[Span], ...]
    values: Tuple[Optional["TextValue"], ...]

    @property
    def span(self) -> Span:
        span = self.spans[0]
        assert span is not None
        return span

    @property
    def value(self) -> "TextValue":
        value = self.values[0]
        assert value is not None
        return value

    @property
    def captures(self) -> Tuple[Optional[Span], ...]:
        return self.spans[1:]

    def group(self, index: int = 0) -> Optional["TextValue"]:
        return self.values[index]

    def __len__(self) -> int:
        return len(self.spans)


@dataclass(slots=True, frozen=True)
class CharacterCount:
    """Result of counting characters: either ``count`` or the first ``invalid_index``."""

    count: Optional[int] = None
    invalid_index: Optional[int] = None

    @property
    def valid(self) -> bool:
        return self.count is not None


__all__ = ["Span", "MatchResult", "CharacterCount"]
