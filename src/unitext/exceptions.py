"""Central exception hierarchy."""
from __future__ import annotations

from typing import Optional


class UnitextError(Exception):
    """Base exception for all failures"""


class ArgumentError(UnitextError, ValueError):
    """Raised when a caller supplied argument is unusable"""


class ArgumentRangeError(ArgumentError, IndexError):
    """Raised when an index falls outside the permitted range after negative index resolution"""


class InvalidArgumentType(ArgumentError, TypeError):
    """Raised when an argument has a type the operation cannot accept"""


class InvalidReplacementValue(InvalidArgumentType):
    """Raised when a lookup table or callback supplies a value that is not text or a number"""


class UnrecognizedLocale(ArgumentError):
    """Raised when an explicit locale identifier cannot be understood"""


class PatternCompileError(UnitextError, ValueError):
    """Raised when a regular expression fails to compile"""

    def __init__(self, pattern: str, diagnostic: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {diagnostic}")
        self.pattern = pattern
        self.diagnostic = diagnostic


class EncodingError(UnitextError, ValueError):
    """Raised when data cannot be converted without loss in the requested encoding"""

    def __init__(self, message: str, encoding: Optional[str] = None) -> None:
        super().__init__(message)
        self.encoding = encoding


class InvalidUTF16Sequence(UnitextError, ValueError):
    """Raised when an isolated surrogate is found where a full codepoint is required"""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid UTF-16 code at index {index}")
        self.index = index


__all__ = [
    "UnitextError",
    "ArgumentError",
    "ArgumentRangeError",
    "InvalidArgumentType",
    "InvalidReplacementValue",
    "UnrecognizedLocale",
    "PatternCompileError",
    "EncodingError",
    "InvalidUTF16Sequence",
]
