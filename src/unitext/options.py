"""Option flag sets for pattern compilation, matching and comparison.

Bit values follow the Foundation constants so that integers stored in
configuration files or passed from other runtimes keep their meaning.
"""
from __future__ import annotations

from enum import IntFlag
from typing import Iterable, Type, TypeVar, Union

from .exceptions import ArgumentError, InvalidArgumentType


class ExpressionOption(IntFlag):
    CASE_INSENSITIVE = 1
    ALLOW_COMMENTS_AND_WHITESPACE = 2
    IGNORE_METACHARACTERS = 4
    DOT_MATCHES_LINE_SEPARATORS = 8
    ANCHORS_MATCH_LINES = 16
    USE_UNIX_LINE_SEPARATORS = 32
    USE_UNICODE_WORD_BOUNDARIES = 64


class MatchOption(IntFlag):
    REPORT_PROGRESS = 1
    REPORT_COMPLETION = 2
    ANCHORED = 4
    WITH_TRANSPARENT_BOUNDS = 8
    WITHOUT_ANCHORING_BOUNDS = 16


class CompareOption(IntFlag):
    CASE_INSENSITIVE = 1
    LITERAL = 2
    NUMERIC = 64
    DIACRITIC_INSENSITIVE = 128
    WIDTH_INSENSITIVE = 256
    FORCED_ORDERING = 512
    FINDER_FILE_ORDER = CASE_INSENSITIVE | NUMERIC | WIDTH_INSENSITIVE | FORCED_ORDERING


FlagT = TypeVar("FlagT", ExpressionOption, MatchOption, CompareOption)
OptionSpec = Union[int, str, Iterable[Union[int, str]], None]


def _normalise_name(name: str) -> str:
    # accepts "caseInsensitive", "case_insensitive" and "CASE-INSENSITIVE"
    cleaned = name.strip().replace("-", "_")
    if cleaned.isupper() or "_" in cleaned:
        return cleaned.upper()
    pieces = []
    for char in cleaned:
        if char.isupper() and pieces:
            pieces.append("_")
        pieces.append(char.upper())
    return "".join(pieces)


def parse_options(flag_type: Type[FlagT], value: OptionSpec) -> FlagT:
    """Build a flag value from an integer, a name, or an iterable of either."""

    if value is None:
        return flag_type(0)
    if isinstance(value, flag_type):
        return value
    if isinstance(value, bool):
        raise InvalidArgumentType(f"{flag_type.__name__} cannot be built from a boolean")
    if isinstance(value, int):
        known = 0
        for member in flag_type:
            known |= member.value
        if value & ~known:
            raise ArgumentError(f"unknown {flag_type.__name__} bits: {value & ~known:#x}")
        return flag_type(value)
    if isinstance(value, str):
        try:
            return flag_type[_normalise_name(value)]
        except KeyError:
            raise ArgumentError(f"unknown {flag_type.__name__} name: {value}") from None
    combined = flag_type(0)
    for item in value:
        combined |= parse_options(flag_type, item)
    return combined


def option_names(flag_type: Type[FlagT]) -> list[str]:
    return [member.name for member in flag_type if member.name]


__all__ = ["ExpressionOption", "MatchOption", "CompareOption", "parse_options", "option_names"]
