"""Surrogate pair classification and conversion."""
from __future__ import annotations

from typing import Optional, Tuple

HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF
SUPPLEMENTARY_START = 0x10000
MAX_CODEPOINT = 0x10FFFF


def is_high_surrogate(unit: int) -> bool:
    return HIGH_SURROGATE_START <= unit <= HIGH_SURROGATE_END


def is_low_surrogate(unit: int) -> bool:
    return LOW_SURROGATE_START <= unit <= LOW_SURROGATE_END


def is_surrogate(unit: int) -> bool:
    return HIGH_SURROGATE_START <= unit <= LOW_SURROGATE_END


def pair_for_codepoint(codepoint: int) -> Optional[Tuple[int, int]]:
    """Split ``codepoint`` into a ``(high, low)`` pair, or ``None`` outside U+10000..U+10FFFF."""

    if codepoint < SUPPLEMENTARY_START or codepoint > MAX_CODEPOINT:
        return None
    offset = codepoint - SUPPLEMENTARY_START
    return HIGH_SURROGATE_START + (offset >> 10), LOW_SURROGATE_START + (offset & 0x3FF)


def codepoint_for_pair(high: int, low: int) -> Optional[int]:
    """Join a surrogate pair into its codepoint, or ``None`` when the units are not a pair."""

    if not (is_high_surrogate(high) and is_low_surrogate(low)):
        return None
    return SUPPLEMENTARY_START + ((high - HIGH_SURROGATE_START) << 10) + (low - LOW_SURROGATE_START)


__all__ = [
    "is_high_surrogate",
    "is_low_surrogate",
    "is_surrogate",
    "pair_for_codepoint",
    "codepoint_for_pair",
    "MAX_CODEPOINT",
]
