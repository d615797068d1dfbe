"""UTF-16 aware text buffers and index mapped regular expressions."""
from __future__ import annotations

from .exceptions import (
    ArgumentError,
    ArgumentRangeError,
    EncodingError,
    InvalidArgumentType,
    InvalidReplacementValue,
    InvalidUTF16Sequence,
    PatternCompileError,
    UnitextError,
    UnrecognizedLocale,
)
from .matcher import MatchIterator, Pattern, compile_pattern, escaped_pattern, escaped_template
from .models import CharacterCount, MatchResult, Span
from .options import CompareOption, ExpressionOption, MatchOption, parse_options
from .substitution import SubstitutionEngine, gsub
from .utf16 import (
    LocaleMode,
    UTF16Text,
    codepoint_for_pair,
    is_high_surrogate,
    is_low_surrogate,
    pair_for_codepoint,
)
from .version import __version__

__all__ = [
    "ArgumentError",
    "ArgumentRangeError",
    "EncodingError",
    "InvalidArgumentType",
    "InvalidReplacementValue",
    "InvalidUTF16Sequence",
    "PatternCompileError",
    "UnitextError",
    "UnrecognizedLocale",
    "MatchIterator",
    "Pattern",
    "compile_pattern",
    "escaped_pattern",
    "escaped_template",
    "CharacterCount",
    "MatchResult",
    "Span",
    "CompareOption",
    "ExpressionOption",
    "MatchOption",
    "parse_options",
    "SubstitutionEngine",
    "gsub",
    "LocaleMode",
    "UTF16Text",
    "codepoint_for_pair",
    "is_high_surrogate",
    "is_low_surrogate",
    "pair_for_codepoint",
    "__version__",
]
