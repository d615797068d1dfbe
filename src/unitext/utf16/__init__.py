"""UTF-16 text buffer exports."""
from .buffer import TextLike, UTF16Text
from .localization import LocaleMode, resolve_locale
from .surrogates import codepoint_for_pair, is_high_surrogate, is_low_surrogate, pair_for_codepoint

__all__ = [
    "TextLike",
    "UTF16Text",
    "LocaleMode",
    "resolve_locale",
    "codepoint_for_pair",
    "is_high_surrogate",
    "is_low_surrogate",
    "pair_for_codepoint",
]
