"""Locale selection, case mapping and comparison for UTF-16 text.

Case mapping and collation are approximations built on the Unicode
database shipped with Python. Locale tailoring is limited to the Turkic
dotted/dotless ``i`` rules; every other locale maps like the root locale.
"""
from __future__ import annotations

import locale as _locale
import os
import unicodedata
from enum import Enum
from typing import List, Optional, Tuple, Union

import regex
import structlog

from ..exceptions import InvalidArgumentType, UnrecognizedLocale
from ..options import CompareOption

logger = structlog.get_logger(__name__)


class LocaleMode(str, Enum):
    CANONICAL = "canonical"
    SYSTEM = "system"
    CURRENT = "current"


LocaleSpec = Union[LocaleMode, str, bool, None]

_LOCALE_ID = regex.compile(
    r"^(?P<language>[A-Za-z]{2,3}|root)(?:[_-][A-Za-z0-9]{2,8})*(?:\.[A-Za-z0-9_-]+)?(?:@[A-Za-z0-9=;_-]+)?$"
)
_TURKIC = frozenset({"tr", "az"})
_WORD = regex.compile(r"\S+")
_NUMBER_RUN = regex.compile(r"(\d+)")


def current_locale_identifier() -> Optional[str]:
    """Return the user's locale identifier from the process locale or the environment."""

    identifier = _locale.getlocale(_locale.LC_CTYPE)[0]
    if not identifier:
        for variable in ("LC_ALL", "LC_CTYPE", "LANG"):
            identifier = os.environ.get(variable)
            if identifier:
                break
    if not identifier or identifier in {"C", "POSIX"} or identifier.startswith("C."):
        return None
    return identifier


def resolve_locale(value: LocaleSpec = LocaleMode.CANONICAL) -> Optional[str]:
    """Return the lower-cased language subtag for ``value``, or ``None`` for untailored rules.

    ``True`` selects the current user locale and ``False``/``None`` the system
    locale, so boolean flags from scripting hosts keep working.
    """

    if value is True:
        value = LocaleMode.CURRENT
    elif value is False or value is None:
        value = LocaleMode.SYSTEM
    if isinstance(value, LocaleMode):
        if value is LocaleMode.CURRENT:
            identifier = current_locale_identifier()
            match = _LOCALE_ID.match(identifier) if identifier else None
            if identifier and match is None:
                logger.debug("locale.current_unparsed", identifier=identifier)
            return match.group("language").lower() if match else None
        return None
    if not isinstance(value, str):
        raise InvalidArgumentType(f"locale must be a LocaleMode, string or boolean, got {type(value).__name__}")
    match = _LOCALE_ID.match(value.strip())
    if match is None:
        raise UnrecognizedLocale(f"unrecognized locale specified: {value!r}")
    return match.group("language").lower()


def to_upper(text: str, language: Optional[str] = None) -> str:
    if language in _TURKIC:
        text = text.replace("i", "İ")
    return text.upper()


def to_lower(text: str, language: Optional[str] = None) -> str:
    if language in _TURKIC:
        text = text.replace("İ", "i").replace("I", "ı")
    return text.lower()


def _capitalize_word(word: str, language: Optional[str]) -> str:
    first, rest = word[0], word[1:]
    if language in _TURKIC and first == "i":
        head = "İ"
    else:
        head = first.title()
    return head + to_lower(rest, language)


def to_capitalized(text: str, language: Optional[str] = None) -> str:
    """Titlecase the first character of every whitespace delimited word and lowercase the rest."""

    return _WORD.sub(lambda match: _capitalize_word(match.group(), language), text)


def _fold_width(text: str) -> str:
    folded = []
    for char in text:
        if unicodedata.decomposition(char).startswith(("<wide>", "<narrow>")):
            folded.append(unicodedata.normalize("NFKC", char))
        else:
            folded.append(char)
    return "".join(folded)


def _fold(text: str, options: CompareOption, language: Optional[str]) -> str:
    if options & CompareOption.WIDTH_INSENSITIVE:
        text = _fold_width(text)
    if options & CompareOption.CASE_INSENSITIVE:
        text = to_lower(text, language).casefold()
    if options & CompareOption.DIACRITIC_INSENSITIVE:
        text = "".join(char for char in unicodedata.normalize("NFD", text) if unicodedata.category(char) != "Mn")
    elif not options & CompareOption.LITERAL:
        text = unicodedata.normalize("NFD", text)
    return text


def _unit_key(text: str) -> bytes:
    # big-endian UTF-16 bytes sort in code unit order
    return text.encode("utf-16-be", errors="surrogatepass")


_DIGIT_LEAD = _unit_key("0")


def _numeric_key(text: str) -> List[Tuple[bytes, int, object]]:
    key: List[Tuple[bytes, int, object]] = []
    for index, chunk in enumerate(_NUMBER_RUN.split(text)):
        if not chunk:
            continue
        if index % 2:
            key.append((_DIGIT_LEAD, 0, int(chunk)))
        else:
            encoded = _unit_key(chunk)
            key.append((encoded[:2], 1, encoded))
    return key


def _sign(lhs: object, rhs: object) -> int:
    if lhs < rhs:  # type: ignore[operator]
        return -1
    if lhs > rhs:  # type: ignore[operator]
        return 1
    return 0


def compare_text(
    lhs: str,
    rhs: str,
    options: CompareOption = CompareOption(0),
    language: Optional[str] = None,
) -> int:
    """Compare two strings and return ``-1``, ``0`` or ``1``."""

    left = _fold(lhs, options, language)
    right = _fold(rhs, options, language)
    if options & CompareOption.NUMERIC:
        result = _sign(_numeric_key(left), _numeric_key(right))
    else:
        result = _sign(_unit_key(left), _unit_key(right))
    if result == 0 and options & CompareOption.FORCED_ORDERING:
        result = _sign(_unit_key(lhs), _unit_key(rhs))
    return result


__all__ = [
    "LocaleMode",
    "LocaleSpec",
    "current_locale_identifier",
    "resolve_locale",
    "to_upper",
    "to_lower",
    "to_capitalized",
    "compare_text",
]
