"""Immutable UTF-16 text buffer with 1-based, negative-aware indexing."""
from __future__ import annotations

import codecs
import unicodedata
from bisect import bisect_left, bisect_right
from typing import Iterable, List, Optional, Tuple, Union

import structlog

from ..exceptions import ArgumentError, ArgumentRangeError, EncodingError, InvalidArgumentType, InvalidUTF16Sequence
from ..models import CharacterCount
from ..options import CompareOption, OptionSpec, parse_options
from ..utils.text import utf16_units
from ..utils.validation import check_range, clamp_range, ensure_integer, resolve_lenient
from .clusters import cluster_boundaries, cluster_at, composed_range, is_boundary, split_clusters
from .localization import LocaleMode, LocaleSpec, compare_text, resolve_locale, to_capitalized, to_lower, to_upper
from .surrogates import MAX_CODEPOINT, is_high_surrogate, is_low_surrogate, is_surrogate

logger = structlog.get_logger(__name__)

TextLike = Union["UTF16Text", str]


def _canonical(text: str) -> str:
    # joins adjacent surrogate halves into one codepoint, keeps lone halves
    return text.encode("utf-16-le", errors="surrogatepass").decode("utf-16-le", errors="surrogatepass")


class UTF16Text:
    """A sequence of UTF-16 code units.

    The content is held as a Python string whose valid surrogate pairs are
    joined into single codepoints while isolated surrogates are kept as is.
    Every operation returns a new buffer.
    """

    __slots__ = ("_text", "_units", "_starts", "_boundaries", "_hash")

    def __init__(self, text: TextLike = "") -> None:
        if isinstance(text, UTF16Text):
            text = text._text
        elif not isinstance(text, str):
            raise InvalidArgumentType(f"expected str or UTF16Text, got {type(text).__name__}")
        self._text = _canonical(text)
        self._units: Tuple[int, ...] = tuple(utf16_units(self._text))
        starts: List[int] = []
        offset = 0
        for char in self._text:
            starts.append(offset)
            offset += 2 if ord(char) > 0xFFFF else 1
        starts.append(offset)
        self._starts: Tuple[int, ...] = tuple(starts)
        self._boundaries: Optional[List[int]] = None
        self._hash: Optional[int] = None

    # -- constructors -------------------------------------------------

    @classmethod
    def from_units(cls, units: Iterable[int]) -> "UTF16Text":
        chars = []
        for unit in units:
            unit = ensure_integer(unit, name="unit")
            if unit < 0 or unit > 0xFFFF:
                raise ArgumentRangeError(f"UTF-16 code unit out of range: {unit}")
            chars.append(chr(unit))
        return cls("".join(chars))

    @classmethod
    def from_codepoints(cls, *codepoints: int) -> "UTF16Text":
        chars = []
        for position, codepoint in enumerate(codepoints, start=1):
            codepoint = ensure_integer(codepoint, name=f"codepoint #{position}")
            if codepoint < 0 or codepoint > MAX_CODEPOINT:
                raise ArgumentRangeError(f"codepoint #{position} out of range: {codepoint:#x}")
            chars.append(chr(codepoint))
        return cls("".join(chars))

    @classmethod
    def from_bytes(cls, data: bytes, encoding: str = "utf-8", lossy: bool = False) -> "UTF16Text":
        """Decode ``data`` from ``encoding``.

        Without ``lossy`` the decoded text must re-encode to text equal to
        itself; otherwise :class:`EncodingError` is raised and no buffer is
        produced. With ``lossy`` undecodable input is replaced.
        """

        codec = _lookup_codec(encoding)
        try:
            text = bytes(data).decode(codec, errors="replace" if lossy else "strict")
        except UnicodeDecodeError as exc:
            logger.debug("text.decode_failed", encoding=codec, reason=exc.reason, position=exc.start)
            raise EncodingError(f"data is not valid {encoding}: {exc.reason}", encoding) from exc
        if not lossy:
            try:
                round_trip = text.encode(codec).decode(codec)
            except UnicodeError as exc:
                raise EncodingError(f"data does not round trip through {encoding}", encoding) from exc
            if round_trip != text:
                raise EncodingError(f"data does not round trip through {encoding}", encoding)
        return cls(text)

    def encode(self, encoding: str = "utf-8", lossy: bool = False) -> bytes:
        codec = _lookup_codec(encoding)
        if lossy:
            return self._text.encode(codec, errors="replace")
        try:
            return self._text.encode(codec)
        except UnicodeEncodeError as exc:
            index = self._starts[exc.start] + 1
            logger.debug("text.encode_failed", encoding=codec, index=index)
            raise EncodingError(f"text cannot be represented in {encoding} (index {index})", encoding) from exc

    def copy(self) -> "UTF16Text":
        return UTF16Text(self._text)

    # -- accessors ----------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def units(self) -> Tuple[int, ...]:
        return self._units

    @property
    def codepoint_starts(self) -> Tuple[int, ...]:
        """Unit offset of every codepoint, followed by the unit length."""
        return self._starts

    @property
    def boundaries(self) -> List[int]:
        if self._boundaries is None:
            self._boundaries = cluster_boundaries(self._text, self._starts)
        return self._boundaries

    def position_of_unit(self, unit: int) -> int:
        """Return the codepoint position containing the 0-based ``unit`` offset."""
        return bisect_right(self._starts, unit) - 1

    def is_codepoint_start(self, unit: int) -> bool:
        index = bisect_left(self._starts, unit)
        return index < len(self._starts) and self._starts[index] == unit

    def in_middle_of_character(self, unit: int, composed: bool = False) -> bool:
        if unit == len(self._units):
            return False
        if composed:
            return not is_boundary(self.boundaries, unit)
        return not self.is_codepoint_start(unit)

    # -- unit oriented operations ---------------------------------------

    def unit_character(self, i: int = 1, j: Optional[int] = None) -> List[int]:
        """Return the raw code units in ``[i, j]``; ``j`` defaults to ``i``."""

        i, j = check_range(i, i if j is None else j, len(self._units))
        return list(self._units[i - 1 : j])

    def sub(self, i: int = 1, j: int = -1) -> "UTF16Text":
        """Slice by unit index with ``string.sub`` clamping; may split a surrogate pair.

        ``i`` below the start clamps to 1 and ``j`` past the end clamps to the
        length, but a start past the end raises :class:`ArgumentRangeError`.
        An empty buffer still slices to empty from index 1.
        """

        length = len(self._units)
        i, j = clamp_range(i, j, length)
        if i > max(length, 1):
            raise ArgumentRangeError(f"index out of range: {i} (length {length})")
        if j < i:
            return UTF16Text()
        return UTF16Text.from_units(self._units[i - 1 : j])

    def composed_character_range(self, i: int = 1, j: Optional[int] = None) -> Tuple[int, int]:
        """Widen ``[i, j]`` so it neither starts nor ends inside a composed character sequence."""

        i, j = check_range(i, i if j is None else j, len(self._units))
        first, last = min(i, j), max(i, j)
        start, end = composed_range(self.boundaries, first - 1, last - 1)
        return start + 1, end

    # -- character oriented operations ----------------------------------

    def codepoint(self, i: int = 1, j: Optional[int] = None) -> List[int]:
        """Decode every codepoint starting in ``[i, j]``; ``j`` defaults to ``i``.

        A surrogate pair whose high half sits at ``j`` is decoded whole. Any
        isolated surrogate raises :class:`InvalidUTF16Sequence`.
        """

        i, j = check_range(i, i if j is None else j, len(self._units))
        index = i - 1
        if not self.is_codepoint_start(index):
            raise InvalidUTF16Sequence(i)
        codepoints: List[int] = []
        position = self.position_of_unit(index)
        while index <= j - 1:
            value = ord(self._text[position])
            if is_surrogate(value):
                raise InvalidUTF16Sequence(index + 1)
            codepoints.append(value)
            position += 1
            index = self._starts[position]
        return codepoints

    def character_count(self, composed: bool = False, i: int = 1, j: int = -1) -> CharacterCount:
        """Count characters in ``[i, j]`` following ``utf8.len`` conventions.

        Surrogate pairs count once; with ``composed`` each composed character
        sequence counts once. The first isolated surrogate, or a sequence that
        crosses the range boundary, yields an invalid result carrying its index.
        """

        length = len(self._units)
        i = resolve_lenient(ensure_integer(i, name="i"), length)
        j = resolve_lenient(ensure_integer(j, name="j"), length)
        if not 1 <= i <= length + 1:
            raise ArgumentRangeError(f"initial position out of string: {i}")
        if j - 1 >= length:
            raise ArgumentRangeError(f"final position out of string: {j}")
        index, last = i - 1, j - 1
        count = 0
        while index <= last:
            unit = self._units[index]
            if not self.is_codepoint_start(index) or is_low_surrogate(unit):
                return CharacterCount(invalid_index=index + 1)
            if is_high_surrogate(unit) and ord(self._text[self.position_of_unit(index)]) <= 0xFFFF:
                return CharacterCount(invalid_index=index + 1)
            if composed:
                start, end = cluster_at(self.boundaries, index)
                if start != index:
                    return CharacterCount(invalid_index=index + 1)
                if end - 1 > last:
                    return CharacterCount(invalid_index=last + 1)
                index = end
            else:
                width = self._starts[self.position_of_unit(index) + 1] - index
                if index + width - 1 > last:
                    return CharacterCount(invalid_index=index + 1)
                index += width
            count += 1
        return CharacterCount(count=count)

    def offset(self, n: int, i: Optional[int] = None, *, composed: bool = False) -> Optional[int]:
        """Return the unit index where the ``n``-th character counted from ``i`` begins.

        Mirrors ``utf8.offset``: ``i`` defaults to 1 for non-negative ``n`` and
        to ``len + 1`` otherwise, ``n == 0`` snaps ``i`` back to the start of its
        own character, and ``None`` means no such character exists.
        """

        n = ensure_integer(n, name="n")
        length = len(self._units)
        if i is None:
            i = 1 if n >= 0 else length + 1
        i = resolve_lenient(ensure_integer(i, name="i"), length)
        if not 1 <= i <= length + 1:
            raise ArgumentRangeError(f"position out of range: {i}")
        index = i - 1
        if n == 0:
            while index > 0 and self.in_middle_of_character(index, composed):
                index -= 1
            return index + 1
        if self.in_middle_of_character(index, composed):
            raise ArgumentError(f"initial position {i} is in the middle of a surrogate pair or composed character sequence")
        if n < 0:
            while n < 0 and index > 0:
                index -= 1
                while index > 0 and self.in_middle_of_character(index, composed):
                    index -= 1
                n += 1
        else:
            n -= 1
            while n > 0 and index < length:
                index += 1
                while self.in_middle_of_character(index, composed):
                    index += 1
                n -= 1
        return index + 1 if n == 0 else None

    def reverse(self) -> "UTF16Text":
        """Reverse by composed character sequence so pairs and combining marks stay intact."""
        return UTF16Text("".join(reversed(split_clusters(self._text))))

    # -- locale aware operations ----------------------------------------

    def upper(self, locale: LocaleSpec = LocaleMode.CANONICAL) -> "UTF16Text":
        return UTF16Text(to_upper(self._text, resolve_locale(locale)))

    def lower(self, locale: LocaleSpec = LocaleMode.CANONICAL) -> "UTF16Text":
        return UTF16Text(to_lower(self._text, resolve_locale(locale)))

    def capitalize(self, locale: LocaleSpec = LocaleMode.CANONICAL) -> "UTF16Text":
        return UTF16Text(to_capitalized(self._text, resolve_locale(locale)))

    def compare(self, other: TextLike, options: OptionSpec = None, locale: LocaleSpec = LocaleMode.CANONICAL) -> int:
        flags = parse_options(CompareOption, options)
        return compare_text(self._text, _coerce_text(other), flags, resolve_locale(locale))

    def unicode_decomposition(self, compatibility: bool = False) -> "UTF16Text":
        return UTF16Text(unicodedata.normalize("NFKD" if compatibility else "NFD", self._text))

    def unicode_composition(self, compatibility: bool = False) -> "UTF16Text":
        return UTF16Text(unicodedata.normalize("NFKC" if compatibility else "NFC", self._text))

    # -- protocol support -----------------------------------------------

    def __len__(self) -> int:
        return len(self._units)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"UTF16Text({self._text!r})"

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._text)
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (UTF16Text, str)):
            return self._text == _coerce_text(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (UTF16Text, str)):
            return self.compare(other, CompareOption.LITERAL) < 0
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, (UTF16Text, str)):
            return self.compare(other, CompareOption.LITERAL) <= 0
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, (UTF16Text, str)):
            return self.compare(other, CompareOption.LITERAL) > 0
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, (UTF16Text, str)):
            return self.compare(other, CompareOption.LITERAL) >= 0
        return NotImplemented

    def __add__(self, other: object) -> "UTF16Text":
        piece = _concat_piece(other)
        if piece is None:
            return NotImplemented
        return UTF16Text(self._text + piece)

    def __radd__(self, other: object) -> "UTF16Text":
        piece = _concat_piece(other)
        if piece is None:
            return NotImplemented
        return UTF16Text(piece + self._text)

    def __getstate__(self) -> str:
        return self._text

    def __setstate__(self, state: str) -> None:
        UTF16Text.__init__(self, state)


def _coerce_text(value: TextLike) -> str:
    if isinstance(value, UTF16Text):
        return value.text
    if isinstance(value, str):
        return _canonical(value)
    raise InvalidArgumentType(f"expected str or UTF16Text, got {type(value).__name__}")


def _concat_piece(value: object) -> Optional[str]:
    if isinstance(value, UTF16Text):
        return value.text
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _lookup_codec(encoding: str) -> str:
    try:
        return codecs.lookup(encoding).name
    except LookupError as exc:
        raise EncodingError(f"unknown encoding: {encoding}", encoding) from exc


__all__ = ["UTF16Text", "TextLike"]
