"""Compiled patterns with byte/unit index translation."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

import regex
import structlog

from ..exceptions import ArgumentRangeError, InvalidArgumentType, PatternCompileError
from ..models import MatchResult
from ..options import ExpressionOption, MatchOption, OptionSpec, parse_options
from ..utf16.buffer import UTF16Text
from ..utils.text import to_bytes, to_text
from ..utils.validation import check_range, ensure_integer, resolve_index
from .spans import Subject, TextInput, make_subject
from .syntax import rewrite_tokens

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..substitution.strategies import ReplacementSpec

logger = structlog.get_logger(__name__)

_ENGINE_FLAGS = {
    ExpressionOption.CASE_INSENSITIVE: regex.IGNORECASE,
    ExpressionOption.ALLOW_COMMENTS_AND_WHITESPACE: regex.VERBOSE,
    ExpressionOption.DOT_MATCHES_LINE_SEPARATORS: regex.DOTALL,
    ExpressionOption.ANCHORS_MATCH_LINES: regex.MULTILINE,
    ExpressionOption.USE_UNICODE_WORD_BOUNDARIES: regex.WORD,
}
_LINE_TOKENS = (".", "^", "$")
_NEVER = "(?!)"

Source = Union[str, bytes, UTF16Text]


def engine_flags(options: ExpressionOption) -> int:
    flags = regex.UNICODE
    for option, flag in _ENGINE_FLAGS.items():
        if options & option:
            flags |= flag
    return flags


def line_tokens(options: ExpressionOption) -> Dict[str, str]:
    """Spelling of ``.``, ``^`` and ``$`` for the requested line separators.

    Without ``USE_UNIX_LINE_SEPARATORS`` every Unicode line separator
    (``\\r``, ``\\u0085``, ``\\u2028``, ``\\u2029`` and the rest) ends a line.
    The engine ties that behaviour to its ``WORD`` flag, so the three tokens
    get the flag scoped onto them (or off them) on their own.
    """

    unicode_lines = not options & ExpressionOption.USE_UNIX_LINE_SEPARATORS
    if unicode_lines == bool(options & ExpressionOption.USE_UNICODE_WORD_BOUNDARIES):
        return {}
    scope = "w" if unicode_lines else "-w"
    return {token: f"(?{scope}:{token})" for token in _LINE_TOKENS}


def _source_text(source: Source) -> str:
    if isinstance(source, UTF16Text):
        return source.text
    if isinstance(source, (bytes, bytearray)):
        return to_text(source)
    if isinstance(source, str):
        return source
    raise InvalidArgumentType(f"pattern must be str, bytes or UTF16Text, got {type(source).__name__}")


class Pattern:
    """An immutable compiled regular expression.

    Matching accepts UTF-8 ``bytes`` (addressed by byte) or :class:`UTF16Text`
    (addressed by UTF-16 code unit). Indices are 1-based and inclusive, and
    negative values count back from the end.
    """

    __slots__ = ("_source", "_options", "_compiled", "_timeout", "_expression", "_tokens")

    def __init__(self, source: Source, options: OptionSpec = None, *, timeout: Optional[float] = None) -> None:
        self._source = _source_text(source)
        self._options = parse_options(ExpressionOption, options)
        self._timeout = timeout
        expression = self._source
        if self._options & ExpressionOption.IGNORE_METACHARACTERS:
            expression = regex.escape(expression, special_only=True)
        flags = engine_flags(self._options)
        try:
            compiled = regex.compile(expression, flags)
            self._tokens = line_tokens(self._options)
            if self._tokens:
                verbose = bool(compiled.flags & regex.VERBOSE)
                expression = rewrite_tokens(expression, self._tokens, verbose=verbose)
                compiled = regex.compile(expression, flags)
        except regex.error as exc:
            logger.warning("pattern.compile_failed", pattern=self._source, error=str(exc))
            raise PatternCompileError(self._source, str(exc)) from exc
        self._expression = expression
        self._compiled = compiled
        logger.debug(
            "pattern.compiled",
            pattern=self._source,
            options=int(self._options),
            captures=self._compiled.groups,
        )

    @property
    def pattern(self) -> str:
        return self._source

    @property
    def options(self) -> ExpressionOption:
        return self._options

    @property
    def capture_count(self) -> int:
        return self._compiled.groups

    @property
    def group_names(self) -> Mapping[str, int]:
        return dict(self._compiled.groupindex)

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def compiled(self) -> regex.Pattern[str]:
        return self._compiled

    def search(
        self,
        text: str,
        pos: int = 0,
        endpos: Optional[int] = None,
        *,
        anchored: bool = False,
        engine: Optional[regex.Pattern[str]] = None,
    ) -> Optional[regex.Match[str]]:
        engine = engine or self._compiled
        method = engine.match if anchored else engine.search
        if endpos is None:
            endpos = len(text)
        return method(text, pos, endpos, timeout=self._timeout)

    def _recompile(self, expression: str) -> regex.Pattern[str]:
        return regex.compile(expression, engine_flags(self._options))

    def _line_token(self, token: str) -> str:
        return self._tokens.get(token, token)

    def _verbose(self) -> bool:
        return bool(self._compiled.flags & regex.VERBOSE)

    def _transparent_engine(self, text: str, hi: int, anchoring: bool) -> regex.Pattern[str]:
        """Engine searching the whole of ``text`` whose matches end at or before ``hi``.

        Lookaround sees past both ends of the range. With anchoring bounds
        ``^`` also matches where the search starts and ``$`` at ``hi``.
        """

        tail = len(text) - hi
        expression = self._expression
        if anchoring:
            replacements = {"^": r"(?:^|\G)"}
            if tail:
                replacements["$"] = rf"(?:$|(?=[\s\S]{{{tail}}}\Z))"
            expression = rewrite_tokens(expression, replacements, verbose=self._verbose())
        if tail:
            closing = "\n)" if self._verbose() else ")"
            expression = rf"(?:{expression}{closing}(?=[\s\S]{{{tail}}})"
        if expression == self._expression:
            return self._compiled
        return self._recompile(expression)

    def _unanchored_engine(self, text: str, lo: int, hi: int) -> regex.Pattern[str]:
        """Engine for ``text[lo:hi]`` where ``^`` and ``$`` only match at real line boundaries."""

        flags = self._compiled.flags & (regex.MULTILINE | regex.WORD)
        multiline = bool(flags & regex.MULTILINE)
        replacements: Dict[str, str] = {}
        caret, dollar = self._line_token("^"), self._line_token("$")
        if regex.compile(caret, flags).match(text, lo) is None:
            replacements["^"] = r"(?:(?<=[\s\S])^)" if multiline else _NEVER
        if regex.compile(dollar, flags).match(text, hi) is None:
            replacements["$"] = r"(?:$(?=[\s\S]))" if multiline else _NEVER
        if not replacements:
            return self._compiled
        return self._recompile(rewrite_tokens(self._expression, replacements, verbose=self._verbose()))

    def first_match(
        self,
        text: TextInput,
        i: int = 1,
        j: int = -1,
        options: OptionSpec = None,
    ) -> Optional[MatchResult]:
        """Return the first match inside ``[i, j]`` or ``None``.

        ``i`` and ``j`` must fall inside ``[1, len]`` after negative index
        resolution. For byte input a start index inside a multi-byte character
        snaps forward to the next whole character while an end index includes
        the whole character it lands in.

        By default the range behaves as the whole text: lookaround cannot see
        past it, and ``^``/``$`` match at its ends. ``WITH_TRANSPARENT_BOUNDS``
        lets lookaround see the surrounding text and ``WITHOUT_ANCHORING_BOUNDS``
        keeps ``^``/``$`` to the real start and end of lines.
        """

        subject = make_subject(text)
        i, j = check_range(i, j, subject.length)
        flags = parse_options(MatchOption, options)
        lo = subject.start_position(i)
        hi = max(lo, subject.end_position(j))
        anchored = bool(flags & MatchOption.ANCHORED)
        anchoring = not flags & MatchOption.WITHOUT_ANCHORING_BOUNDS
        if flags & MatchOption.WITH_TRANSPARENT_BOUNDS:
            engine = self._transparent_engine(subject.text, hi, anchoring)
            match = self.search(subject.text, lo, anchored=anchored, engine=engine)
            base = 0
        else:
            engine = self._compiled if anchoring else self._unanchored_engine(subject.text, lo, hi)
            match = self.search(subject.text[lo:hi], anchored=anchored, engine=engine)
            base = lo
        if match is None:
            return None
        return subject.match_result(match, base)

    def iter_matches(self, text: TextInput, start: int = 1) -> "MatchIterator":
        subject = make_subject(text)
        start = resolve_index(ensure_integer(start, name="start"), subject.length)
        if start < 1 or start > subject.length + 1:
            raise ArgumentRangeError(f"starting index out of range: {start}")
        return MatchIterator(self, subject, subject.start_position(start))

    def find(self, text: TextInput, init: int = 1) -> Optional[Tuple[Any, ...]]:
        """Return ``(start, end, *captures)`` for the first match at or after ``init``."""

        for result in self.iter_matches(text, init):
            return (result.span.start, result.span.end, *result.values[1:])
        return None

    def match(self, text: TextInput, init: int = 1) -> Optional[Tuple[Any, ...]]:
        """Return the captures of the first match, or the whole match when none are declared."""

        for result in self.iter_matches(text, init):
            return _captures_or_whole(result)
        return None

    def gmatch(self, text: TextInput, init: int = 1) -> Iterator[Tuple[Any, ...]]:
        for result in self.iter_matches(text, init):
            yield _captures_or_whole(result)

    def gsub(self, text: TextInput, replacement: "ReplacementSpec", max_count: Optional[int] = None) -> Tuple[Any, int]:
        from ..substitution.engines import SubstitutionEngine

        return SubstitutionEngine(self).substitute(text, replacement, max_count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self._source == other._source and self._options == other._options

    def __hash__(self) -> int:
        return hash((self._source, int(self._options)))

    def __repr__(self) -> str:
        return f"Pattern({self._source!r}, options={int(self._options)})"


class MatchIterator:
    """Lazy left-to-right, non-overlapping matches; iterating again restarts the scan."""

    __slots__ = ("_pattern", "_subject", "_start")

    def __init__(self, pattern: Pattern, subject: Subject, start: int) -> None:
        self._pattern = pattern
        self._subject = subject
        self._start = start

    @property
    def subject(self) -> Subject:
        return self._subject

    def raw(self) -> Iterator[regex.Match[str]]:
        text = self._subject.text
        position = self._start
        while position <= len(text):
            match = self._pattern.search(text, position)
            if match is None:
                return
            yield match
            # empty matches advance one codepoint so the scan always progresses
            position = match.end() if match.end() > match.start() else match.start() + 1

    def __iter__(self) -> Iterator[MatchResult]:
        for match in self.raw():
            yield self._subject.match_result(match)


def _captures_or_whole(result: MatchResult) -> Tuple[Any, ...]:
    if len(result) > 1:
        return tuple(result.values[1:])
    return (result.value,)


def compile_pattern(source: Source, options: OptionSpec = None, *, timeout: Optional[float] = None) -> Pattern:
    return Pattern(source, options, timeout=timeout)


def _map_text(value: Source, transform: Callable[[str], str]) -> Source:
    if isinstance(value, UTF16Text):
        return UTF16Text(transform(value.text))
    if isinstance(value, (bytes, bytearray)):
        return to_bytes(transform(to_text(value)))
    if isinstance(value, str):
        return transform(value)
    raise InvalidArgumentType(f"expected str, bytes or UTF16Text, got {type(value).__name__}")


def escaped_pattern(value: Source) -> Source:
    """Escape every metacharacter so ``value`` matches literally."""
    return _map_text(value, lambda text: regex.escape(text, special_only=True))


def escaped_template(value: Source) -> Source:
    """Escape ``$`` and ``\\`` so ``value`` is substituted literally."""
    return _map_text(value, lambda text: text.replace("\\", "\\\\").replace("$", "\\$"))


__all__ = [
    "Pattern",
    "MatchIterator",
    "compile_pattern",
    "engine_flags",
    "escaped_pattern",
    "escaped_template",
]
