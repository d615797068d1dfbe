"""Replacement directives for global substitution."""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import ArgumentRangeError, InvalidReplacementValue
from ..utf16.buffer import UTF16Text
from ..utils.text import to_text

TemplatePiece = Union[str, int]
ReplacementSpec = Union[str, bytes, UTF16Text, Mapping[object, object], Callable[..., object]]


@dataclass(slots=True, frozen=True)
class TemplateReplacement:
    """Literal text with ``$n`` and ``${name}`` capture references."""

    pieces: Tuple[TemplatePiece, ...]

    def expand(self, groups: Sequence[Optional[str]]) -> str:
        parts: List[str] = []
        for piece in self.pieces:
            if isinstance(piece, int):
                parts.append(groups[piece] or "")
            else:
                parts.append(piece)
        return "".join(parts)


@dataclass(slots=True, frozen=True)
class LookupReplacement:
    """Replacement text keyed by the first capture, or the whole match without captures."""

    table: Mapping[str, str]


@dataclass(slots=True, frozen=True)
class CallbackReplacement:
    """A callable receiving the captures and returning text, a number or ``None``."""

    callback: Callable[..., object]


Directive = Union[TemplateReplacement, LookupReplacement, CallbackReplacement]


def text_of(value: object) -> Optional[str]:
    """Return ``value`` as ``str`` when it is text-like, otherwise ``None``."""

    if isinstance(value, UTF16Text):
        return value.text
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return to_text(value)
    return None


def coerce_replacement(value: object) -> Optional[str]:
    """Convert a table or callback result into replacement text.

    ``None`` means "leave the match alone". Booleans and any other non text,
    non numeric value raise :class:`InvalidReplacementValue`.
    """

    if value is None:
        return None
    text = text_of(value)
    if text is not None:
        return text
    if isinstance(value, Real) and not isinstance(value, bool):
        return str(value)
    raise InvalidReplacementValue(f"invalid replacement value (a {type(value).__name__})")


def parse_template(template: str, capture_count: int, group_names: Mapping[str, int] | None = None) -> TemplateReplacement:
    """Split ``template`` into literal text and capture references.

    ``$`` followed by digits takes the longest run whose value does not
    exceed ``capture_count``; ``\\`` makes the next character literal and a
    ``$`` that starts no reference is kept as is.
    """

    names = group_names or {}
    pieces: List[TemplatePiece] = []
    literal: List[str] = []
    index = 0
    length = len(template)
    while index < length:
        char = template[index]
        if char == "\\":
            if index + 1 < length:
                literal.append(template[index + 1])
                index += 2
            else:
                literal.append(char)
                index += 1
            continue
        if char == "$" and index + 1 < length:
            following = template[index + 1]
            if following.isdigit() and following.isascii():
                group = int(following)
                if group > capture_count:
                    raise ArgumentRangeError(f"template refers to capture ${group} but the pattern has {capture_count}")
                index += 2
                while index < length and template[index].isascii() and template[index].isdigit():
                    candidate = group * 10 + int(template[index])
                    if candidate > capture_count:
                        break
                    group = candidate
                    index += 1
                _flush(literal, pieces)
                pieces.append(group)
                continue
            if following == "{":
                close = template.find("}", index + 2)
                if close != -1:
                    name = template[index + 2 : close]
                    if name not in names:
                        raise ArgumentRangeError(f"template refers to unknown capture group {name!r}")
                    _flush(literal, pieces)
                    pieces.append(names[name])
                    index = close + 1
                    continue
        literal.append(char)
        index += 1
    _flush(literal, pieces)
    return TemplateReplacement(pieces=tuple(pieces))


def _flush(literal: List[str], pieces: List[TemplatePiece]) -> None:
    if literal:
        pieces.append("".join(literal))
        literal.clear()


def _normalise_table(table: Mapping[object, object]) -> Dict[str, str]:
    normalised: Dict[str, str] = {}
    for key, value in table.items():
        key_text = text_of(key)
        if key_text is None:
            raise InvalidReplacementValue(
                f"expected str, bytes or UTF16Text for replacement key in table, got {type(key).__name__}"
            )
        if value is None:
            raise InvalidReplacementValue("expected text or number for replacement value in table, got None")
        normalised[key_text] = coerce_replacement(value)  # type: ignore[assignment]
    return normalised


def resolve_directive(
    replacement: ReplacementSpec,
    capture_count: int,
    group_names: Mapping[str, int] | None = None,
) -> Directive:
    """Classify ``replacement`` once, validating templates and tables up front."""

    if isinstance(replacement, (TemplateReplacement, LookupReplacement, CallbackReplacement)):
        return replacement
    template = text_of(replacement)
    if template is not None:
        return parse_template(template, capture_count, group_names)
    if isinstance(replacement, Mapping):
        return LookupReplacement(table=_normalise_table(replacement))
    if callable(replacement):
        return CallbackReplacement(callback=replacement)
    raise InvalidReplacementValue(
        f"replacement must be text, a mapping or a callable, got {type(replacement).__name__}"
    )


def apply_directive(
    directive: Directive,
    groups: Sequence[Optional[str]],
    wrap: Callable[[str], object],
) -> Optional[str]:
    """Return the replacement for one match, or ``None`` to leave it unreplaced.

    ``groups`` holds the whole match followed by every declared capture, with
    ``None`` for captures that did not participate.
    """

    if isinstance(directive, TemplateReplacement):
        return directive.expand(groups)
    if isinstance(directive, LookupReplacement):
        key = groups[1] if len(groups) > 1 else groups[0]
        return directive.table.get(key or "")
    if isinstance(directive, CallbackReplacement):
        if len(groups) > 1:
            arguments = [wrap(group or "") for group in groups[1:]]
        else:
            arguments = [wrap(groups[0] or "")]
        return coerce_replacement(directive.callback(*arguments))
    raise InvalidReplacementValue(f"unsupported replacement directive: {type(directive).__name__}")


__all__ = [
    "TemplateReplacement",
    "LookupReplacement",
    "CallbackReplacement",
    "Directive",
    "ReplacementSpec",
    "coerce_replacement",
    "parse_template",
    "resolve_directive",
    "apply_directive",
]
