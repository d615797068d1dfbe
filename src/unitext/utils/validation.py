"""Validation helpers for 1-based, negative-from-end indices."""
from __future__ import annotations

from typing import Tuple

from ..exceptions import ArgumentRangeError, InvalidArgumentType


def ensure_integer(value: object, *, name: str) -> int:
    """Return ``value`` as an ``int``, rejecting booleans and non-integral numbers."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentType(f"{name} must be an integer, got {type(value).__name__}")
    return value


def resolve_index(index: int, length: int) -> int:
    """Resolve a possibly negative index against ``length``.

    Parameters
    ----------
    index:
        1-based index; ``-1`` refers to the last element.
    length:
        Number of elements in the indexed sequence.

    Returns
    -------
    int
        The resolved 1-based index. No range check is applied.
    """

    if index < 0:
        return length + 1 + index
    return index


def check_position(index: int, length: int, *, name: str = "index") -> int:
    """Resolve ``index`` and require it to fall inside ``[1, length]``.

    Raises
    ------
    ArgumentRangeError
        If the resolved index is outside the sequence.
    """

    resolved = resolve_index(ensure_integer(index, name=name), length)
    if resolved < 1 or resolved > length:
        raise ArgumentRangeError(f"{name} out of range: {index} (length {length})")
    return resolved


def check_range(i: int, j: int, length: int) -> Tuple[int, int]:
    return (
        check_position(i, length, name="starting index"),
        check_position(j, length, name="ending index"),
    )


def clamp_range(i: int, j: int, length: int) -> Tuple[int, int]:
    """Resolve ``i``/``j`` the way ``string.sub`` does, clamping instead of raising."""

    i = resolve_index(ensure_integer(i, name="i"), length)
    j = resolve_index(ensure_integer(j, name="j"), length)
    if i < 1:
        i = 1
    if j > length:
        j = length
    return i, j


def resolve_lenient(index: int, length: int) -> int:
    """Negative index resolution that floors at zero instead of going negative."""

    if index < 0:
        return 0 if length + index < 0 else length + index + 1
    return index


__all__ = [
    "ensure_integer",
    "resolve_index",
    "check_position",
    "check_range",
    "clamp_range",
    "resolve_lenient",
]
