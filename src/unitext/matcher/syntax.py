"""Token level rewriting of pattern source before it reaches the engine."""
from __future__ import annotations

from typing import List, Mapping


def _set_end(expression: str, start: int) -> int:
    """Index just past the character set opened at ``start``."""

    index = start + 1
    length = len(expression)
    if index < length and expression[index] == "^":
        index += 1
    # a leading ] is a literal member
    if index < length and expression[index] == "]":
        index += 1
    while index < length:
        char = expression[index]
        if char == "\\":
            index += 2
            continue
        if expression.startswith("[:", index):
            close = expression.find(":]", index + 2)
            if close >= 0:
                index = close + 2
                continue
        if char == "]":
            return index + 1
        index += 1
    return length


def _comment_end(expression: str, start: int, verbose: bool) -> int:
    """Index just past a comment starting at ``start``, or ``start`` when there is none."""

    if expression.startswith("(?#", start):
        close = expression.find(")", start)
        return len(expression) if close < 0 else close + 1
    if verbose and expression[start] == "#":
        close = expression.find("\n", start)
        return len(expression) if close < 0 else close
    return start


def rewrite_tokens(expression: str, replacements: Mapping[str, str], *, verbose: bool = False) -> str:
    """Replace bare ``.``, ``^`` and ``$`` tokens in ``expression``.

    Escapes, character sets and comments are copied through untouched, so
    only the tokens that act as metacharacters change. Characters missing
    from ``replacements`` are kept as they are.
    """

    if not replacements:
        return expression
    pieces: List[str] = []
    index = 0
    length = len(expression)
    while index < length:
        char = expression[index]
        if char == "\\":
            pieces.append(expression[index : index + 2])
            index += 2
            continue
        if char == "[":
            end = _set_end(expression, index)
        else:
            end = _comment_end(expression, index, verbose)
        if end > index:
            pieces.append(expression[index:end])
            index = end
            continue
        pieces.append(replacements.get(char, char))
        index += 1
    return "".join(pieces)


__all__ = ["rewrite_tokens"]
