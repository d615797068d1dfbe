"""Global substitution over byte strings and UTF-16 buffers."""
from __future__ import annotations

from typing import List, Optional, Tuple, Union

import structlog

from ..exceptions import UnitextError
from ..matcher.engine import MatchIterator, Pattern
from ..matcher.spans import TextInput, make_subject
from ..utf16.buffer import UTF16Text
from ..utils.validation import ensure_integer
from .strategies import CallbackReplacement, ReplacementSpec, apply_directive, resolve_directive

logger = structlog.get_logger(__name__)


class SubstitutionEngine:
    def __init__(self, pattern: Pattern) -> None:
        self.pattern = pattern

    def substitute(
        self,
        text: TextInput,
        replacement: ReplacementSpec,
        max_count: Optional[int] = None,
    ) -> Tuple[Union[bytes, UTF16Text], int]:
        """Replace matches of the pattern in ``text``.

        Returns the new text, in the representation the caller supplied, and
        the number of matches actually replaced. Matches left alone by a table
        miss or a ``None`` callback result are not counted.
        """

        subject = make_subject(text)
        directive = resolve_directive(replacement, self.pattern.capture_count, self.pattern.group_names)
        limit = None if max_count is None else ensure_integer(max_count, name="max_count")
        groups_total = self.pattern.capture_count + 1
        working: List[str] = list(subject.text)
        offset = 0
        count = 0
        for match in MatchIterator(self.pattern, subject, 0).raw():
            if limit is not None and count >= limit:
                break
            groups = [match.group(group) for group in range(groups_total)]
            try:
                replacement_text = apply_directive(directive, groups, subject.value)
            except UnitextError:
                raise
            except Exception as exc:
                if isinstance(directive, CallbackReplacement):
                    logger.error("substitution.callback_failed", pattern=self.pattern.pattern, error=str(exc))
                raise
            if replacement_text is None:
                continue
            start, end = match.span()
            working[start + offset : end + offset] = replacement_text
            offset += len(replacement_text) - (end - start)
            count += 1
        logger.debug("substitution.complete", pattern=self.pattern.pattern, replaced=count)
        return subject.value("".join(working)), count


def gsub(
    pattern: Pattern,
    text: TextInput,
    replacement: ReplacementSpec,
    max_count: Optional[int] = None,
) -> Tuple[Union[bytes, UTF16Text], int]:
    return SubstitutionEngine(pattern).substitute(text, replacement, max_count)


__all__ = ["SubstitutionEngine", "gsub"]
