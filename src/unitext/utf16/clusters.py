"""Composed character sequence (grapheme cluster) boundaries."""
from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import List, Sequence, Tuple

import regex

_CLUSTER = regex.compile(r"\X", regex.UNICODE)


def split_clusters(text: str) -> List[str]:
    """Split ``text`` into composed character sequences."""

    return _CLUSTER.findall(text)


def cluster_boundaries(text: str, unit_starts: Sequence[int]) -> List[int]:
    """Return the 0-based unit offsets where each cluster begins, followed by the unit length.

    ``unit_starts`` maps codepoint positions of ``text`` to unit offsets and
    carries the total unit length as its final entry.
    """

    boundaries = [unit_starts[match.start()] for match in _CLUSTER.finditer(text)]
    boundaries.append(unit_starts[len(text)])
    return boundaries


def composed_range(boundaries: Sequence[int], first: int, last: int) -> Tuple[int, int]:
    """Widen the 0-based unit range ``[first, last]`` to whole clusters.

    Returns the 0-based start and the exclusive end of the covering range.
    """

    start = boundaries[bisect_right(boundaries, first) - 1]
    end = boundaries[bisect_right(boundaries, last)]
    return start, end


def cluster_at(boundaries: Sequence[int], unit: int) -> Tuple[int, int]:
    return composed_range(boundaries, unit, unit)


def is_boundary(boundaries: Sequence[int], unit: int) -> bool:
    index = bisect_left(boundaries, unit)
    return index < len(boundaries) and boundaries[index] == unit


__all__ = ["split_clusters", "cluster_boundaries", "composed_range", "cluster_at", "is_boundary"]
