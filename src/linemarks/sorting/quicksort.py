"""In-place quicksort over a 1-indexed line range with a pluggable comparator."""

from __future__ import annotations

from typing import Callable, List, MutableSequence, Optional, Tuple

from .sequence import LineSequence, ListLines

Comparator = Callable[[str, str], int]


def compare_strings(first: str, second: str) -> int:
    """Three-way lexicographic comparison: -1, 0 or 1."""

    if first < second:
        return -1
    if first > second:
        return 1
    return 0


def sort_lines(
    sequence: LineSequence,
    start: int,
    end: int,
    comparator: Comparator = compare_strings,
) -> None:
    """Sort positions ``start..end`` (inclusive) of ``sequence`` in place.

    Ranges with ``start >= end``, and ranges reaching outside the sequence,
    are a no-op. Positions outside the range are never read or written.
    Exceptions raised by ``comparator`` propagate and leave the range
    partially permuted.
    """

    if start >= end or start < 1 or end > len(sequence):
        return

    # Each partition strictly shrinks the range. Pushing the larger half first
    # keeps the pending stack logarithmic even on already-sorted input.
    pending: List[Tuple[int, int]] = [(start, end)]
    while pending:
        low, high = pending.pop()
        if low >= high:
            continue
        boundary = _partition(sequence, low, high, comparator)
        left = (low, boundary - 1)
        right = (boundary + 1, high)
        if left[1] - left[0] > right[1] - right[0]:
            pending.append(left)
            pending.append(right)
        else:
            pending.append(right)
            pending.append(left)


def _partition(
    sequence: LineSequence, low: int, high: int, comparator: Comparator
) -> int:
    pivot = sequence[(low + high) // 2]
    boundary = low - 1
    middle: Optional[int] = None
    for position in range(low, high + 1):
        order = comparator(sequence[position], pivot)
        if order <= 0:
            boundary += 1
            if position != boundary:
                sequence.swap(position, boundary)
            if order == 0:
                middle = boundary
    if boundary < low:
        # Only reachable when the comparator ranks the pivot above itself.
        return low
    if middle is not None and middle != boundary:
        sequence.swap(middle, boundary)
    return boundary


def sort_list(
    items: MutableSequence[str], comparator: Comparator = compare_strings
) -> None:
    """Sort a whole list in place."""

    sort_lines(ListLines(items), 1, len(items), comparator)


__all__ = [
    "Comparator",
    "compare_strings",
    "sort_lines",
    "sort_list",
]
