"""Generic in-place line sorting."""

from .quicksort import Comparator, compare_strings, sort_lines, sort_list
from .sequence import LineSequence, ListLines

__all__ = [
    "Comparator",
    "LineSequence",
    "ListLines",
    "compare_strings",
    "sort_lines",
    "sort_list",
]
