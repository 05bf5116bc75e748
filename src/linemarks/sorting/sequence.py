"""1-indexed line sequences the sorter operates on."""

from __future__ import annotations

from typing import List, MutableSequence, Protocol


class LineSequence(Protocol):
    """Ordered, mutable, 1-indexed storage of text lines."""

    def __len__(self) -> int:
        ...

    def __getitem__(self, position: int) -> str:
        ...

    def __setitem__(self, position: int, value: str) -> None:
        ...

    def swap(self, first: int, second: int) -> None:
        """Exchange the lines stored at ``first`` and ``second``."""
        ...


class ListLines:
    """1-indexed view over a caller-owned list; writes land in that list."""

    __slots__ = ("_items",)

    def __init__(self, items: MutableSequence[str]) -> None:
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> str:
        return self._items[self._index(position)]

    def __setitem__(self, position: int, value: str) -> None:
        self._items[self._index(position)] = value

    def swap(self, first: int, second: int) -> None:
        a, b = self._index(first), self._index(second)
        self._items[a], self._items[b] = self._items[b], self._items[a]

    def to_list(self) -> List[str]:
        return list(self._items)

    def _index(self, position: int) -> int:
        if position < 1 or position > len(self._items):
            raise IndexError(f"line {position} out of range 1..{len(self._items)}")
        return position - 1


__all__ = ["LineSequence", "ListLines"]
