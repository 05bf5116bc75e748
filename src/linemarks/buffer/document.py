"""Core document data structures for linemarks buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Text storage built on a simple list-of-lines model.

    A trailing newline in the source text is remembered in ``eol`` instead of
    producing an empty last line, so ``from_text(text).to_text() == text``
    for newline-terminated files.
    """

    _lines: List[str] = field(default_factory=list)
    version: int = 0
    dirty: bool = False
    eol: bool = True

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines = text.splitlines()
        eol = text.endswith(("\n", "\r")) or not text
        return cls(_lines=list(lines), version=0, dirty=False, eol=eol)

    def to_text(self) -> str:
        text = "\n".join(self._lines)
        if self._lines and self.eol:
            text += "\n"
        return text

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def update_lines(self, start: int, end: int, new_lines: Iterable[str]) -> None:
        """Replace ``[start:end]`` (0-based, end exclusive) with ``new_lines``."""

        self._lines[start:end] = list(new_lines)
        self._touch()

    def set_line(self, index: int, text: str) -> None:
        if self._lines[index] == text:
            return
        self._lines[index] = text
        self._touch()

    def append_line(self, text: str) -> None:
        self._lines.append(text)
        self._touch()

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def mark_clean(self) -> None:
        self.dirty = False

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True
