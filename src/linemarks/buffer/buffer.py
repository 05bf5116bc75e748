"""High-level buffer façade combining document, state, and file binding."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import ContextManager, Iterable, Optional

from linemarks.runtime import telemetry
from linemarks.runtime.telemetry import SpanHandle

from .document import BufferDocument
from .state import BufferState
from .validation import clamp_row, ensure_row


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        path: Optional[Path] = None,
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.path = Path(path) if path is not None else None
        self.document = document or BufferDocument()
        self.state = state or BufferState()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_file(cls, path: Path | str, *, name: Optional[str] = None) -> "Buffer":
        """Load ``path``; a missing file yields an empty, unsaved buffer."""

        buffer = cls(name=name or str(path), path=Path(path))
        buffer.reload()
        return buffer

    def reload(self) -> None:
        if self.path is None:
            raise ValueError(f"Buffer '{self.name}' is not bound to a file")
        with Transaction(self, "reload"):
            if self.path.exists():
                text = self.path.read_text(encoding="utf-8")
            else:
                text = ""
            self.document = BufferDocument.from_text(text)
            self.state.set_cursor(0, 0)
            self.state.last_change_tick = self.document.version

    def save(self, path: Optional[Path | str] = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError(f"Buffer '{self.name}' has no file to write")
        with Transaction(self, "save") as tx:
            tx.handle.add_metadata("path", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.document.to_text(), encoding="utf-8")
            self.document.mark_clean()
        self.path = target
        return target

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def current_line(self) -> str:
        row = ensure_row(self.document, self.state.row)
        return self.document.get_line(row)

    def set_cursor(self, row: int, col: int = 0) -> None:
        """Move the cursor, clamping it into the document."""

        row = clamp_row(self.document, row)
        line = self.document.get_line(row) if self.document.line_count else ""
        self.state.set_cursor(row, max(0, min(col, len(line))))

    def goto_line(self, line_number: int) -> None:
        """Move the cursor to a 1-based line number."""

        self.set_cursor(line_number - 1, 0)

    def replace_lines(
        self, start: int, end: int, new_lines: Iterable[str], *, label: str
    ) -> None:
        with Transaction(self, label):
            self.document.update_lines(start, end, new_lines)
            self.state.last_change_tick = self.document.version
            self.set_cursor(self.state.row, self.state.cursor[1])

    def append_line(self, text: str) -> None:
        with Transaction(self, "append_line"):
            self.document.append_line(text)
            self.state.last_change_tick = self.document.version

    def lines(self) -> "BufferLines":
        return BufferLines(self)


class BufferLines:
    """1-indexed line view over a buffer, usable by ``sort_lines``."""

    __slots__ = ("_buffer",)

    def __init__(self, buffer: Buffer) -> None:
        self._buffer = buffer

    def __len__(self) -> int:
        return self._buffer.document.line_count

    def __getitem__(self, position: int) -> str:
        return self._buffer.document.get_line(self._row(position))

    def __setitem__(self, position: int, value: str) -> None:
        self._buffer.document.set_line(self._row(position), value)

    def swap(self, first: int, second: int) -> None:
        document = self._buffer.document
        a, b = self._row(first), self._row(second)
        line_a, line_b = document.get_line(a), document.get_line(b)
        document.set_line(a, line_b)
        document.set_line(b, line_a)

    def _row(self, position: int) -> int:
        if position < 1 or position > len(self):
            raise IndexError(f"line {position} out of range 1..{len(self)}")
        return position - 1


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[SpanHandle]] = None
        self._handle: Optional[SpanHandle] = None

    @property
    def handle(self) -> SpanHandle:
        if self._handle is None:
            raise RuntimeError("Transaction is not active")
        return self._handle

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        self._handle = None
        return False
