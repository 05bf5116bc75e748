from __future__ import annotations

from pathlib import Path

import pytest

from linemarks.buffer import Buffer, BufferDocument, BufferValidationError, ensure_cursor
from linemarks.sorting import compare_strings, sort_lines


def test_document_round_trips_trailing_newline() -> None:
    assert BufferDocument.from_text("a\nb\n").to_text() == "a\nb\n"
    assert BufferDocument.from_text("a\nb").to_text() == "a\nb"
    assert BufferDocument.from_text("").snapshot() == ()


def test_from_file_missing_is_empty(tmp_path: Path) -> None:
    buffer = Buffer.from_file(tmp_path / "nope.txt")

    assert buffer.line_count == 0
    assert buffer.document.dirty is False
    with pytest.raises(BufferValidationError):
        buffer.current_line()


def test_save_creates_parents_and_marks_clean(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "out.txt"
    buffer = Buffer(path=target)
    buffer.append_line("hello")
    assert buffer.document.dirty is True

    buffer.save()

    assert target.read_text(encoding="utf-8") == "hello\n"
    assert buffer.document.dirty is False


def test_goto_line_clamps(source_file: Path) -> None:
    buffer = Buffer.from_file(source_file)

    buffer.goto_line(3)
    assert buffer.current_line() == "def main(argv):"
    assert buffer.state.line_number == 3

    buffer.goto_line(999)
    assert buffer.state.line_number == buffer.line_count


def test_buffer_lines_sorts_document_in_place() -> None:
    buffer = Buffer.from_text("pear\napple\nfig\n")

    sort_lines(buffer.lines(), 1, buffer.line_count, compare_strings)

    assert buffer.document.snapshot() == ("apple", "fig", "pear")
    assert buffer.document.dirty is True


def test_replace_lines_bumps_version() -> None:
    buffer = Buffer.from_text("a\nb\nc\n")
    before = buffer.document.version

    buffer.replace_lines(1, 2, ["x", "y"], label="test")

    assert buffer.document.snapshot() == ("a", "x", "y", "c")
    assert buffer.document.version == before + 1


def test_ensure_cursor_rejects_columns_past_line_end() -> None:
    document = BufferDocument.from_text("abc\n")

    assert ensure_cursor(document, (0, 3)) == (0, 3)
    with pytest.raises(BufferValidationError):
        ensure_cursor(document, (0, 4))
