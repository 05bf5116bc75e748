"""Bookmark records and their one-line text encoding.

A record line looks like::

    def main(argv): | edit +42 /home/me/project/cli.py

The label leads the line, so sorting record lines alphabetizes the menu.
Literal ``\\``, ``|`` and tab characters in the label or path are
backslash-escaped so the first bare ``|`` is always the separator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

SEPARATOR = " | "
BLANK_PREVIEW = "<blank>"
TRUNCATION_MARK = "~"

_WHITESPACE = re.compile(r"\s+")
_JUMP = re.compile(r"^edit \+(?P<line>\d+) (?P<path>.+)$")
_ESCAPES = {"\\": "\\\\", "|": "\\|", "\t": "\\t"}
_UNESCAPES = {"\\": "\\", "|": "|", "t": "\t"}


class RecordFormatError(ValueError):
    """Raised when a stored line is not a valid bookmark record."""

    def __init__(self, message: str, *, text: str) -> None:
        super().__init__(f"{message}: {text!r}")
        self.text = text


def compress_preview(text: str, width: int) -> str:
    """Squeeze ``text`` into a single-line preview of at most ``width`` chars."""

    if width <= 0:
        raise ValueError("width must be positive")
    compact = _WHITESPACE.sub(" ", text).strip()
    if not compact:
        return BLANK_PREVIEW
    if len(compact) <= width:
        return compact
    if width == 1:
        return TRUNCATION_MARK
    return compact[: width - 1].rstrip() + TRUNCATION_MARK


def escape_label(text: str) -> str:
    return "".join(_ESCAPES.get(char, char) for char in text)


def unescape_label(text: str) -> str:
    result: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            result.append(char)
            continue
        following = next(chars, "")
        result.append(_UNESCAPES.get(following, "\\" + following))
    return "".join(result)


@dataclass(frozen=True, slots=True)
class BookmarkRecord:
    """A display label plus the file/line jump target."""

    label: str
    path: Path
    line: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("line numbers start at 1")
        if not self.label:
            raise ValueError("label cannot be empty")
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def from_line(
        cls, text: str, *, path: Path | str, line: int, width: int
    ) -> "BookmarkRecord":
        return cls(label=compress_preview(text, width), path=Path(path), line=line)

    @property
    def jump_command(self) -> str:
        return f"edit +{self.line} {self.path}"

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}"


def format_record(record: BookmarkRecord) -> str:
    escaped_path = escape_label(str(record.path))
    return f"{escape_label(record.label)}{SEPARATOR}edit +{record.line} {escaped_path}"


def parse_record(text: str) -> BookmarkRecord:
    split_at = _find_separator(text)
    if split_at < 0:
        raise RecordFormatError("missing separator", text=text)
    label = text[:split_at].rstrip(" ")
    action = text[split_at + 1 :].lstrip(" ")
    match = _JUMP.match(action)
    if match is None or not label:
        raise RecordFormatError("malformed jump action", text=text)
    return BookmarkRecord(
        label=unescape_label(label),
        path=Path(unescape_label(match.group("path"))),
        line=int(match.group("line")),
    )


def _find_separator(text: str) -> int:
    escaped = False
    for index, char in enumerate(text):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == "|":
            return index
    return -1


__all__ = [
    "BLANK_PREVIEW",
    "BookmarkRecord",
    "RecordFormatError",
    "compress_preview",
    "escape_label",
    "format_record",
    "parse_record",
    "unescape_label",
]
