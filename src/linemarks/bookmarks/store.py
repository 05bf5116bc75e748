"""Bookmark store manager backed by a flat text file, one record per line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from linemarks.buffer import Buffer, BufferValidationError
from linemarks.config import LinemarksConfig
from linemarks.runtime import telemetry
from linemarks.sorting import compare_strings, sort_lines

from .menu import MenuItem, MenuRegistry, build_menu
from .records import BookmarkRecord, format_record, parse_record


class BookmarkStoreError(RuntimeError):
    """Raised when a store operation cannot be carried out."""


@dataclass(frozen=True, slots=True)
class StoredBookmark:
    """A parsed record together with the exact line it came from."""

    raw: str
    record: BookmarkRecord


class BookmarkStore:
    """Adds, lists and removes bookmarks and keeps the navigation menu current."""

    def __init__(
        self,
        config: LinemarksConfig,
        *,
        menus: Optional[MenuRegistry] = None,
        logger_name: str | None = "linemarks.bookmarks",
    ) -> None:
        self.config = config
        self.menus = menus or MenuRegistry(logger_name=logger_name)
        self._logger_name = logger_name
        self.logger = telemetry.get_logger(logger_name)
        self._entries: Optional[List[StoredBookmark]] = None

    @property
    def path(self) -> Path:
        return self.config.bookmark_file

    def open_buffer(self) -> Buffer:
        """Load the bookmark file into a fresh buffer for editing."""

        return Buffer.from_file(self.path, name="bookmarks")

    def add(self, record: BookmarkRecord) -> List[MenuItem]:
        buffer = self.open_buffer()
        buffer.append_line(format_record(record))
        buffer.save()
        telemetry.record_event(
            "bookmarks.add",
            data={"label": record.label, "location": record.location},
            logger_name=self._logger_name,
        )
        return self.rebuild()

    def add_from_buffer(
        self, buffer: Buffer, path: Optional[Path | str] = None
    ) -> BookmarkRecord:
        """Bookmark the line under ``buffer``'s cursor."""

        target = Path(path) if path is not None else buffer.path
        if target is None:
            raise BookmarkStoreError(f"Buffer '{buffer.name}' has no file name")
        try:
            text = buffer.current_line()
        except BufferValidationError as exc:
            raise BookmarkStoreError(f"Nothing to bookmark in '{buffer.name}'") from exc
        record = BookmarkRecord.from_line(
            text,
            path=target.expanduser().resolve(),
            line=buffer.state.line_number,
            width=self.config.preview_width,
        )
        self.add(record)
        return record

    def rebuild(self) -> List[MenuItem]:
        """Dedupe and alphabetize the file, persist it, and regenerate the menu."""

        _, items = self._rebuild()
        return items

    def _rebuild(self) -> Tuple[List[StoredBookmark], List[MenuItem]]:
        with telemetry.span(
            "bookmarks::rebuild",
            logger_name=self._logger_name,
            component="bookmarks",
            metadata={"path": self.path},
        ) as handle:
            buffer = self.open_buffer()
            removed = _drop_blank_and_duplicate_lines(buffer)
            sort_lines(buffer.lines(), 1, buffer.line_count, compare_strings)
            if buffer.document.dirty:
                buffer.save()
            handle.add_metadata("removed", removed)

            entries = self._parse_entries(buffer)
            items = build_menu(
                self.menus,
                self.config.menu_name,
                (entry.record for entry in entries),
            )
            self._entries = entries
        telemetry.record_event(
            "bookmarks.rebuild",
            data={"count": len(items), "removed": removed},
            logger_name=self._logger_name,
        )
        return entries, items

    def records(self) -> List[BookmarkRecord]:
        return [entry.record for entry in self._ensure_entries()]

    def find(self, path: Path | str) -> List[BookmarkRecord]:
        wanted = Path(path).expanduser().resolve()
        return [
            record
            for record in self.records()
            if record.path.expanduser().resolve() == wanted
        ]

    def remove(self, position: int) -> BookmarkRecord:
        """Delete the bookmark at 1-based menu ``position``."""

        # Resolve against the file as it is now, not the last menu build.
        entries, _ = self._rebuild()
        if position < 1 or position > len(entries):
            raise BookmarkStoreError(
                f"No bookmark #{position} (have {len(entries)})"
            )
        target = entries[position - 1]
        buffer = self.open_buffer()
        kept = [line for line in buffer.document.snapshot() if line != target.raw]
        buffer.replace_lines(0, buffer.line_count, kept, label="remove_bookmark")
        buffer.save()
        telemetry.record_event(
            "bookmarks.remove",
            data={"position": position, "label": target.record.label},
            logger_name=self._logger_name,
        )
        self.rebuild()
        return target.record

    def clear(self) -> int:
        count = len(self._ensure_entries())
        buffer = self.open_buffer()
        buffer.replace_lines(0, buffer.line_count, [], label="clear_bookmarks")
        buffer.save()
        telemetry.record_event(
            "bookmarks.clear", data={"count": count}, logger_name=self._logger_name
        )
        self.rebuild()
        return count

    def jump(self, record: BookmarkRecord, buffer: Buffer) -> Buffer:
        """Show ``record``'s file in ``buffer`` with the cursor on its line."""

        target = record.path.expanduser()
        if not target.exists():
            raise BookmarkStoreError(f"Bookmarked file is gone: {target}")
        if buffer.path is None or buffer.path.resolve() != target.resolve():
            buffer.path = target
            buffer.name = str(target)
            buffer.reload()
        buffer.goto_line(record.line)
        telemetry.record_event(
            "bookmarks.jump",
            data={"location": record.location},
            logger_name=self._logger_name,
        )
        return buffer

    def _ensure_entries(self) -> List[StoredBookmark]:
        if self._entries is not None:
            return self._entries
        entries, _ = self._rebuild()
        return entries

    def _parse_entries(self, buffer: Buffer) -> List[StoredBookmark]:
        entries: List[StoredBookmark] = []
        for number, line in enumerate(buffer.document.snapshot(), start=1):
            try:
                entries.append(StoredBookmark(raw=line, record=parse_record(line)))
            except ValueError as exc:
                self.logger.warning(f"skipping {self.path}:{number}: {exc}")
        return entries


def _drop_blank_and_duplicate_lines(buffer: Buffer) -> int:
    lines = buffer.document.snapshot()
    seen: set[str] = set()
    kept: List[str] = []
    for line in lines:
        if not line.strip() or line in seen:
            continue
        seen.add(line)
        kept.append(line)
    removed = len(lines) - len(kept)
    if removed:
        buffer.replace_lines(0, len(lines), kept, label="dedupe_bookmarks")
    return removed


__all__ = ["BookmarkStore", "BookmarkStoreError", "StoredBookmark"]
