"""Ex-style command lines driving the bookmark store."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Optional

from linemarks.bookmarks import BookmarkRecord, BookmarkStore, BookmarkStoreError
from linemarks.buffer import Buffer
from linemarks.runtime import telemetry

from .bus import EventBus

_EDIT_ARGS = re.compile(r"^(?:\+(?P<line>\d+)\s+)?(?P<path>\S.*)$")


@dataclass(slots=True)
class CommandContext:
    """Services every command handler can reach."""

    buffer: Buffer
    store: BookmarkStore
    bus: EventBus = field(default_factory=EventBus)
    history: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CommandResult:
    status: str = "ok"
    message: Optional[str] = None
    payload: object | None = None

    @property
    def failed(self) -> bool:
        return self.status == "command_error"


CommandHandler = Callable[[CommandContext, str], CommandResult]


def submit_command_line(context: CommandContext, raw: str) -> CommandResult:
    """Evaluate one command line (a leading ``:`` is optional)."""

    # Trailing blanks can belong to a file name, so only the line ending goes.
    text = raw.lstrip().rstrip("\r\n")
    if text.startswith(":"):
        text = text[1:].lstrip()
    context.bus.emit("command.submit", text)
    context.history.append(text)
    if not text:
        return CommandResult(status="command_empty")

    command, _, rest = text.partition(" ")
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _error(context, command, f"Not an editor command: {command}")

    with telemetry.span(
        "commands::execute",
        component="commands",
        metadata={"command": command},
    ):
        try:
            return handler(context, rest.lstrip())
        except (BookmarkStoreError, ValueError) as exc:
            return _error(context, command, str(exc))


def _error(context: CommandContext, command: str, message: str) -> CommandResult:
    context.bus.emit("command.error", {"command": command, "message": message})
    telemetry.record_event(
        "command.error",
        level="warning",
        data={"command": command, "message": message},
    )
    return CommandResult(status="command_error", message=message)


def _handle_echo(context: CommandContext, args: str) -> CommandResult:
    context.bus.emit("command.echo", args)
    return CommandResult(status="command_echo", message=args)


def _handle_bookmark(context: CommandContext, args: str) -> CommandResult:
    record = context.store.add_from_buffer(context.buffer, args.strip() or None)
    context.bus.emit("bookmarks.added", record)
    _emit_menu(context)
    return CommandResult(
        status="bookmark_added",
        message=f"Bookmarked {record.location}",
        payload=record,
    )


def _handle_list(context: CommandContext, args: str) -> CommandResult:
    del args
    items = context.store.rebuild()
    context.bus.emit("bookmarks.menu", items)
    return CommandResult(
        status="bookmark_menu",
        message=f"{len(items)} bookmark(s)",
        payload=items,
    )


def _handle_delete(context: CommandContext, args: str) -> CommandResult:
    number = args.strip()
    if not number.isdigit():
        raise ValueError("Usage: bmdelete {number}")
    record = context.store.remove(int(number))
    context.bus.emit("bookmarks.removed", record)
    _emit_menu(context)
    return CommandResult(
        status="bookmark_removed",
        message=f"Removed {record.location}",
        payload=record,
    )


def _handle_clear(context: CommandContext, args: str) -> CommandResult:
    del args
    count = context.store.clear()
    _emit_menu(context)
    return CommandResult(status="bookmark_cleared", message=f"Removed {count}")


def _handle_edit(
    context: CommandContext, args: str, *, force: bool = False
) -> CommandResult:
    match = _EDIT_ARGS.match(args)
    if match is None:
        raise ValueError("Usage: edit [+{line}] {path}")
    path = Path(match.group("path")).expanduser()
    line = int(match.group("line") or 1)
    if context.buffer.document.dirty and not force:
        raise ValueError("No write since last change (add ! to override)")
    record = BookmarkRecord(label=path.name or str(path), path=path, line=max(line, 1))
    context.store.jump(record, context.buffer)
    payload = {"path": path, "line": line, "force": force}
    context.bus.emit("command.edit", payload)
    return CommandResult(
        status="command_edit_force" if force else "command_edit",
        message=record.location,
        payload=payload,
    )


def _emit_menu(context: CommandContext) -> None:
    items = context.store.menus.items(context.store.config.menu_name)
    context.bus.emit("bookmarks.menu", items)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "echo": _handle_echo,
    "bookmark": _handle_bookmark,
    "bm": _handle_bookmark,
    "bookmarks": _handle_list,
    "bml": _handle_list,
    "bmdelete": _handle_delete,
    "bmd": _handle_delete,
    "bmclear": _handle_clear,
    "edit": _handle_edit,
    "e": _handle_edit,
    "edit!": partial(_handle_edit, force=True),
    "e!": partial(_handle_edit, force=True),
}


def command_names() -> tuple[str, ...]:
    return tuple(sorted(_COMMAND_HANDLERS))


__all__ = [
    "CommandContext",
    "CommandResult",
    "command_names",
    "submit_command_line",
]
