"""UI-agnostic controller wiring the bookmark menu into host callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from linemarks.bookmarks import MenuItem
from linemarks.buffer import Buffer
from linemarks.commands import CommandContext, CommandResult, submit_command_line

PREVIEW_CONTEXT = 3


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class MenuUIHooks:
    """Callbacks invoked by the controller to update host widgets."""

    update_menu: Callable[[Sequence[MenuItem]], None]
    update_preview: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class BookmarkMenuController:
    """Keeps a host menu in sync with the store and runs menu entries."""

    def __init__(self, context: CommandContext, hooks: MenuUIHooks) -> None:
        self.context = context
        self.hooks = hooks
        self._items: List[MenuItem] = []
        self._subscribe_events()

    @property
    def items(self) -> Sequence[MenuItem]:
        return tuple(self._items)

    def refresh(self) -> CommandResult:
        return self.run_command("bookmarks")

    def run_command(self, text: str) -> CommandResult:
        self.hooks.log(f"command -> {text!r}")
        result = submit_command_line(self.context, text)
        self.hooks.log(f"result <- status={result.status!r} message={result.message!r}")
        self.hooks.update_status(result.message or result.status)
        return result

    def item_at(self, index: int) -> Optional[MenuItem]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def highlight(self, index: int) -> str:
        """Render and publish the preview for the 0-based menu ``index``."""

        item = self.item_at(index)
        text = preview_item(item) if item else ""
        self.hooks.update_preview(text)
        return text

    def activate(self, index: int) -> Optional[CommandResult]:
        item = self.item_at(index)
        if item is None:
            return None
        return self.run_command(item.command)

    def delete(self, index: int) -> Optional[CommandResult]:
        if self.item_at(index) is None:
            return None
        return self.run_command(f"bmdelete {index + 1}")

    def _subscribe_events(self) -> None:
        bus = self.context.bus
        bus.subscribe("bookmarks.menu", self._on_menu)
        bus.subscribe("command.error", self._on_error)

    def _on_menu(self, payload: object | None) -> None:
        self._items = [item for item in payload or () if isinstance(item, MenuItem)]
        self.hooks.update_menu(tuple(self._items))

    def _on_error(self, payload: object | None) -> None:
        if isinstance(payload, dict):
            self.hooks.log(f"error -> {payload.get('message')}")


def preview_item(item: MenuItem, *, context: int = PREVIEW_CONTEXT) -> str:
    """Show the bookmarked line with a few lines around it."""

    record = item.target
    if record is None:
        return item.hint or item.command
    path = record.path.expanduser()
    if not path.exists():
        return f"{record.location}\n(missing file)"
    lines = Buffer.from_file(path).document.snapshot()
    first = max(1, record.line - context)
    last = min(len(lines), record.line + context)
    rendered: Dict[int, str] = {
        number: lines[number - 1] for number in range(first, last + 1)
    }
    width = len(str(last))
    body = [
        f"{'>' if number == record.line else ' '} {number:>{width}} {text}"
        for number, text in rendered.items()
    ]
    return "\n".join([record.location, *body])


__all__ = ["BookmarkMenuController", "MenuUIHooks", "preview_item"]
