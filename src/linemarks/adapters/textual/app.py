"""Executable Textual app that browses and jumps to saved bookmarks."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.markup import escape
    from textual.widgets import Footer, Header, Input, OptionList, Static
    from textual.widgets.option_list import Option
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use linemarks.adapters.textual.app"
    ) from exc

from linemarks.bookmarks import BookmarkStore, BookmarkStoreError, MenuItem
from linemarks.buffer import Buffer
from linemarks.commands import CommandContext, EventBus
from linemarks.config import LinemarksConfig
from linemarks.runtime import telemetry

from .controller import BookmarkMenuController, MenuUIHooks


def create_context(config: LinemarksConfig) -> CommandContext:
    return CommandContext(buffer=Buffer(), store=BookmarkStore(config), bus=EventBus())


def option_prompt(item: MenuItem) -> str:
    """Menu row markup; bookmarked text is escaped so brackets render literally."""

    return f"{escape(item.label)}  [dim]{escape(item.hint)}[/dim]"


class LinemarksApp(App[None]):
    """Bookmark menu on the left, preview of the target on the right."""

    CSS = """
	#body {
		height: 1fr;
	}

	#menu {
		width: 2fr;
		border: round $accent;
	}

	#preview {
		width: 3fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("d", "delete_bookmark", "Delete"),
        ("r", "rebuild", "Rebuild"),
        (":", "focus_command", "Command"),
    ]

    def __init__(self, config: LinemarksConfig) -> None:
        super().__init__()
        self.config = config
        self.controller: BookmarkMenuController | None = None
        self._menu: OptionList | None = None
        self._preview: Static | None = None
        self._status: Static | None = None
        self._command: Input | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Horizontal(id="body"):
            self._menu = OptionList(id="menu")
            self._preview = Static("", id="preview")
            yield self._menu
            yield self._preview
        self._status = Static("", id="status-line")
        self._command = Input(placeholder=":", id="command-line")
        yield self._status
        yield self._command
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.config.menu_name
        self.sub_title = str(self.config.bookmark_file)
        hooks = MenuUIHooks(
            update_menu=self._update_menu,
            update_preview=self._update_preview,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.controller = BookmarkMenuController(
            create_context(self.config), hooks
        )
        self.controller.refresh()
        if self._menu:
            self._menu.focus()

    def _update_menu(self, items: Sequence[MenuItem]) -> None:
        if self._menu is None:
            return
        self._menu.clear_options()
        self._menu.add_options(
            [Option(option_prompt(item), id=item.id) for item in items]
        )
        if items:
            self._menu.highlighted = 0

    def _update_preview(self, text: str) -> None:
        if self._preview:
            self._preview.update(escape(text))

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("linemarks.app").debug(line)

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        if self.controller:
            self.controller.highlight(event.option_index)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if not self.controller:
            return
        result = self.controller.activate(event.option_index)
        buffer = self.controller.context.buffer
        if result is not None and not result.failed and buffer.line_count:
            self._update_preview(
                f"{buffer.name}:{buffer.state.line_number}\n{buffer.current_line()}"
            )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.controller:
            self.controller.run_command(event.value)
        event.input.value = ""
        if self._menu:
            self._menu.focus()

    def action_delete_bookmark(self) -> None:
        if self.controller and self._menu and self._menu.highlighted is not None:
            self.controller.delete(self._menu.highlighted)

    def action_rebuild(self) -> None:
        if self.controller:
            self.controller.refresh()

    def action_focus_command(self) -> None:
        if self._command:
            self._command.focus()


def _parse_location(value: str) -> tuple[Path, int]:
    path, sep, line = value.rpartition(":")
    if not sep or not line.isdigit():
        raise argparse.ArgumentTypeError(f"expected PATH:LINE, got {value!r}")
    return Path(path), int(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse and manage line bookmarks.")
    parser.add_argument(
        "--bookmark-file",
        default=os.environ.get("LINEMARKS_BOOKMARK_FILE"),
        help="Bookmark file (default: ~/.linemarks, ~/_linemarks on Windows)",
    )
    parser.add_argument(
        "--add",
        metavar="PATH:LINE",
        type=_parse_location,
        help="Bookmark a line without starting the UI",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the bookmark menu and exit",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = LinemarksConfig.from_env(bookmark_file=args.bookmark_file)

    if args.add is None and not args.list:
        telemetry.configure(preset="quiet")
        LinemarksApp(config).run()
        return 0

    store = BookmarkStore(config)
    if args.add is not None:
        path, line = args.add
        buffer = Buffer.from_file(path)
        if not 1 <= line <= buffer.line_count:
            print(
                f"linemarks: {path} has no line {line} ({buffer.line_count} lines)",
                file=sys.stderr,
            )
            return 1
        buffer.goto_line(line)
        try:
            record = store.add_from_buffer(buffer)
        except BookmarkStoreError as exc:
            print(f"linemarks: {exc}", file=sys.stderr)
            return 1
        print(f"Bookmarked {record.location}")
    if args.list:
        for position, record in enumerate(store.records(), start=1):
            print(f"{position:>3} {record.label}  {record.location}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
