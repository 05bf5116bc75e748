from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from linemarks.adapters.textual import BookmarkMenuController, MenuUIHooks, preview_item
from linemarks.bookmarks import BookmarkStore, MenuItem
from linemarks.buffer import Buffer
from linemarks.commands import CommandContext, EventBus, submit_command_line
from linemarks.config import LinemarksConfig


def make_controller(
    config: LinemarksConfig,
    menus: List[Sequence[MenuItem]],
    statuses: List[str] | None = None,
    previews: List[str] | None = None,
) -> BookmarkMenuController:
    status_sink = statuses if statuses is not None else []
    preview_sink = previews if previews is not None else []
    context = CommandContext(buffer=Buffer(), store=BookmarkStore(config), bus=EventBus())
    hooks = MenuUIHooks(
        update_menu=lambda items: menus.append(items),
        update_status=lambda status: status_sink.append(status),
        update_preview=lambda text: preview_sink.append(text),
    )
    return BookmarkMenuController(context, hooks)


def seed(config: LinemarksConfig, source_file: Path, *lines: int) -> None:
    buffer = Buffer.from_file(source_file)
    context = CommandContext(buffer=buffer, store=BookmarkStore(config))
    for line in lines:
        buffer.goto_line(line)
        submit_command_line(context, "bm")


def test_refresh_publishes_menu(config: LinemarksConfig, source_file: Path) -> None:
    seed(config, source_file, 1, 3)
    menus: List[Sequence[MenuItem]] = []
    statuses: List[str] = []
    controller = make_controller(config, menus, statuses)

    controller.refresh()

    assert [item.label for item in menus[-1]] == ["def main(argv):", "import sys"]
    assert statuses[-1] == "2 bookmark(s)"


def test_activate_jumps_host_buffer(config: LinemarksConfig, source_file: Path) -> None:
    seed(config, source_file, 3)
    controller = make_controller(config, [])
    controller.refresh()

    result = controller.activate(0)

    assert result is not None and result.status == "command_edit"
    assert controller.context.buffer.current_line() == "def main(argv):"
    assert controller.activate(5) is None


def test_delete_refreshes_menu(config: LinemarksConfig, source_file: Path) -> None:
    seed(config, source_file, 1, 3)
    menus: List[Sequence[MenuItem]] = []
    controller = make_controller(config, menus)
    controller.refresh()

    controller.delete(0)

    assert [item.label for item in menus[-1]] == ["import sys"]


def test_highlight_renders_preview(config: LinemarksConfig, source_file: Path) -> None:
    seed(config, source_file, 3)
    previews: List[str] = []
    controller = make_controller(config, [], previews=previews)
    controller.refresh()

    text = controller.highlight(0)

    assert previews == [text]
    assert "> 3 def main(argv):" in text
    assert text.splitlines()[0].endswith("cli.py:3")


def test_preview_without_target_falls_back_to_command() -> None:
    item = MenuItem(id="x", menu="Bookmarks", label="x", command="edit +1 /nope")

    assert preview_item(item) == "edit +1 /nope"
