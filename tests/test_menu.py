from __future__ import annotations

from pathlib import Path

import pytest

from linemarks.bookmarks import (
    BookmarkRecord,
    MenuConflictError,
    MenuItem,
    MenuRegistry,
    build_menu,
)


def make_item(item_id: str = "bookmark.1", *, menu: str = "Bookmarks") -> MenuItem:
    return MenuItem(id=item_id, menu=menu, label=item_id, command="edit +1 /a")


def make_record(label: str, line: int = 1) -> BookmarkRecord:
    return BookmarkRecord(label=label, path=Path("/src/app.py"), line=line)


def test_register_item_success() -> None:
    registry = MenuRegistry()
    item = make_item()

    registry.register_item(item)

    assert registry.items("Bookmarks") == [item]
    assert registry.stats().item_count == 1


def test_register_item_conflict() -> None:
    registry = MenuRegistry()
    registry.register_item(make_item())

    with pytest.raises(MenuConflictError):
        registry.register_item(make_item())


def test_register_item_with_replace() -> None:
    registry = MenuRegistry()
    registry.register_item(make_item())
    replacement = MenuItem(
        id="bookmark.1", menu="Bookmarks", label="new", command="edit +2 /b"
    )

    registry.register_item(replacement, replace=True)

    assert registry.get_item("Bookmarks", "bookmark.1").label == "new"


def test_removing_missing_menu_is_ignored() -> None:
    registry = MenuRegistry()
    before = registry.revision()

    assert registry.remove_menu("Nowhere") == 0
    assert registry.unregister_item("Nowhere", "bookmark.1") is None
    assert registry.revision() == before


def test_unregister_last_item_drops_menu() -> None:
    registry = MenuRegistry()
    item = registry.register_item(make_item())

    removed = registry.unregister_item("Bookmarks", item.id)

    assert removed == item
    assert registry.has_menu("Bookmarks") is False


def test_items_order_by_priority_then_registration() -> None:
    registry = MenuRegistry()
    first = registry.register_item(make_item("a"))
    second = registry.register_item(make_item("b"))
    pinned = registry.register_item(
        MenuItem(id="c", menu="Bookmarks", label="c", command="edit +1 /c", priority=5)
    )

    assert registry.items("Bookmarks") == [pinned, first, second]


def test_build_menu_replaces_previous_entries() -> None:
    registry = MenuRegistry()
    registry.register_item(make_item("stale"))
    other = registry.register_item(make_item("keep", menu="Other"))

    items = build_menu(
        registry, "Bookmarks", [make_record("alpha", 3), make_record("beta", 9)]
    )

    assert [item.id for item in items] == ["bookmark.1", "bookmark.2"]
    assert [item.command for item in items] == [
        "edit +3 /src/app.py",
        "edit +9 /src/app.py",
    ]
    assert items[1].target == make_record("beta", 9)
    assert registry.items("Bookmarks") == items
    assert registry.items("Other") == [other]
