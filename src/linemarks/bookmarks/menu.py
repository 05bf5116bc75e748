"""Menu registry holding the generated bookmark navigation entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from linemarks.runtime.telemetry import span

from .records import BookmarkRecord


@dataclass(frozen=True, slots=True)
class MenuItem:
    """Single menu entry: a label and the command it runs."""

    id: str
    menu: str
    label: str
    command: str
    hint: str = ""
    priority: int = 0
    target: Optional[BookmarkRecord] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("menu item id cannot be empty")
        if not self.menu:
            raise ValueError("menu item menu cannot be empty")
        if not self.command:
            raise ValueError("menu item command cannot be empty")


@dataclass(slots=True)
class MenuStats:
    """Lightweight snapshot describing registry state."""

    item_count: int
    menus: tuple[str, ...]


class MenuConflictError(RuntimeError):
    """Raised when an item id is already registered in its menu."""

    def __init__(self, item: MenuItem) -> None:
        super().__init__(f"Menu item '{item.id}' already registered in '{item.menu}'")
        self.item = item


class MenuRegistry:
    """Owns menus and the ordered items inside each one."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._menus: Dict[str, Dict[str, MenuItem]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def has_menu(self, menu: str) -> bool:
        return menu in self._menus

    def get_item(self, menu: str, item_id: str) -> MenuItem:
        try:
            return self._menus[menu][item_id]
        except KeyError as exc:
            raise KeyError(f"Menu item '{menu}/{item_id}' is not registered") from exc

    def register_item(self, item: MenuItem, *, replace: bool = False) -> MenuItem:
        with span(
            "menus::register_item",
            logger_name=self._logger_name,
            component="menus",
            metadata={"menu": item.menu, "item_id": item.id},
        ):
            bucket = self._menus.setdefault(item.menu, {})
            if item.id in bucket and not replace:
                raise MenuConflictError(item)
            bucket[item.id] = item
            self._touch()
            return item

    def unregister_item(self, menu: str, item_id: str) -> Optional[MenuItem]:
        """Drop one entry; a missing menu or entry is silently ignored."""

        bucket = self._menus.get(menu)
        if not bucket:
            return None
        removed = bucket.pop(item_id, None)
        if removed is None:
            return None
        if not bucket:
            self._menus.pop(menu, None)
        self._touch()
        return removed

    def remove_menu(self, menu: str) -> int:
        """Remove a whole menu and return how many entries it held."""

        with span(
            "menus::remove_menu",
            logger_name=self._logger_name,
            component="menus",
            metadata={"menu": menu},
        ) as handle:
            bucket = self._menus.pop(menu, None)
            if bucket is None:
                handle.add_metadata("missing", True)
                return 0
            self._touch()
            return len(bucket)

    def items(self, menu: str) -> List[MenuItem]:
        """Entries of ``menu`` ordered by priority, then registration order."""

        bucket = self._menus.get(menu, {})
        ordered = list(bucket.values())
        ordered.sort(key=lambda item: -item.priority)
        return ordered

    def iter_items(self) -> Iterator[MenuItem]:
        for bucket in self._menus.values():
            yield from bucket.values()

    def stats(self) -> MenuStats:
        return MenuStats(
            item_count=sum(len(bucket) for bucket in self._menus.values()),
            menus=tuple(sorted(self._menus)),
        )

    def _touch(self) -> None:
        self._revision += 1


def build_menu(
    registry: MenuRegistry, menu: str, records: Iterable[BookmarkRecord]
) -> List[MenuItem]:
    """Replace ``menu`` with one entry per record, keeping record order."""

    registry.remove_menu(menu)
    built: List[MenuItem] = []
    for position, record in enumerate(records, start=1):
        item = MenuItem(
            id=f"bookmark.{position}",
            menu=menu,
            label=record.label,
            command=record.jump_command,
            hint=record.location,
            target=record,
        )
        built.append(registry.register_item(item))
    return built


__all__ = [
    "MenuConflictError",
    "MenuItem",
    "MenuRegistry",
    "MenuStats",
    "build_menu",
]
