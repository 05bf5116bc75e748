"""Configuration values passed explicitly into the bookmark store."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "LINEMARKS_"
DEFAULT_PREVIEW_WIDTH = 40
DEFAULT_MENU_NAME = "Bookmarks"


def default_bookmark_file(platform: Optional[str] = None) -> Path:
    """Return the per-user bookmark file for ``platform`` (default: this host)."""

    name = platform or sys.platform
    filename = "_linemarks" if name.startswith("win") else ".linemarks"
    return Path.home() / filename


@dataclass(frozen=True, slots=True)
class LinemarksConfig:
    """Settings shared by the store, the menu and the command line."""

    bookmark_file: Path
    preview_width: int = DEFAULT_PREVIEW_WIDTH
    menu_name: str = DEFAULT_MENU_NAME

    def __post_init__(self) -> None:
        if self.preview_width <= 0:
            raise ValueError("preview_width must be positive")
        if not self.menu_name:
            raise ValueError("menu_name cannot be empty")
        object.__setattr__(self, "bookmark_file", Path(self.bookmark_file))

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        bookmark_file: Optional[Path | str] = None,
    ) -> "LinemarksConfig":
        env = os.environ if environ is None else environ
        path = bookmark_file or env.get(f"{ENV_PREFIX}BOOKMARK_FILE")
        width = env.get(f"{ENV_PREFIX}PREVIEW_WIDTH")
        return cls(
            bookmark_file=Path(path).expanduser() if path else default_bookmark_file(),
            preview_width=int(width) if width else DEFAULT_PREVIEW_WIDTH,
            menu_name=env.get(f"{ENV_PREFIX}MENU_NAME") or DEFAULT_MENU_NAME,
        )


__all__ = ["LinemarksConfig", "default_bookmark_file"]
