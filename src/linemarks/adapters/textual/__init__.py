"""Textual host for the bookmark menu."""

from .controller import BookmarkMenuController, MenuUIHooks, preview_item

__all__ = ["BookmarkMenuController", "MenuUIHooks", "preview_item"]
