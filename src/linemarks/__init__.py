"""Line bookmarks for a small editor engine."""

__all__ = [
    "adapters",
    "bookmarks",
    "buffer",
    "commands",
    "config",
    "runtime",
    "sorting",
]

__version__ = "0.1.0"
