"""Buffer abstractions backing the bookmark store and the editor host."""

from .buffer import Buffer, BufferLines, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor
from .validation import BufferValidationError, clamp_row, ensure_cursor, ensure_row

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferLines",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "Transaction",
    "clamp_row",
    "ensure_cursor",
    "ensure_row",
]
