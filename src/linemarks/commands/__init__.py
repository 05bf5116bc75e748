"""Command-line surface of the bookmark plugin."""

from .bus import EventBus
from .dispatcher import CommandContext, CommandResult, command_names, submit_command_line

__all__ = [
    "CommandContext",
    "CommandResult",
    "EventBus",
    "command_names",
    "submit_command_line",
]
