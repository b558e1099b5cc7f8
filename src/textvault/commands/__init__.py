"""Command vocabulary and prompt handling on top of the editor."""

from .bus import EventBus
from .interpreter import (
    HELP_TEXT,
    CommandInterpreter,
    CommandResult,
    PendingPrompt,
    render_lines,
)

__all__ = [
    "CommandInterpreter",
    "CommandResult",
    "EventBus",
    "HELP_TEXT",
    "PendingPrompt",
    "render_lines",
]
