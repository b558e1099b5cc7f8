"""Textual host for the textvault editor."""

from .controller import DEFAULT_PROMPT, TextualEditorAdapter, TextualUIHooks

__all__ = ["DEFAULT_PROMPT", "TextualEditorAdapter", "TextualUIHooks"]
