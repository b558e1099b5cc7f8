"""Textual adapter that wires the command interpreter into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from textvault.commands import CommandInterpreter, CommandResult

DEFAULT_PROMPT = "Command (type 'help')"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    show_output: Callable[[str], None] = _noop
    # prompt text plus whether the input must be masked
    show_prompt: Callable[[str, bool], None] = _noop
    request_quit: Callable[[], None] = _noop


class TextualEditorAdapter:
    """Bridges CommandInterpreter results + bus events to a Textual surface."""

    def __init__(self, interpreter: CommandInterpreter, hooks: TextualUIHooks) -> None:
        self.interpreter = interpreter
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self.hooks.show_prompt(DEFAULT_PROMPT, False)

    def submit(self, text: str) -> CommandResult:
        """Forward one submitted input line and surface the outcome."""

        result = self.interpreter.submit(text)
        self._after_result(result)
        return result

    def cancel(self) -> CommandResult:
        result = self.interpreter.cancel_prompt()
        self._after_result(result)
        return result

    def _after_result(self, result: CommandResult) -> None:
        if result.message:
            self.hooks.show_output(result.message)
        self.hooks.update_status(self._status_label(result))
        if result.prompt:
            self.hooks.show_prompt(result.prompt, result.secret)
        else:
            self.hooks.show_prompt(DEFAULT_PROMPT, False)

    def _status_label(self, result: CommandResult) -> str:
        editor = self.interpreter.editor
        name = editor.path or "[no file]"
        marker = " *" if editor.dirty else ""
        return f"{name}{marker} | {editor.line_count()} lines | {result.status}"

    def _subscribe_events(self) -> None:
        bus = self.interpreter.bus
        bus.subscribe("buffer.changed", lambda _payload: self._refresh_buffer())
        bus.subscribe("command.quit", lambda _payload: self.hooks.request_quit())

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.interpreter.editor.lines)


__all__ = ["DEFAULT_PROMPT", "TextualEditorAdapter", "TextualUIHooks"]
