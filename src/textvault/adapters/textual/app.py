"""Executable Textual app that hosts the textvault editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use textvault.adapters.textual.app"
    ) from exc

from textvault.buffer import TextEditor
from textvault.commands import CommandInterpreter, render_lines
from textvault.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    output_text: str = ""


class TextVaultApp(App[None]):
    """Line editor UI: numbered buffer, output pane, and a command input."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#output {
		height: auto;
		max-height: 12;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("escape", "cancel_prompt", "Cancel prompt"),
    ]

    def __init__(self, *, file: Optional[str] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_file = file
        self.interpreter: CommandInterpreter | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._output_widget: Static | None = None
        self._status_widget: Static | None = None
        self._input_widget: Input | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._output_widget = Static("", id="output", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        self._input_widget = Input(id="command-line")
        yield self._output_widget
        yield self._status_widget
        yield self._input_widget
        yield Footer()

    def on_mount(self) -> None:
        self.interpreter = CommandInterpreter(TextEditor(name="textvault"))
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_output=self._show_output,
            show_prompt=self._show_prompt,
            request_quit=self.exit,
        )
        self.adapter = TextualEditorAdapter(self.interpreter, hooks)
        if self._initial_file:
            self.adapter.submit(f"load {self._initial_file}")
        if self._input_widget:
            self._input_widget.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        value = event.value
        event.input.value = ""
        self.adapter.submit(value)

    def action_cancel_prompt(self) -> None:
        if self.adapter:
            self.adapter.cancel()

    def _update_buffer(self, lines: Sequence[str]) -> None:
        self._state.buffer_text = render_lines(lines)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_output(self, text: str) -> None:
        self._state.output_text = text
        if self._output_widget:
            self._output_widget.update(text)

    def _show_prompt(self, prompt: str, secret: bool) -> None:
        if self._input_widget:
            self._input_widget.placeholder = prompt
            self._input_widget.password = secret


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the textvault line editor.")
    parser.add_argument(
        "file",
        nargs="?",
        default=telemetry.env("FILE"),
        help="File to load on start-up (default: $TEXTVAULT_FILE)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=telemetry.env("LOG_PRESET", "quiet"),
        help="Telemetry preset; 'quiet' keeps the terminal free (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = TextVaultApp(file=args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
