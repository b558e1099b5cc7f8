"""Text command interpreter driving a :class:`TextEditor`.

Each submitted line is either a command (``delete 3``, ``search foo``) or the
answer to a prompt the previous command opened (the text to add, a password,
an exit confirmation). The interpreter never prints; hosts render the
returned :class:`CommandResult` and may listen on the :class:`EventBus`:

``command.submit``  -- command name (never prompt answers)
``command.error``   -- failure message
``command.quit``    -- ``None``
``buffer.changed``  -- the new lines tuple
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional, Sequence

from textvault.buffer import CaseMode, EditResult, TextEditor
from textvault.cipher import display_text
from textvault.runtime import telemetry

from .bus import EventBus

HELP_TEXT = """Commands:
  new             - Create new file
  load <path>     - Load file
  save            - Save to current file
  saveas <path>   - Save as...
  encrypt         - Encrypt file
  decrypt         - Decrypt file
  clear           - Clear text
  show            - Show text
  add [text]      - Add line
  delete <num>    - Delete line by number
  edit <num>      - Edit specific line
  replace <num> <text> - Replace line
  search <text>   - Search text
  filter <text>   - Keep lines containing text
  upper <num>     - Convert line to uppercase
  lower <num>     - Convert line to lowercase
  title <num>     - Convert line to title case
  allupper        - Convert all lines to uppercase
  alllower        - Convert all lines to lowercase
  alltitle        - Convert all lines to title case
  undo            - Undo last action
  redo            - Redo undone action
  stats           - Show text statistics
  exit            - Exit
  help            - Show this help"""


@dataclass(slots=True)
class CommandResult:
    """Result returned from ``CommandInterpreter.submit``."""

    consumed: bool = True
    status: str = "ok"
    message: Optional[str] = None
    prompt: Optional[str] = None
    secret: bool = False
    quit: bool = False


@dataclass(slots=True)
class PendingPrompt:
    prompt: str
    handler: Callable[[str], CommandResult]
    secret: bool = False


CommandHandler = Callable[["CommandInterpreter", str], CommandResult]


def render_lines(lines: Sequence[str]) -> str:
    """Number lines from 1 the way ``show`` displays them."""

    if not lines:
        return "(File is empty)"
    return "\n".join(
        f"{number}: {display_text(line)}" for number, line in enumerate(lines, 1)
    )


class CommandInterpreter:
    def __init__(
        self, editor: Optional[TextEditor] = None, *, bus: Optional[EventBus] = None
    ) -> None:
        self.editor = editor or TextEditor()
        self.bus = bus or EventBus()
        self._pending: Optional[PendingPrompt] = None

    @property
    def pending_prompt(self) -> Optional[PendingPrompt]:
        return self._pending

    def cancel_prompt(self) -> CommandResult:
        if self._pending is None:
            return CommandResult(consumed=False, status="noop")
        self._pending = None
        return CommandResult(status="prompt_cancelled", message="Cancelled")

    def ask(
        self,
        prompt: str,
        handler: Callable[[str], CommandResult],
        *,
        secret: bool = False,
        message: Optional[str] = None,
    ) -> CommandResult:
        self._pending = PendingPrompt(prompt=prompt, handler=handler, secret=secret)
        return CommandResult(
            status="prompt", message=message, prompt=prompt, secret=secret
        )

    def submit(self, text: str) -> CommandResult:
        version = self.editor.version
        if self._pending is not None:
            pending, self._pending = self._pending, None
            result = pending.handler(text)
        else:
            result = self._dispatch(text)
        self._publish(result, version)
        return result

    def _dispatch(self, text: str) -> CommandResult:
        stripped = text.strip()
        if not stripped:
            return CommandResult(consumed=False, status="command_empty")
        command, _, args = stripped.partition(" ")
        self.bus.emit("command.submit", command)
        handler = _COMMAND_HANDLERS.get(command)
        if handler is None:
            return error("Unknown command. Type 'help' for command list.")
        with telemetry.span(
            "commands::execute", component="commands", metadata={"command": command}
        ):
            return handler(self, args.lstrip())

    def _publish(self, result: CommandResult, version: int) -> None:
        if result.status == "command_error" and result.message:
            self.bus.emit("command.error", result.message)
        if self.editor.version != version:
            self.bus.emit("buffer.changed", self.editor.lines)
        if result.quit:
            self.bus.emit("command.quit", None)


def error(message: str) -> CommandResult:
    return CommandResult(status="command_error", message=message)


def _from_edit(
    name: str, outcome: EditResult, message: Optional[str]
) -> CommandResult:
    if outcome:
        return CommandResult(status=f"command_{name}", message=message)
    return error(f"Error: {outcome.message}.")


def _parse_number(args: str) -> Optional[int]:
    token = args.split(maxsplit=1)[0] if args.strip() else ""
    try:
        return int(token)
    except ValueError:
        return None


def _handle_new(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    return _from_edit("new", interp.editor.new_file(), "New file created")


def _handle_load(interp: CommandInterpreter, args: str) -> CommandResult:
    if not args:
        return error("Error: Specify file path.")
    outcome = interp.editor.load_file(args)
    return _from_edit("load", outcome, f"File loaded: {args}")


def _handle_save(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    outcome = interp.editor.save_file()
    return _from_edit("save", outcome, f"File saved: {outcome.message}")


def _handle_saveas(interp: CommandInterpreter, args: str) -> CommandResult:
    if not args:
        return error("Error: Specify file path.")
    return _from_edit("saveas", interp.editor.save_file(args), f"File saved: {args}")


def _handle_cipher(
    interp: CommandInterpreter, args: str, *, decrypt: bool
) -> CommandResult:
    del args
    name = "decrypt" if decrypt else "encrypt"

    def apply(password: str) -> CommandResult:
        editor = interp.editor
        outcome = editor.decrypt(password) if decrypt else editor.encrypt(password)
        if outcome:
            message = (
                "File decrypted."
                if decrypt
                else "File encrypted. Remember to save changes!"
            )
            return CommandResult(status=f"command_{name}", message=message)
        return error(outcome.message or name)

    return interp.ask("Enter password:", apply, secret=True)


def _handle_clear(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    return _from_edit("clear", interp.editor.clear_text(), "Text cleared")


def _handle_show(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    rendered = render_lines(interp.editor.lines)
    return CommandResult(status="command_show", message=rendered)


def _handle_add(interp: CommandInterpreter, args: str) -> CommandResult:
    def apply(line: str) -> CommandResult:
        if not line:
            return CommandResult(status="command_add_skipped")
        return _from_edit("add", interp.editor.insert(line), None)

    if args:
        return apply(args)
    return interp.ask("Enter line to add:", apply)


def _handle_delete(interp: CommandInterpreter, args: str) -> CommandResult:
    number = _parse_number(args)
    if number is None:
        return error("Error: Specify line number.")
    return _from_edit("delete", interp.editor.delete(number), None)


def _handle_edit(interp: CommandInterpreter, args: str) -> CommandResult:
    number = _parse_number(args)
    if number is None:
        return error("Error: Specify line number.")
    lines = interp.editor.lines
    if number < 1 or number > len(lines):
        return error("Error: Invalid line number.")

    def apply(new_text: str) -> CommandResult:
        if not new_text:
            return CommandResult(status="command_edit_skipped")
        return _from_edit("edit", interp.editor.replace(number, new_text), None)

    return interp.ask(
        "Enter new text:",
        apply,
        message=f"Current text of line {number}: {display_text(lines[number - 1])}",
    )


def _handle_replace(interp: CommandInterpreter, args: str) -> CommandResult:
    parts = args.split(maxsplit=1)
    number = _parse_number(args)
    if number is None or len(parts) < 2:
        return error("Error: Specify line number and new text.")
    return _from_edit("replace", interp.editor.replace(number, parts[1]), None)


def _handle_search(interp: CommandInterpreter, args: str) -> CommandResult:
    if not args:
        return error("Error: Specify search text.")
    matches = interp.editor.search(args)
    if not matches:
        return CommandResult(status="command_search", message="Text not found.")
    found = " ".join(str(number) for number in matches)
    return CommandResult(status="command_search", message=f"Found in lines: {found}")


def _handle_filter(interp: CommandInterpreter, args: str) -> CommandResult:
    if not args:
        return error("Error: Specify filter keyword.")
    return _from_edit("filter", interp.editor.filter(args), None)


def _handle_line_case(
    interp: CommandInterpreter, args: str, *, mode: CaseMode
) -> CommandResult:
    number = _parse_number(args)
    if number is None:
        return error("Error: Specify line number.")
    convert = {
        CaseMode.UPPER: interp.editor.to_upper,
        CaseMode.LOWER: interp.editor.to_lower,
        CaseMode.TITLE: interp.editor.to_title,
    }[mode]
    return _from_edit(mode.value, convert(number), None)


_CASE_NAMES = {
    CaseMode.UPPER: "uppercase",
    CaseMode.LOWER: "lowercase",
    CaseMode.TITLE: "title case",
}


def _handle_all_case(
    interp: CommandInterpreter, args: str, *, mode: CaseMode
) -> CommandResult:
    del args
    outcome = interp.editor.change_all_lines_case(mode)
    message = f"All lines converted to {_CASE_NAMES[mode]}."
    return _from_edit(f"all{mode.value}", outcome, message)


def _handle_undo(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    outcome = interp.editor.undo()
    return _from_edit("undo", outcome, f"Undid {outcome.message}")


def _handle_redo(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    outcome = interp.editor.redo()
    return _from_edit("redo", outcome, f"Redid {outcome.message}")


def _handle_stats(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    stats = interp.editor.stats()
    message = (
        "Statistics:\n"
        f"  Lines: {stats.lines}\n"
        f"  Words: {stats.words}\n"
        f"  Characters: {stats.characters}"
    )
    return CommandResult(status="command_stats", message=message)


def _handle_help(interp: CommandInterpreter, args: str) -> CommandResult:
    del interp, args
    return CommandResult(status="command_help", message=HELP_TEXT)


def _handle_exit(interp: CommandInterpreter, args: str) -> CommandResult:
    del args
    if not interp.editor.dirty:
        return CommandResult(status="command_exit", quit=True)

    def confirm(answer: str) -> CommandResult:
        if answer.strip().lower().startswith("y"):
            return CommandResult(status="command_exit", quit=True)
        return CommandResult(status="command_exit_cancelled")

    return interp.ask(
        "You have unsaved changes. Exit without saving? (y/n):", confirm
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "new": _handle_new,
    "load": _handle_load,
    "save": _handle_save,
    "saveas": _handle_saveas,
    "encrypt": partial(_handle_cipher, decrypt=False),
    "decrypt": partial(_handle_cipher, decrypt=True),
    "clear": _handle_clear,
    "show": _handle_show,
    "add": _handle_add,
    "delete": _handle_delete,
    "edit": _handle_edit,
    "replace": _handle_replace,
    "search": _handle_search,
    "filter": _handle_filter,
    "upper": partial(_handle_line_case, mode=CaseMode.UPPER),
    "lower": partial(_handle_line_case, mode=CaseMode.LOWER),
    "title": partial(_handle_line_case, mode=CaseMode.TITLE),
    "allupper": partial(_handle_all_case, mode=CaseMode.UPPER),
    "alllower": partial(_handle_all_case, mode=CaseMode.LOWER),
    "alltitle": partial(_handle_all_case, mode=CaseMode.TITLE),
    "undo": _handle_undo,
    "redo": _handle_redo,
    "stats": _handle_stats,
    "help": _handle_help,
    "exit": _handle_exit,
}

__all__ = [
    "CommandInterpreter",
    "CommandResult",
    "HELP_TEXT",
    "PendingPrompt",
    "render_lines",
]
