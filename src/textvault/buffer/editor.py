"""Editor façade combining the line store, history, and the line cipher."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import (
    Callable,
    ContextManager,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from textvault.cipher import is_printable, scoped_secret, transform_line
from textvault.cipher.secret import SecretSource
from textvault.runtime import telemetry
from textvault.storage import files

from .document import LineStore
from .history import HistoryEntry, HistoryManager
from .results import EditError, EditResult
from .text import (
    CASE_CONVERTERS,
    CaseMode,
    TextStats,
    char_count,
    collect_stats,
    filter_lines,
    search_lines,
    word_count,
)
from .validation import line_index


class TextEditor:
    """Line buffer whose every mutation is undoable.

    Fallible operations return :class:`EditResult` instead of raising. A
    failed operation leaves the lines, the history and the dirty flag exactly
    as they were.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineStore] = None,
        history: Optional[HistoryManager] = None,
        path: Optional[str] = None,
    ) -> None:
        self.name = name
        self.document = document or LineStore()
        self.history = history or HistoryManager()
        self._path = path

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], *, name: str = "default"
    ) -> "TextEditor":
        return cls(name=name, document=LineStore.from_lines(lines))

    @property
    def lines(self) -> Tuple[str, ...]:
        return self.document.snapshot()

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def version(self) -> int:
        return self.document.version

    # -- line edits -----------------------------------------------------

    def insert(self, line: str) -> EditResult:
        with Transaction(self, "insert") as tx:
            tx.commit([*self.document, line])
        return tx.result()

    def delete(self, number: int) -> EditResult:
        index = line_index(self.document, number)
        if index is None:
            return self._reject("delete", EditError.INVALID_INDEX, line=number)
        with Transaction(self, "delete") as tx:
            lines = list(self.document)
            del lines[index]
            tx.commit(lines)
        return tx.result()

    def replace(self, number: int, new_line: str) -> EditResult:
        index = line_index(self.document, number)
        if index is None:
            return self._reject("replace", EditError.INVALID_INDEX, line=number)
        with Transaction(self, "replace") as tx:
            lines = list(self.document)
            lines[index] = new_line
            tx.commit(lines)
        return tx.result()

    def filter(self, keyword: str) -> EditResult:
        with Transaction(self, "filter") as tx:
            tx.commit(filter_lines(self.document, keyword))
        return tx.result()

    def clear_text(self) -> EditResult:
        with Transaction(self, "clear") as tx:
            tx.commit([])
        return tx.result()

    def new_file(self) -> EditResult:
        with Transaction(self, "new") as tx:
            tx.commit([])
        self._path = None
        return tx.result()

    # -- case conversion ------------------------------------------------

    def to_upper(self, number: int) -> EditResult:
        return self._convert_line(number, CaseMode.UPPER)

    def to_lower(self, number: int) -> EditResult:
        return self._convert_line(number, CaseMode.LOWER)

    def to_title(self, number: int) -> EditResult:
        return self._convert_line(number, CaseMode.TITLE)

    def change_all_lines_case(self, mode: Union[CaseMode, str]) -> EditResult:
        convert = CASE_CONVERTERS[CaseMode(mode)]
        with Transaction(self, f"all_{CaseMode(mode).value}") as tx:
            tx.commit([convert(line) for line in self.document])
        return tx.result()

    def _convert_line(self, number: int, mode: CaseMode) -> EditResult:
        label = mode.value
        index = line_index(self.document, number)
        if index is None:
            return self._reject(label, EditError.INVALID_INDEX, line=number)
        with Transaction(self, label) as tx:
            lines = list(self.document)
            lines[index] = CASE_CONVERTERS[mode](lines[index])
            tx.commit(lines)
        return tx.result()

    # -- queries --------------------------------------------------------

    def search(self, keyword: str) -> List[int]:
        return search_lines(self.document, keyword)

    def word_count(self) -> int:
        return word_count(self.document)

    def char_count(self) -> int:
        return char_count(self.document)

    def line_count(self) -> int:
        return self.document.line_count

    def stats(self) -> TextStats:
        return collect_stats(self.document)

    # -- history --------------------------------------------------------

    def undo(self) -> EditResult:
        return self._travel("undo", self.history.undo, EditError.NOTHING_TO_UNDO)

    def redo(self) -> EditResult:
        return self._travel("redo", self.history.redo, EditError.NOTHING_TO_REDO)

    def _travel(
        self,
        label: str,
        step: Callable[[Sequence[str]], Optional[HistoryEntry]],
        error: EditError,
    ) -> EditResult:
        with telemetry.span(
            f"editor::{label}", component="history", metadata={"buffer": self.name}
        ):
            entry = step(self.document.snapshot())
            if entry is None:
                return self._reject(label, error)
            self.document = self.document.replace(lines=entry.lines, dirty=True)
        return EditResult.success(
            label, version=self.document.version, message=entry.label
        )

    # -- cipher ---------------------------------------------------------

    def encrypt(self, password: SecretSource) -> EditResult:
        """XOR every line with a keystream derived from ``password``.

        The password is scrubbed before this returns, whatever the outcome.
        """

        with scoped_secret(password) as secret:
            if not secret:
                return self._reject("encrypt", EditError.EMPTY_PASSWORD)
            with Transaction(self, "encrypt") as tx:
                tx.commit([transform_line(line, secret) for line in self.document])
        return tx.result()

    def decrypt(self, password: SecretSource) -> EditResult:
        """Reverse :meth:`encrypt`, accepting the result only if it is printable.

        The candidate is built from a local copy; when it contains anything
        non-printable the call is a no-op (nothing recorded, redo history
        kept). Printability is a heuristic: a wrong password can slip through
        on short or patterned lines.
        """

        with scoped_secret(password) as secret:
            if not secret:
                return self._reject("decrypt", EditError.EMPTY_PASSWORD)
            backup = self.document.snapshot()
            candidate = [transform_line(line, secret) for line in backup]
        if not is_printable(candidate):
            return self._reject("decrypt", EditError.DECRYPTION_VERIFICATION_FAILED)
        with Transaction(self, "decrypt") as tx:
            tx.commit(candidate)
        return tx.result()

    # -- persistence hooks ----------------------------------------------

    def load_lines(
        self, lines: Iterable[str], *, path: Optional[str] = None
    ) -> EditResult:
        """Replace the content with freshly loaded lines (undoable, clean)."""

        with Transaction(self, "load") as tx:
            tx.commit([str(line) for line in lines], dirty=False)
        if path is not None:
            self._path = str(path)
        return tx.result()

    def mark_saved(self, path: Optional[str] = None) -> None:
        self.document.mark(dirty=False)
        if path is not None:
            self._path = str(path)

    def load_file(self, path: Union[str, Path]) -> EditResult:
        try:
            lines = files.read_lines(path)
        except (OSError, UnicodeError) as exc:
            return self._reject("load", EditError.IO_ERROR, message=str(exc))
        result = self.load_lines(lines, path=str(path))
        telemetry.record_event(
            "editor.load",
            data={"buffer": self.name, "path": str(path), "lines": len(lines)},
        )
        return result

    def save_file(self, path: Union[str, Path, None] = None) -> EditResult:
        target = str(path) if path is not None else self._path
        if not target:
            return self._reject("save", EditError.NO_FILE_PATH)
        try:
            written = files.write_lines(target, self.document)
        except (OSError, UnicodeError) as exc:
            return self._reject("save", EditError.IO_ERROR, message=str(exc))
        self.mark_saved(target)
        telemetry.record_event(
            "editor.save", data={"buffer": self.name, "path": target, "lines": written}
        )
        return EditResult.success("save", version=self.document.version, message=target)

    def _reject(
        self,
        label: str,
        error: EditError,
        *,
        message: Optional[str] = None,
        line: Optional[int] = None,
    ) -> EditResult:
        data: Dict[str, object] = {"buffer": self.name, "error": error.value}
        if line is not None:
            data["line"] = line
        telemetry.record_event(f"editor.{label}.rejected", level="warning", data=data)
        return EditResult.failure(
            label, error, version=self.document.version, message=message
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Snapshot-then-swap unit of work for one editor mutation.

    The pre-edit lines are captured on entry; :meth:`commit` records them in
    the history and installs the new value in one step. Leaving the block
    without committing changes nothing.
    """

    def __init__(self, editor: TextEditor, label: str) -> None:
        self.editor = editor
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Tuple[str, ...] = ()

    def __enter__(self) -> "Transaction":
        self._before = self.editor.document.snapshot()
        self._span_cm = telemetry.span(
            name=f"editor::{self.label}",
            component=True,
            metadata={"buffer": self.editor.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, lines: Iterable[str], *, dirty: bool = True) -> None:
        self.editor.history.record(self._before, label=self.label)
        self.editor.document = self.editor.document.replace(lines=lines, dirty=dirty)

    def result(self) -> EditResult:
        return EditResult.success(self.label, version=self.editor.document.version)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
