"""Snapshot-based undo/redo history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Full copy of the line store taken before the labelled edit ran."""

    label: str
    lines: Tuple[str, ...]


class HistoryManager:
    """Linear undo/redo over two stacks of full snapshots.

    Recording a new snapshot drops every redo entry, so redo only walks an
    unbroken chain of undos. Depth is unbounded.
    """

    def __init__(self) -> None:
        self._undo: List[HistoryEntry] = []
        self._redo: List[HistoryEntry] = []

    def record(self, lines: Sequence[str], *, label: str) -> HistoryEntry:
        entry = HistoryEntry(label=label, lines=tuple(lines))
        self._undo.append(entry)
        self._redo.clear()
        return entry

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self, current: Sequence[str]) -> Optional[HistoryEntry]:
        """Pop the newest snapshot, parking ``current`` on the redo stack."""

        if not self.can_undo():
            return None
        entry = self._undo.pop()
        self._redo.append(HistoryEntry(label=entry.label, lines=tuple(current)))
        return entry

    def redo(self, current: Sequence[str]) -> Optional[HistoryEntry]:
        """Pop the newest redo snapshot, parking ``current`` on the undo stack."""

        if not self.can_redo():
            return None
        entry = self._redo.pop()
        self._undo.append(HistoryEntry(label=entry.label, lines=tuple(current)))
        return entry

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
