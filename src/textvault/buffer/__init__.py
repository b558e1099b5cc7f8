"""Line store, undo/redo history, and the editor façade."""

from .document import LineStore
from .editor import TextEditor, Transaction
from .history import HistoryEntry, HistoryManager
from .results import EditError, EditResult
from .text import CaseMode, TextStats
from .validation import line_index

__all__ = [
    "CaseMode",
    "EditError",
    "EditResult",
    "HistoryEntry",
    "HistoryManager",
    "LineStore",
    "TextEditor",
    "TextStats",
    "Transaction",
    "line_index",
]
