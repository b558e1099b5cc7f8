"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Optional

from .document import LineStore


def line_index(document: LineStore, number: int) -> Optional[int]:
    """Map a 1-based line number to a list index, or ``None`` if out of range."""

    if number < 1 or number > document.line_count:
        return None
    return number - 1
