"""Line storage for textvault buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple


@dataclass(slots=True)
class LineStore:
    """Ordered list of text lines, replaced wholesale on every edit.

    Callers never mutate ``_lines`` in place: :meth:`replace` returns a new
    store with a bumped version, so a half-applied edit can never be observed.
    """

    _lines: List[str] = field(default_factory=list)
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineStore":
        return cls(_lines=[str(line) for line in lines], version=0, dirty=False)

    def snapshot(self) -> Tuple[str, ...]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def replace(
        self, *, lines: Iterable[str], dirty: Optional[bool] = None
    ) -> "LineStore":
        """Return a new store with the provided lines and bumped version."""

        updated = LineStore(_lines=list(lines), version=self.version + 1)
        updated.dirty = bool(dirty if dirty is not None else self.dirty)
        return updated

    def mark(self, *, dirty: bool) -> None:
        self.dirty = dirty

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
