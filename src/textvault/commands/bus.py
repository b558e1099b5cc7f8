"""Tiny synchronous event bus used by the command layer."""

from __future__ import annotations

from typing import Callable, Dict


class EventBus:
    """Minimal event bus letting the interpreter notify hosts."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)
