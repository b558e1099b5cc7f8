"""Short-lived password holders that scrub themselves."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Union

SecretSource = Union[str, bytes, bytearray, "Secret"]


def securely_clear(buffer: bytearray) -> None:
    """Overwrite every byte of ``buffer`` with zero, then empty it."""

    for index in range(len(buffer)):
        buffer[index] = 0
    buffer.clear()


class Secret:
    """Password bytes held in a mutable buffer so they can be wiped.

    ``str`` and ``bytes`` inputs are copied (their originals are immutable and
    outside our control); a ``bytearray`` is adopted as-is so the caller's own
    buffer is zeroed on :meth:`clear`.
    """

    __slots__ = ("_buffer",)

    def __init__(self, value: SecretSource) -> None:
        if isinstance(value, Secret):
            self._buffer = bytearray(value._buffer)
        elif isinstance(value, bytearray):
            self._buffer = value
        elif isinstance(value, bytes):
            self._buffer = bytearray(value)
        elif isinstance(value, str):
            self._buffer = bytearray(value.encode("utf-8"))
        else:
            raise TypeError(f"unsupported secret type: {type(value).__name__}")

    def __len__(self) -> int:
        return len(self._buffer)

    def __bool__(self) -> bool:
        return bool(self._buffer)

    def __repr__(self) -> str:
        return f"Secret(<{len(self._buffer)} bytes>)"

    def view(self) -> memoryview:
        """Zero-copy view over the secret bytes.

        Use it as a context manager: the buffer cannot be cleared while a
        view is still exported.
        """

        return memoryview(self._buffer)

    @property
    def cleared(self) -> bool:
        return not self._buffer

    def clear(self) -> None:
        securely_clear(self._buffer)

    def __del__(self) -> None:
        buffer = getattr(self, "_buffer", None)
        if buffer is not None:
            securely_clear(buffer)


@contextmanager
def scoped_secret(value: SecretSource) -> Iterator[Secret]:
    """Yield a :class:`Secret` that is scrubbed on every exit path."""

    secret = value if isinstance(value, Secret) else Secret(value)
    try:
        yield secret
    finally:
        secret.clear()


__all__ = ["Secret", "SecretSource", "scoped_secret", "securely_clear"]
