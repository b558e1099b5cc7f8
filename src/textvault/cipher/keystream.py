"""Password keystream derivation and the self-inverse XOR combine."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Union

from .secret import Secret, SecretSource, securely_clear

KeyBytes = Union[bytes, bytearray, memoryview]

# Ciphertext bytes that are not valid UTF-8 ride along as lone surrogates.
LINE_ENCODING = "utf-8"
LINE_ERRORS = "surrogateescape"


@contextmanager
def _password_bytes(password: SecretSource) -> Iterator[memoryview]:
    if isinstance(password, Secret):
        with password.view() as view:
            yield view
        return
    if isinstance(password, str):
        scratch = bytearray(password.encode("utf-8"))
        try:
            with memoryview(scratch) as view:
                yield view
        finally:
            securely_clear(scratch)
        return
    if isinstance(password, (bytes, bytearray)):
        with memoryview(password) as view:
            yield view
        return
    raise TypeError(f"unsupported password type: {type(password).__name__}")


def derive_keystream(password: SecretSource, length: int) -> bytes:
    """Return exactly ``length`` keystream bytes for ``password``.

    Block ``i`` (1-based) is the decimal text of ``len(password) * i``
    followed by the password bytes; blocks are concatenated until ``length``
    bytes exist and the tail is cut off. An empty password or a non-positive
    length yields ``b""``.
    """

    if length <= 0:
        return b""
    with _password_bytes(password) as pw:
        size = len(pw)
        if not size:
            return b""
        stream = bytearray()
        block = 1
        while len(stream) < length:
            stream += str(size * block).encode("ascii")
            stream += pw
            block += 1
    keystream = bytes(stream[:length])
    securely_clear(stream)
    return keystream


def combine(data: KeyBytes, key: KeyBytes) -> bytes:
    """XOR ``data`` byte-wise with ``key`` repeated cyclically.

    Applying the same key twice returns the input. An empty key is the
    identity.
    """

    size = len(key)
    if not size:
        return bytes(data)
    return bytes(byte ^ key[index % size] for index, byte in enumerate(data))


def line_bytes(line: str) -> bytes:
    """Encode a line the way the transform sees it."""

    return line.encode(LINE_ENCODING, LINE_ERRORS)


def transform_line(line: str, password: SecretSource) -> str:
    """Encrypt or decrypt one line over its UTF-8 bytes.

    The keystream is sized to the encoded length. Result bytes that do not
    form valid UTF-8 are kept as surrogate escapes, so the line round-trips
    through :func:`line_bytes` unchanged.
    """

    data = line_bytes(line)
    return combine(data, derive_keystream(password, len(data))).decode(
        LINE_ENCODING, LINE_ERRORS
    )


def display_text(line: str) -> str:
    """Return ``line`` with escaped ciphertext bytes shown as ``?``."""

    return line.encode(LINE_ENCODING, "replace").decode(LINE_ENCODING)


def is_printable(lines: Iterable[str]) -> bool:
    """Heuristic decrypt oracle: every character of every line is printable.

    A wrong password usually yields control characters somewhere, but short
    or patterned lines can still pass; this is not a cryptographic check.
    """

    return all(line.isprintable() for line in lines)


__all__ = [
    "LINE_ENCODING",
    "LINE_ERRORS",
    "combine",
    "derive_keystream",
    "display_text",
    "is_printable",
    "line_bytes",
    "transform_line",
]
