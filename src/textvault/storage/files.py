"""Reading and writing line stores as plain text files."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Union

from textvault.cipher.keystream import LINE_ERRORS
from textvault.runtime import telemetry

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_ENCODING = telemetry.env("ENCODING", "utf-8") or "utf-8"


def read_lines(path: PathLike, *, encoding: Optional[str] = None) -> List[str]:
    """Return the file's lines without terminators.

    Only ``\\n`` ends a line; every other byte, ``\\r`` included, stays in the
    line so encrypted text survives a round trip. Undecodable bytes are kept
    as surrogate escapes. A trailing terminator does not add an empty last
    line. Raises ``OSError`` on failure.
    """

    with open(
        path, encoding=encoding or DEFAULT_ENCODING, errors=LINE_ERRORS, newline=""
    ) as fh:
        text = fh.read()
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def write_lines(
    path: PathLike, lines: Iterable[str], *, encoding: Optional[str] = None
) -> int:
    """Write every line followed by ``\\n``; returns the number of lines."""

    count = 0
    with open(
        path, "w", encoding=encoding or DEFAULT_ENCODING, errors=LINE_ERRORS, newline=""
    ) as fh:
        for line in lines:
            fh.write(line)
            fh.write("\n")
            count += 1
    return count


__all__ = ["DEFAULT_ENCODING", "read_lines", "write_lines"]
