"""Persistence helpers that feed and drain the editor's line store."""

from .files import DEFAULT_ENCODING, read_lines, write_lines

__all__ = ["DEFAULT_ENCODING", "read_lines", "write_lines"]
