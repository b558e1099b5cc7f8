"""Reversible per-line transform keyed by a password."""

from .keystream import (
    combine,
    derive_keystream,
    display_text,
    is_printable,
    line_bytes,
    transform_line,
)
from .secret import Secret, scoped_secret, securely_clear

__all__ = [
    "Secret",
    "combine",
    "derive_keystream",
    "display_text",
    "is_printable",
    "line_bytes",
    "scoped_secret",
    "securely_clear",
    "transform_line",
]
