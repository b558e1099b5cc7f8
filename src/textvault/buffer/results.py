"""Result values returned by fallible editor operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EditError(str, Enum):
    """Reason codes for a failed operation. None of them are fatal."""

    INVALID_INDEX = "invalid_index"
    EMPTY_PASSWORD = "empty_password"
    DECRYPTION_VERIFICATION_FAILED = "decryption_verification_failed"
    NOTHING_TO_UNDO = "nothing_to_undo"
    NOTHING_TO_REDO = "nothing_to_redo"
    NO_FILE_PATH = "no_file_path"
    IO_ERROR = "io_error"


_DEFAULT_MESSAGES = {
    EditError.INVALID_INDEX: "Invalid line number",
    EditError.EMPTY_PASSWORD: "Password cannot be empty",
    EditError.DECRYPTION_VERIFICATION_FAILED: "Failed to decrypt (wrong password?)",
    EditError.NOTHING_TO_UNDO: "Nothing to undo",
    EditError.NOTHING_TO_REDO: "Nothing to redo",
    EditError.NO_FILE_PATH: "No file selected",
    EditError.IO_ERROR: "File operation failed",
}


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of an editor operation; truthy when it succeeded."""

    ok: bool
    label: str
    error: Optional[EditError] = None
    message: Optional[str] = None
    version: int = 0

    @classmethod
    def success(
        cls, label: str, *, version: int, message: Optional[str] = None
    ) -> "EditResult":
        return cls(ok=True, label=label, message=message, version=version)

    @classmethod
    def failure(
        cls,
        label: str,
        error: EditError,
        *,
        version: int,
        message: Optional[str] = None,
    ) -> "EditResult":
        return cls(
            ok=False,
            label=label,
            error=error,
            message=message or _DEFAULT_MESSAGES[error],
            version=version,
        )

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["EditError", "EditResult"]
