"""Line editor core with snapshot undo/redo and a password line cipher."""

__all__ = [
    "adapters",
    "buffer",
    "cipher",
    "commands",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
