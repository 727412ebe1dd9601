"""Fixed-capacity line buffer, its failures, and file persistence."""

from .buffer import BufferView, LineBuffer, OverflowPolicy
from .errors import (
    BufferFullError,
    BufferIOError,
    EmptyBufferError,
    IndexOutOfRangeError,
    InvalidLineError,
    LineBufferError,
    LineTooLongError,
)
from .persistence import DEFAULT_FILE, load_lines, save_lines
from .validation import ensure_line_number

__all__ = [
    "LineBuffer",
    "BufferView",
    "OverflowPolicy",
    "LineBufferError",
    "BufferFullError",
    "EmptyBufferError",
    "IndexOutOfRangeError",
    "LineTooLongError",
    "InvalidLineError",
    "BufferIOError",
    "DEFAULT_FILE",
    "save_lines",
    "load_lines",
    "ensure_line_number",
]
