"""Typed failures raised by :class:`~line_editor.buffer.LineBuffer`."""

from __future__ import annotations

from typing import Optional


class LineBufferError(RuntimeError):
    """Base class for every buffer failure a host is expected to recover from."""


class BufferFullError(LineBufferError):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Buffer is full: maximum of {capacity} lines reached")
        self.capacity = capacity


class EmptyBufferError(LineBufferError):
    def __init__(self) -> None:
        super().__init__("Buffer is empty")


class IndexOutOfRangeError(LineBufferError):
    """Raised for a line number outside ``[1, active_count]``."""

    def __init__(self, line_number: int, active_count: int) -> None:
        super().__init__(
            f"Nothing stored at line {line_number} (buffer holds {active_count})"
        )
        self.line_number = line_number
        self.active_count = active_count


class LineTooLongError(LineBufferError):
    def __init__(self, length: int, max_line_length: int) -> None:
        super().__init__(
            f"Line of {length} characters does not fit; "
            f"lines must be shorter than {max_line_length}"
        )
        self.length = length
        self.max_line_length = max_line_length


class InvalidLineError(LineBufferError):
    """Raised when a line would embed a line terminator."""

    def __init__(self, text: str) -> None:
        super().__init__("Lines cannot contain line terminators")
        self.text = text


class BufferIOError(LineBufferError):
    """Wraps an ``OSError`` (or decode failure) hit while saving or loading."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "LineBufferError",
    "BufferFullError",
    "EmptyBufferError",
    "IndexOutOfRangeError",
    "LineTooLongError",
    "InvalidLineError",
    "BufferIOError",
]
