"""Validation helpers shared by buffer operations."""

from __future__ import annotations

from .errors import IndexOutOfRangeError, InvalidLineError

_TERMINATORS = ("\n", "\r")


def ensure_line_number(line_number: int, active_count: int) -> int:
    """Return the 0-based index for a 1-based ``line_number``."""

    if line_number < 1 or line_number > active_count:
        raise IndexOutOfRangeError(line_number, active_count)
    return line_number - 1


def ensure_single_line(text: str) -> str:
    if any(terminator in text for terminator in _TERMINATORS):
        raise InvalidLineError(text)
    return text


def strip_terminator(raw: str) -> str:
    """Drop one trailing ``\\n``, ``\\r\\n`` or bare ``\\r`` if present."""

    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith(("\n", "\r")):
        return raw[:-1]
    return raw
