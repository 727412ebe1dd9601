"""Fixed-capacity line buffer with stable compaction on delete."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Sequence

from line_editor.runtime import telemetry

from .errors import (
    BufferFullError,
    BufferIOError,
    EmptyBufferError,
    IndexOutOfRangeError,
    LineTooLongError,
)
from .validation import ensure_line_number, ensure_single_line, strip_terminator


class OverflowPolicy(str, Enum):
    """What happens to a line that does not fit in ``max_line_length``."""

    REJECT = "reject"
    TRUNCATE = "truncate"


@dataclass(frozen=True, slots=True)
class BufferView:
    version: int
    lines: Sequence[str]
    capacity: int
    max_line_length: int

    @property
    def active_count(self) -> int:
        return len(self.lines)


class LineBuffer:
    """Ordered, bounded sequence of text lines.

    Line numbers handed in and out are 1-based; storage is a plain list so
    ``lines[0:active_count]`` is always exactly the visible content. A stored
    line holds at most ``max_line_length - 1`` characters, the last slot of
    each row being reserved for the terminator in the persisted form.

    Every method either applies completely or raises a
    :class:`~line_editor.buffer.errors.LineBufferError` without touching
    state.
    """

    def __init__(
        self,
        capacity: int,
        max_line_length: int,
        *,
        overflow: OverflowPolicy | str = OverflowPolicy.REJECT,
        name: str = "default",
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {max_line_length}")
        self._capacity = capacity
        self._max_line_length = max_line_length
        self._overflow = OverflowPolicy(overflow)
        self._lines: List[str] = []
        self.name = name
        self.version = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def max_line_length(self) -> int:
        return self._max_line_length

    @property
    def overflow(self) -> OverflowPolicy:
        return self._overflow

    @property
    def active_count(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def is_full(self) -> bool:
        return len(self._lines) >= self._capacity

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._lines))

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.version,
            lines=tuple(self._lines),
            capacity=self._capacity,
            max_line_length=self._max_line_length,
        )

    def insert(self, text: str) -> int:
        """Append ``text`` as the last line and return its line number."""

        if self.is_full():
            self._reject("buffer.full", capacity=self._capacity)
            raise BufferFullError(self._capacity)
        line = self._fit(ensure_single_line(text))

        with self._span("insert") as handle:
            self._lines.append(line)
            self.version += 1
            handle.add_metadata("line_number", len(self._lines))
        return len(self._lines)

    def delete(self, line_number: int) -> None:
        """Remove ``line_number`` and shift every later line up by one."""

        if self.is_empty():
            self._reject("buffer.empty", line_number=line_number)
            raise EmptyBufferError()
        index = self._index(line_number)

        with self._span("delete") as handle:
            del self._lines[index]
            self.version += 1
            handle.add_metadata("line_number", line_number)

    def get(self, line_number: int) -> str:
        return self._lines[self._index(line_number)]

    def serialize(self) -> List[str]:
        """Return the visible lines in order, without terminators."""

        return list(self._lines)

    def iter_serialized(self) -> Iterator[str]:
        """Yield the persisted form: every line newline-terminated."""

        for line in tuple(self._lines):
            yield f"{line}\n"

    def deserialize(self, source: Iterable[str]) -> int:
        """Replace the content with up to ``capacity`` lines from ``source``.

        Reading stops at the end of ``source`` or once the buffer is full,
        whichever comes first. Returns the new ``active_count``.
        """

        staged: List[str] = []
        iterator = iter(source)
        try:
            while len(staged) < self._capacity:
                try:
                    raw = next(iterator)
                except StopIteration:
                    break
                staged.append(self._fit(ensure_single_line(strip_terminator(raw))))
        except (OSError, UnicodeDecodeError) as exc:
            self._reject("buffer.read_failed", reason=str(exc))
            raise BufferIOError(f"Could not read lines: {exc}") from exc

        with self._span("deserialize") as handle:
            self._lines = staged
            self.version += 1
            handle.add_metadata("active_count", len(staged))
        return len(staged)

    def _index(self, line_number: int) -> int:
        try:
            return ensure_line_number(line_number, len(self._lines))
        except IndexOutOfRangeError:
            self._reject("buffer.out_of_range", line_number=line_number)
            raise

    def _fit(self, text: str) -> str:
        limit = self._max_line_length - 1
        if len(text) <= limit:
            return text
        if self._overflow is OverflowPolicy.TRUNCATE:
            telemetry.record_event(
                "buffer.truncated",
                level="debug",
                data={"buffer": self.name, "length": len(text), "kept": limit},
            )
            return text[:limit]
        self._reject("buffer.line_too_long", length=len(text))
        raise LineTooLongError(len(text), self._max_line_length)

    def _span(self, label: str):
        return telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name},
        )

    def _reject(self, event: str, **data: object) -> None:
        telemetry.record_event(
            event, level="warning", data={"buffer": self.name, **data}
        )
