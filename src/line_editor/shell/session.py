"""Host-independent editing session: the six menu actions over one buffer."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional, Tuple

from line_editor.buffer import (
    BufferIOError,
    LineBuffer,
    LineBufferError,
    load_lines,
    save_lines,
)
from line_editor.config import EditorConfig
from line_editor.runtime import telemetry
from line_editor.search import NOT_FOUND, find


@dataclass(slots=True)
class CommandResult:
    """Outcome of one session action, rendered by whichever host runs it."""

    ok: bool
    status: str
    message: str = ""
    lines: Tuple[str, ...] = ()
    quit: bool = False


@dataclass(frozen=True, slots=True)
class MenuEntry:
    choice: str
    command: str
    label: str


MENU: Tuple[MenuEntry, ...] = (
    MenuEntry("1", "insert", "Insert text line into buffer"),
    MenuEntry("2", "delete", "Delete text line from buffer"),
    MenuEntry("3", "search", "Search word in text line"),
    MenuEntry("4", "save", "Push buffer contents to file"),
    MenuEntry("5", "load", "Read from file"),
    MenuEntry("6", "quit", "Quit program"),
)


def parse_line_number(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"'{raw.strip()}' is not a line number") from exc


def _failure(status: str, error: Exception) -> CommandResult:
    return CommandResult(ok=False, status=status, message=str(error))


@dataclass
class EditorSession:
    """Owns the buffer for one run and turns requests into ``CommandResult``s.

    Nothing here prints or prompts; the console shell and the Textual adapter
    decide how results reach the user.
    """

    buffer: LineBuffer
    file_path: str

    @classmethod
    def from_config(cls, config: EditorConfig) -> "EditorSession":
        capacity, max_line_length = config.capacity, config.max_line_length
        if capacity is None or max_line_length is None:
            raise ValueError("capacity and max_line_length are required")
        buffer = LineBuffer(capacity, max_line_length, overflow=config.overflow)
        return cls(buffer=buffer, file_path=config.file_path)

    def check_room(self) -> Optional[CommandResult]:
        """Return the failure ``insert`` would produce, before asking for text."""

        if self.buffer.is_full():
            return CommandResult(
                ok=False,
                status="buffer_full",
                message="Buffer overflow error : maximum number of lines reached.",
            )
        return None

    def check_not_empty(self, *, action: str) -> Optional[CommandResult]:
        if self.buffer.is_empty():
            message = (
                "Buffer underflow error : cannot delete from empty buffer."
                if action == "delete"
                else "Buffer is empty."
            )
            return CommandResult(ok=False, status="buffer_empty", message=message)
        return None

    def insert(self, text: str) -> CommandResult:
        blocked = self.check_room()
        if blocked is not None:
            return blocked
        try:
            line_number = self.buffer.insert(text)
        except LineBufferError as exc:
            return _failure("insert_error", exc)
        return CommandResult(
            ok=True,
            status="inserted",
            message=f"Text entered successfully at line {line_number}!",
        )

    def delete(self, raw_line_number: str) -> CommandResult:
        blocked = self.check_not_empty(action="delete")
        if blocked is not None:
            return blocked
        try:
            line_number = parse_line_number(raw_line_number)
            self.buffer.delete(line_number)
        except ValueError as exc:
            return _failure("invalid_number", exc)
        except LineBufferError as exc:
            return _failure("delete_error", exc)
        return CommandResult(
            ok=True,
            status="deleted",
            message=f"Line {line_number} deleted successfully!",
        )

    def search(self, raw_line_number: str, word: str) -> CommandResult:
        """Search ``word`` in one line; positions are reported 1-based."""

        blocked = self.check_not_empty(action="search")
        if blocked is not None:
            return blocked
        try:
            line = self.buffer.get(parse_line_number(raw_line_number))
        except ValueError as exc:
            return _failure("invalid_number", exc)
        except LineBufferError as exc:
            return _failure("search_error", exc)

        with telemetry.span("search::find", metadata={"pattern_length": len(word)}):
            position = find(line, word)
        if position == NOT_FOUND:
            return CommandResult(
                ok=True,
                status="not_found",
                message="Word was not found in the given line.",
            )
        return CommandResult(
            ok=True,
            status="found",
            message=(
                f"Word was found starting at position {position + 1} "
                "in the given line."
            ),
        )

    def save(self) -> CommandResult:
        try:
            save_lines(self.buffer, self.file_path)
        except BufferIOError as exc:
            return _failure("io_error", exc)
        return CommandResult(
            ok=True,
            status="saved",
            message="Buffer written to file successfully!",
            lines=tuple(self.buffer.serialize()),
        )

    def load(self) -> CommandResult:
        try:
            count = load_lines(self.buffer, self.file_path)
        except BufferIOError as exc:
            return _failure("io_error", exc)
        except LineBufferError as exc:
            return _failure("load_error", exc)
        return CommandResult(
            ok=True,
            status="loaded",
            message=f"Read {count} line(s) from {self.file_path}.",
            lines=tuple(self.buffer.serialize()),
        )

    def quit(self) -> CommandResult:
        return CommandResult(
            ok=True, status="quit", message="Goodbye!~ QUITTING PROGRAM...", quit=True
        )

    def dispatch(self, command_line: str) -> CommandResult:
        """Run a one-line command such as ``insert hello`` or ``search 2 lo``.

        Only the command name is trimmed; everything after the single space
        that follows it reaches the handler verbatim.
        """

        text = command_line.lstrip()
        if not text.strip():
            return CommandResult(ok=False, status="command_empty")
        name, _, rest = text.partition(" ")
        name = name.rstrip()
        handler = _COMMAND_HANDLERS.get(name.lower())
        if handler is None:
            return CommandResult(
                ok=False,
                status="command_error",
                message=f"Invalid option '{name}'. Try again...",
            )
        return handler(self, rest)


def _handle_insert(session: EditorSession, rest: str) -> CommandResult:
    return session.insert(rest)


def _handle_delete(session: EditorSession, rest: str) -> CommandResult:
    return session.delete(rest)


def _handle_search(session: EditorSession, rest: str) -> CommandResult:
    line_number, _, word = rest.lstrip().partition(" ")
    return session.search(line_number, word)


def _handle_simple(session: EditorSession, rest: str, *, action: str) -> CommandResult:
    del rest
    return getattr(session, action)()


_COMMAND_HANDLERS: Dict[str, Callable[[EditorSession, str], CommandResult]] = {
    "insert": _handle_insert,
    "i": _handle_insert,
    "delete": _handle_delete,
    "d": _handle_delete,
    "search": _handle_search,
    "s": _handle_search,
    "save": partial(_handle_simple, action="save"),
    "w": partial(_handle_simple, action="save"),
    "load": partial(_handle_simple, action="load"),
    "e": partial(_handle_simple, action="load"),
    "quit": partial(_handle_simple, action="quit"),
    "q": partial(_handle_simple, action="quit"),
}


__all__ = ["CommandResult", "EditorSession", "MENU", "MenuEntry", "parse_line_number"]
