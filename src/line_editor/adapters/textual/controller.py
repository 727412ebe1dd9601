"""Textual-free adapter translating input-box submissions into session calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from line_editor.buffer import BufferView
from line_editor.shell.session import CommandResult, EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    update_status: Callable[[str], None] = _noop
    request_exit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


def render_lines(view: BufferView) -> str:
    """Number the visible lines the way hosts display them (1-based)."""

    if not view.lines:
        return "(empty buffer)"
    width = len(str(view.active_count))
    return "\n".join(
        f"{number:>{width}} | {line}" for number, line in enumerate(view.lines, start=1)
    )


class TextualEditorAdapter:
    """Bridges an :class:`EditorSession` to a Textual-friendly surface."""

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._refresh_buffer()
        self.hooks.update_status(self._idle_status())

    def submit(self, command_line: str) -> CommandResult:
        self._log_state("command ->", command=command_line)
        result = self.session.dispatch(command_line)
        self._log_state("result <-", ok=result.ok, status=result.status)

        self.hooks.update_status(result.message or result.status)
        self._refresh_buffer()
        if result.quit:
            self.hooks.request_exit()
        return result

    def _idle_status(self) -> str:
        return (
            "insert <text> | delete <n> | search <n> <word> | save | load | quit"
        )

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.buffer.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "buffer": buffer.name,
            "version": buffer.version,
            "lines": f"{buffer.active_count}/{buffer.capacity}",
            "file": self.session.file_path,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "render_lines"]
