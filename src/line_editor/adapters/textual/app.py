"""Executable Textual app that hosts an editing session."""

from __future__ import annotations

try:  # pragma: no cover - imported only when the Textual host is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.buffer import BufferView
from line_editor.runtime import telemetry
from line_editor.shell.session import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks, render_lines


class LineEditorApp(App[int]):
    """Buffer view, status line and a command input box."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("line_editor.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder="insert <text>", id="command-input")
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"line-editor - {self.session.file_path}"
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            request_exit=lambda: self.exit(0),
            log=self.logger.debug,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        self.query_one("#command-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is None:
            return
        self.adapter.submit(event.value)
        event.input.value = ""

    def _update_buffer(self, view: BufferView) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_lines(view))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def run_app(session: EditorSession) -> int:
    app = LineEditorApp(session)
    code = app.run()
    return code or 0
