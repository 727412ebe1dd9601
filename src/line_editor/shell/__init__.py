"""Menu-driven hosts for the line buffer."""

from .session import MENU, CommandResult, EditorSession, MenuEntry, parse_line_number

__all__ = ["CommandResult", "EditorSession", "MENU", "MenuEntry", "parse_line_number"]
