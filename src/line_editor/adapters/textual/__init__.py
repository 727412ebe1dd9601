"""Textual host for the line editor."""

from .controller import TextualEditorAdapter, TextualUIHooks, render_lines

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "render_lines"]
