"""Interactive console menu around :class:`EditorSession`."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, Optional, Sequence, TextIO

from line_editor.config import EditorConfig
from line_editor.runtime import telemetry

from .session import MENU, CommandResult, EditorSession

InputFn = Callable[[str], str]


class ConsoleShell:
    """Numbered-menu loop reading from ``input_fn`` and writing to ``output``.

    End of input is treated as choosing *Quit*, so piping a script of
    answers into the program terminates cleanly.
    """

    def __init__(
        self,
        session: EditorSession,
        *,
        input_fn: Optional[InputFn] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.session = session
        self._input = input_fn or input
        self._out = output or sys.stdout
        self._actions: Dict[str, Callable[[], CommandResult]] = {
            "1": self._insert,
            "2": self._delete,
            "3": self._search,
            "4": self.session.save,
            "5": self.session.load,
            "6": self.session.quit,
        }

    def run(self) -> int:
        self._write("\n\n\nSTARTING INTERACTIVE MENU...")
        while True:
            self._print_menu()
            try:
                choice = self._input("\nEnter choice: ").strip()
                action = self._actions.get(choice)
                if action is None:
                    self._write("Invalid option. Try again...")
                    continue
                result = action()
            except EOFError:
                result = self.session.quit()
            except UnicodeDecodeError:
                result = CommandResult(
                    ok=False, status="input_error", message="Input error."
                )
            self._render(result)
            if result.quit:
                return 0

    def _insert(self) -> CommandResult:
        blocked = self.session.check_room()
        if blocked is not None:
            return blocked
        return self.session.insert(self._input("Enter text: "))

    def _delete(self) -> CommandResult:
        blocked = self.session.check_not_empty(action="delete")
        if blocked is not None:
            return blocked
        return self.session.delete(self._input("Enter line number to delete: "))

    def _search(self) -> CommandResult:
        blocked = self.session.check_not_empty(action="search")
        if blocked is not None:
            return blocked
        line_number = self._input("Enter line number to search in: ")
        word = self._input("Enter word to search for: ")
        return self.session.search(line_number, word)

    def _print_menu(self) -> None:
        self._write("\nChoose an option from below...\n")
        for entry in MENU:
            self._write(f"{entry.choice}. {entry.label}")

    def _render(self, result: CommandResult) -> None:
        if result.message:
            self._write(f"\n{result.message}")
        for line in result.lines:
            self._write(line)

    def _write(self, text: str) -> None:
        print(text, file=self._out)


def prompt_positive_int(
    prompt: str, *, input_fn: Optional[InputFn] = None, output: Optional[TextIO] = None
) -> int:
    """Ask until the answer parses as an integer >= 1."""

    out = output or sys.stdout
    ask = input_fn or input
    while True:
        raw = ask(prompt)
        try:
            value = int(raw.strip())
        except ValueError:
            print(f"'{raw.strip()}' is not a number.", file=out)
            continue
        if value < 1:
            print("Please enter a number greater than zero.", file=out)
            continue
        return value


def resolve_config(
    config: EditorConfig,
    *,
    input_fn: Optional[InputFn] = None,
    output: Optional[TextIO] = None,
) -> EditorConfig:
    """Fill in missing dimensions by prompting, in the classic order."""

    max_line_length = config.max_line_length
    if max_line_length is None:
        max_line_length = prompt_positive_int(
            "\nEnter the maximum length of a string: ", input_fn=input_fn, output=output
        )
    capacity = config.capacity
    if capacity is None:
        capacity = prompt_positive_int(
            "Enter the maximum number of strings the buffer can hold: ",
            input_fn=input_fn,
            output=output,
        )
    return config.with_overrides(capacity=capacity, max_line_length=max_line_length)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit a bounded buffer of text lines from a numbered menu."
    )
    parser.add_argument(
        "--capacity",
        type=int,
        help="Maximum number of lines (env: LINE_EDITOR_CAPACITY; prompted if unset)",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        help="Lines must be shorter than this (env: LINE_EDITOR_MAX_LINE_LENGTH)",
    )
    parser.add_argument(
        "--file",
        dest="file_path",
        help="File used by save/load (env: LINE_EDITOR_FILE, default: TextFile.txt)",
    )
    parser.add_argument(
        "--overflow",
        choices=("reject", "truncate"),
        help="Policy for lines that are too long (env: LINE_EDITOR_OVERFLOW)",
    )
    parser.add_argument(
        "--ui",
        choices=("console", "textual"),
        default="console",
        help="Host to run (default: console)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        help="Telemetry preset; by default logs stay off the console",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    else:
        telemetry.configure(console=False)

    try:
        config = EditorConfig.from_env().with_overrides(
            capacity=args.capacity,
            max_line_length=args.max_line_length,
            file_path=args.file_path,
            overflow=args.overflow,
        )
    except ValueError as exc:
        print(f"line-editor: {exc}", file=sys.stderr)
        return 2

    try:
        config = resolve_config(config)
    except (EOFError, KeyboardInterrupt):
        return 0

    if args.ui == "textual":
        from line_editor.adapters.textual.app import run_app

        return run_app(EditorSession.from_config(config))

    shell = ConsoleShell(EditorSession.from_config(config))
    try:
        return shell.run()
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
