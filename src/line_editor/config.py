"""Editor dimensions and file settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from line_editor.buffer import DEFAULT_FILE, OverflowPolicy
from line_editor.runtime.telemetry import env


def _env_int(name: str) -> Optional[int]:
    raw = env(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"LINE_EDITOR_{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Settings for one editing session.

    ``capacity`` and ``max_line_length`` stay ``None`` until known; the
    console shell prompts for whatever is still missing.
    """

    capacity: Optional[int] = None
    max_line_length: Optional[int] = None
    file_path: str = DEFAULT_FILE
    overflow: OverflowPolicy = OverflowPolicy.REJECT

    @classmethod
    def from_env(cls) -> "EditorConfig":
        return cls(
            capacity=_env_int("CAPACITY"),
            max_line_length=_env_int("MAX_LINE_LENGTH"),
            file_path=env("FILE") or DEFAULT_FILE,
            overflow=OverflowPolicy((env("OVERFLOW") or "reject").lower()),
        ).validate()

    def with_overrides(self, **values: object) -> "EditorConfig":
        """Return a copy with every non-``None`` value applied."""

        changes = {key: value for key, value in values.items() if value is not None}
        if "overflow" in changes:
            changes["overflow"] = OverflowPolicy(changes["overflow"])
        return replace(self, **changes).validate()

    @property
    def complete(self) -> bool:
        return self.capacity is not None and self.max_line_length is not None

    def validate(self) -> "EditorConfig":
        if self.capacity is not None and self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}")
        if self.max_line_length is not None and self.max_line_length < 1:
            raise ValueError(
                f"max_line_length must be positive, got {self.max_line_length}"
            )
        if not self.file_path:
            raise ValueError("file_path must not be empty")
        return self


__all__ = ["EditorConfig"]
