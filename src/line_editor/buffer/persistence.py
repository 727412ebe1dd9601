"""Save and load a :class:`LineBuffer` to a flat newline-delimited file."""

from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import suppress
from typing import Optional, Union

from line_editor.runtime import telemetry

from .buffer import LineBuffer
from .errors import BufferIOError

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_FILE = "TextFile.txt"
ENCODING = "utf-8"


def save_lines(buffer: LineBuffer, path: PathLike = DEFAULT_FILE) -> int:
    """Overwrite ``path`` with the buffer content and return the line count.

    The payload is encoded up front and written to a sibling temporary file
    that replaces ``path`` only once fully written, so a failed save leaves
    the previous file intact.
    """

    target = os.fspath(path)
    lines = list(buffer.iter_serialized())
    temp_path: Optional[str] = None
    try:
        payload = "".join(lines).encode(ENCODING)
        directory = os.path.dirname(os.path.abspath(target))
        with tempfile.NamedTemporaryFile(
            "wb", dir=directory, prefix=".line_editor-", delete=False
        ) as handle:
            temp_path = handle.name
            handle.write(payload)
        with suppress(FileNotFoundError):
            shutil.copymode(target, temp_path)
        os.replace(temp_path, target)
        temp_path = None
    except (OSError, UnicodeError) as exc:
        telemetry.record_event(
            "persistence.save_failed",
            level="error",
            data={"path": target, "reason": str(exc)},
        )
        raise BufferIOError(f"Failed to write {target}: {exc}", path=target) from exc
    finally:
        if temp_path is not None:
            with suppress(OSError):
                os.remove(temp_path)

    telemetry.record_event(
        "persistence.saved", data={"path": target, "lines": len(lines)}
    )
    return len(lines)


def load_lines(buffer: LineBuffer, path: PathLike = DEFAULT_FILE) -> int:
    """Replace the buffer content with ``path``; the buffer is untouched on failure."""

    target = os.fspath(path)
    try:
        with open(target, "r", encoding=ENCODING) as handle:
            count = buffer.deserialize(handle)
    except OSError as exc:
        telemetry.record_event(
            "persistence.load_failed",
            level="error",
            data={"path": target, "reason": str(exc)},
        )
        raise BufferIOError(f"Failed to open {target} for reading: {exc}", path=target) from exc
    except BufferIOError as exc:
        exc.path = target
        raise

    telemetry.record_event("persistence.loaded", data={"path": target, "lines": count})
    return count


__all__ = ["DEFAULT_FILE", "save_lines", "load_lines"]
