"""Create the directory for a log file and open it for appending."""

from __future__ import annotations

import io
import os

from .errors import RotationError


def ensure_parent_directory(path: str, dir_mode: int) -> None:
    """Create every missing ancestor of ``path`` with ``dir_mode``.

    :func:`os.makedirs` only applies its mode to the last directory, so the
    missing levels are created one by one from the top down.
    """

    parent = os.path.dirname(path)
    missing = []
    current = parent
    while current and not os.path.isdir(current):
        missing.append(current)
        head = os.path.dirname(current)
        if head == current:
            break
        current = head

    for directory in reversed(missing):
        try:
            os.mkdir(directory, dir_mode)
        except FileExistsError as exc:
            if not os.path.isdir(directory):
                raise RotationError("mkdir", directory, exc.strerror or str(exc)) from exc
        except OSError as exc:
            raise RotationError("mkdir", directory, exc.strerror or str(exc)) from exc


def open_log_file(path: str, *, file_mode: int, dir_mode: int) -> io.FileIO:
    """Return an unbuffered append-only handle on ``path``.

    Missing parent directories are created with ``dir_mode``; a new file is
    created with ``file_mode``. Existing files are appended to, never
    truncated, so restarting a process on the same day keeps earlier output.
    """

    def _opener(name: str, flags: int) -> int:
        return os.open(name, flags, file_mode)

    ensure_parent_directory(path, dir_mode)
    try:
        handle = open(path, "ab", buffering=0, opener=_opener)
    except OSError as exc:
        raise RotationError("open", path, exc.strerror or str(exc)) from exc
    return handle


__all__ = ["ensure_parent_directory", "open_log_file"]
