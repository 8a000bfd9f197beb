"""Point the process's standard output/error descriptors at a log file."""

from __future__ import annotations

import enum
import os
import sys
from typing import IO, Protocol


class StandardStream(enum.Enum):
    STDOUT = 1
    STDERR = 2

    @property
    def fileno(self) -> int:
        return self.value

    def python_stream(self) -> IO[str] | None:
        return sys.stdout if self is StandardStream.STDOUT else sys.stderr


class Redirector(Protocol):
    def redirect(self, source: IO[bytes], target: StandardStream) -> None:
        """Make ``target``'s descriptor refer to the same open file as ``source``."""


class DescriptorRedirector:
    """Duplicate the log file's descriptor onto descriptor 1 or 2.

    This is process wide and cannot be undone: anything written to the
    standard stream afterwards, from any thread or child process that
    inherits it, ends up in the log file.
    """

    def redirect(self, source: IO[bytes], target: StandardStream) -> None:
        stream = target.python_stream()
        if stream is not None:
            # Text still buffered in Python belongs to the previous target.
            try:
                stream.flush()
            except (OSError, ValueError):
                pass
        os.dup2(source.fileno(), target.fileno)


class NullRedirector:
    """Used where descriptors cannot be duplicated; capture is disabled."""

    def redirect(self, source: IO[bytes], target: StandardStream) -> None:
        return None


def default_redirector() -> Redirector:
    if os.name == "posix":
        return DescriptorRedirector()
    return NullRedirector()


__all__ = [
    "DescriptorRedirector",
    "NullRedirector",
    "Redirector",
    "StandardStream",
    "default_redirector",
]
