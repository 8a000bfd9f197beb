"""Exception types raised by the rolling log writer."""

from __future__ import annotations


class RollingLogError(Exception):
    """Base class for every error raised by :mod:`rollinglog`."""


class RotationError(RollingLogError):
    """A day's log file could not be prepared.

    ``kind`` is ``"mkdir"`` when the parent directory could not be created
    and ``"open"`` when the file itself could not be opened. The underlying
    :class:`OSError` is available as ``__cause__``.
    """

    def __init__(self, kind: str, path: str, message: str) -> None:
        super().__init__(f"{kind} failed for {path}: {message}")
        self.kind = kind
        self.path = path


class StreamClosedError(RollingLogError, ValueError):
    """Raised by writes issued after the writer was closed."""

    def __init__(self) -> None:
        super().__init__("write to closed rolling log")


__all__ = ["RollingLogError", "RotationError", "StreamClosedError"]
