"""Bridge between the standard :mod:`logging` package and the rolling writer."""

from __future__ import annotations

import logging
from typing import Optional

from .config import RollingConfig
from .writer import RollingWriter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class RollingLogHandler(logging.Handler):
    """Write formatted log records into a :class:`RollingWriter`.

    The handler owns the writer unless one is passed in explicitly, in which
    case closing the handler leaves the writer open.
    """

    terminator = "\n"

    def __init__(
        self,
        config: Optional[RollingConfig] = None,
        *,
        writer: Optional[RollingWriter] = None,
        encoding: str = "utf-8",
    ) -> None:
        # Open the writer first so a failed open leaves no half-built handler.
        self._owns_writer = writer is None
        self.writer = writer or RollingWriter(config)
        self.encoding = encoding
        super().__init__()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record) + self.terminator
            self.writer.write(msg.encode(self.encoding, errors="backslashreplace"))
        except Exception:  # noqa: PIE786 - standard logging pattern
            self.handleError(record)

    def close(self) -> None:
        try:
            if self._owns_writer:
                self.writer.close()
        finally:
            super().close()


def configure_logging(
    verbose: bool,
    config: Optional[RollingConfig] = None,
    *,
    console: bool = True,
) -> RollingLogHandler:
    """Route root logging into a rolling log file and, optionally, the console."""

    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        root.addHandler(stream_handler)

    file_handler = RollingLogHandler(config)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return file_handler


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "RollingLogHandler", "configure_logging"]
