"""The byte sink callers write to; it follows the scheduler's daily files."""

from __future__ import annotations

import logging
import threading
from typing import IO, Optional

from .clock import Clock, SystemClock
from .config import Capture, RollingConfig
from .errors import RollingLogError, StreamClosedError
from .formatter import PathFormatter, build_formatter
from .handoff import Handoff
from .redirect import Redirector, StandardStream, default_redirector
from .scheduler import RotationScheduler

LOGGER = logging.getLogger("rollinglog")

# Upper bound for waiting on the scheduler thread during close().
JOIN_TIMEOUT = 5.0

_CAPTURED_STREAMS = (
    (Capture.STDOUT, StandardStream.STDOUT),
    (Capture.STDERR, StandardStream.STDERR),
)


class RollingWriter:
    """Write bytes to a log file that changes every day.

    Construction blocks until the first day's file is open and raises the
    :class:`~rollinglog.errors.RotationError` if it cannot be. Afterwards a
    background :class:`~rollinglog.scheduler.RotationScheduler` opens a new
    file at each local midnight. New files are adopted lazily: each
    :meth:`write` first checks, without waiting, whether a newer file or a
    rotation failure has been delivered. A writer that stays idle across
    midnight keeps its old file until the next write.

    Rotation failures and :meth:`close` are sticky: every later write raises
    the same error. Ordinary ``OSError``\\ s from the file write are passed
    through and are not remembered.

    ``write`` and ``close`` serialise on an internal lock, so one writer can
    be shared between threads.
    """

    def __init__(
        self,
        config: Optional[RollingConfig] = None,
        *,
        clock: Optional[Clock] = None,
        redirector: Optional[Redirector] = None,
        formatter: Optional[PathFormatter] = None,
    ) -> None:
        self.config = config or RollingConfig()
        self.redirect_error: Optional[OSError] = None
        self._redirector = redirector or default_redirector()
        self._lock = threading.Lock()
        self._file: Optional[IO[bytes]] = None
        self._fault: Optional[BaseException] = None
        self._closed = False
        self._handoff = Handoff()
        self._scheduler = RotationScheduler(
            template=self.config.path_template,
            formatter=formatter or build_formatter(self.config.layout),
            file_mode=self.config.file_mode,
            dir_mode=self.config.dir_mode,
            tz=self.config.tzinfo,
            clock=clock or SystemClock(),
            handoff=self._handoff,
        )
        self._scheduler.start()

        handle, error = self._handoff.wait_first()
        if handle is None:
            self._stop_scheduler()
            raise error or RollingLogError("rotation stopped before a log file was opened")
        self._adopt(handle)
        LOGGER.debug("Rolling log opened at %s", self.path)

    # File-like API ----------------------------------------------------

    def write(self, data: bytes) -> int:
        if isinstance(data, str):
            raise TypeError("write() argument must be a bytes-like object, not 'str'")
        with self._lock:
            self._refresh()
            if self._fault is not None:
                # Drop the frames of earlier raises; they would pin every caller's data.
                raise self._fault.with_traceback(None)
            if self._file is None:
                raise StreamClosedError()
            return self._file.write(data)

    def flush(self) -> None:
        """Writes are unbuffered; kept for file-like callers."""

    def writable(self) -> bool:
        return not self._closed

    def fileno(self) -> int:
        with self._lock:
            if self._file is None:
                raise StreamClosedError()
            return self._file.fileno()

    def close(self) -> None:
        if self._closed:
            return
        LOGGER.debug("Closing rolling log %s", self.path)
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._fault = StreamClosedError()
            handle, self._file = self._file, None
            pending = self._handoff.shutdown()
            self._scheduler.stop()
            for stale in (pending, handle):
                if stale is not None:
                    stale.close()
        self._scheduler.join(JOIN_TIMEOUT)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def path(self) -> Optional[str]:
        """Path of the file currently written to, ``None`` once closed."""

        handle = self._file
        return getattr(handle, "name", None) if handle is not None else None

    @property
    def scheduler(self) -> RotationScheduler:
        return self._scheduler

    def __enter__(self) -> "RollingWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else self.path
        return f"<RollingWriter {state}>"

    # Internal helpers -------------------------------------------------

    def _refresh(self) -> None:
        if self._fault is not None:
            return
        handle, error = self._handoff.poll()
        if error is not None:
            self._fault = error
        elif handle is not None:
            self._adopt(handle)

    def _adopt(self, handle: IO[bytes]) -> None:
        previous, self._file = self._file, handle
        if previous is not None:
            previous.close()
        for flag, stream in _CAPTURED_STREAMS:
            if self.config.capture & flag:
                try:
                    self._redirector.redirect(handle, stream)
                except OSError as exc:
                    self.redirect_error = exc

    def _stop_scheduler(self) -> None:
        pending = self._handoff.shutdown()
        self._scheduler.stop()
        if pending is not None:
            pending.close()
        self._scheduler.join(JOIN_TIMEOUT)


__all__ = ["RollingWriter"]
