"""Single-slot rendezvous between the rotation scheduler and the writer."""

from __future__ import annotations

import threading
from typing import IO, Optional, Tuple

Delivery = Tuple[Optional[IO[bytes]], Optional[BaseException]]


class Handoff:
    """Carries freshly opened files and the terminal error to the writer.

    The scheduler side never blocks on the writer: a file that was published
    but not yet adopted is replaced (and closed) by the next one, so the
    writer always adopts the most recent day. The writer side polls without
    waiting; only the constructor waits, for the very first delivery.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._file: Optional[IO[bytes]] = None
        self._error: Optional[BaseException] = None
        self._shut = False
        self._finished = False

    # Scheduler side ---------------------------------------------------

    def publish(self, handle: IO[bytes]) -> bool:
        """Offer ``handle`` to the writer; ``False`` means the caller still owns it."""

        with self._cond:
            if self._shut:
                return False
            stale, self._file = self._file, handle
            self._cond.notify_all()
        if stale is not None:
            stale.close()
        return True

    def fail(self, error: BaseException) -> None:
        with self._cond:
            if self._shut or self._error is not None:
                return
            self._error = error
            self._cond.notify_all()

    def finish(self) -> None:
        with self._cond:
            self._finished = True
            self._cond.notify_all()

    # Writer side ------------------------------------------------------

    def poll(self) -> Delivery:
        """Take whatever is waiting, without blocking.

        If the scheduler holds the lock at this instant nothing is taken;
        the next call will pick the delivery up.
        """

        if not self._cond.acquire(blocking=False):
            return None, None
        try:
            return self._take()
        finally:
            self._cond.release()

    def wait_first(self, timeout: Optional[float] = None) -> Delivery:
        with self._cond:
            self._cond.wait_for(
                lambda: self._file is not None or self._error is not None or self._finished,
                timeout,
            )
            return self._take()

    def shutdown(self) -> Optional[IO[bytes]]:
        """Refuse further deliveries and hand back any unadopted file."""

        with self._cond:
            self._shut = True
            pending, self._file = self._file, None
            self._cond.notify_all()
            return pending

    def _take(self) -> Delivery:
        handle, error = self._file, self._error
        self._file = None
        self._error = None
        if error is not None and handle is not None:
            # A reported failure wins; the file it would have replaced is dropped.
            handle.close()
            handle = None
        return handle, error


__all__ = ["Handoff"]
