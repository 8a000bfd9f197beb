"""Background thread that opens a new log file at every local midnight."""

from __future__ import annotations

import enum
import threading
from datetime import tzinfo
from typing import Optional

from .clock import Clock, seconds_until_midnight
from .errors import RotationError
from .formatter import PathFormatter
from .handoff import Handoff
from .opener import open_log_file


class SchedulerState(enum.Enum):
    STARTING = "starting"
    ACTIVE = "active"
    WAITING = "waiting"
    FAILED = "failed"
    STOPPED = "stopped"


class RotationScheduler(threading.Thread):
    """Own the lifecycle of each day's log file until the writer adopts it.

    Every iteration computes today's path, opens the file, publishes it
    through the :class:`Handoff` and sleeps until the next midnight in the
    configured zone. A directory or open failure is reported once and ends
    the thread; there are no retries. Stopping is only possible through
    :meth:`stop`, which interrupts the midnight wait; a file opened after
    the writer shut the handoff is closed here instead of being published.

    The thread must not log: the logging system may itself be writing into
    the rolling file this thread manages.
    """

    def __init__(
        self,
        *,
        template: str,
        formatter: PathFormatter,
        file_mode: int,
        dir_mode: int,
        tz: Optional[tzinfo],
        clock: Clock,
        handoff: Handoff,
    ) -> None:
        super().__init__(name="rollinglog-scheduler", daemon=True)
        self.template = template
        self.formatter = formatter
        self.file_mode = file_mode
        self.dir_mode = dir_mode
        self.tz = tz
        self.clock = clock
        self.handoff = handoff
        self.state = SchedulerState.STARTING
        self.epochs = 0
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    def run(self) -> None:
        try:
            self._loop()
        except Exception as exc:
            # Delivered to the writer like any other rotation failure.
            self.state = SchedulerState.FAILED
            self.handoff.fail(exc)
        finally:
            self.handoff.finish()

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            self.state = SchedulerState.STARTING
            now = self.clock.now(self.tz)
            path = self.formatter.format(self.template, now)
            try:
                handle = open_log_file(path, file_mode=self.file_mode, dir_mode=self.dir_mode)
            except RotationError as exc:
                self.state = SchedulerState.FAILED
                self.handoff.fail(exc)
                return

            self.state = SchedulerState.ACTIVE
            if not self.handoff.publish(handle):
                handle.close()
                break
            self.epochs += 1

            self.state = SchedulerState.WAITING
            if self.clock.wait(self._stop_event, seconds_until_midnight(now, self.tz)):
                break
        self.state = SchedulerState.STOPPED


__all__ = ["RotationScheduler", "SchedulerState"]
