"""Shared fixtures for the rolling log tests."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

UTC = ZoneInfo("UTC")


class ManualClock:
    """Clock whose time only moves when the test advances it."""

    def __init__(self, start: datetime) -> None:
        self._now = start
        self._cond = threading.Condition()
        self.waits: list[float] = []

    def now(self, tz: Optional[tzinfo]) -> datetime:
        with self._cond:
            return self._now.astimezone(tz) if tz is not None else self._now

    def wait(self, stop: threading.Event, seconds: float) -> bool:
        with self._cond:
            deadline = self._now + timedelta(seconds=seconds)
            self.waits.append(seconds)
            self._cond.notify_all()
            while not stop.is_set() and self._now < deadline:
                self._cond.wait(0.01)
            return stop.is_set()

    def advance(self, delta: timedelta) -> None:
        with self._cond:
            self._now += delta
            self._cond.notify_all()

    def wait_for_waits(self, count: int, timeout: float = 5.0) -> None:
        with self._cond:
            reached = self._cond.wait_for(lambda: len(self.waits) >= count, timeout)
        assert reached, f"scheduler did not reach wait #{count}"


@pytest.fixture
def manual_clock():
    def _factory(start: datetime) -> ManualClock:
        return ManualClock(start)

    return _factory
