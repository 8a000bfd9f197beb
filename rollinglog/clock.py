"""Time helpers used to decide which day a log file belongs to."""

from __future__ import annotations

import threading
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Clock(Protocol):
    """Source of the current time and of interruptible waits."""

    def now(self, tz: Optional[tzinfo]) -> datetime:
        """Return the current, timezone-aware time in ``tz`` (local when ``None``)."""

    def wait(self, stop: threading.Event, seconds: float) -> bool:
        """Sleep for ``seconds`` unless ``stop`` is set first; return ``stop``'s state."""


class SystemClock:
    """Wall-clock implementation backed by :mod:`datetime` and :class:`threading.Event`."""

    def now(self, tz: Optional[tzinfo]) -> datetime:
        if tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz)

    def wait(self, stop: threading.Event, seconds: float) -> bool:
        return stop.wait(max(seconds, 0.0))


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Map an IANA zone name to a tzinfo; ``None`` keeps the process-local zone."""

    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


def next_midnight(now: datetime, tz: Optional[tzinfo]) -> datetime:
    """Return the first instant of the calendar day after ``now``."""

    tomorrow = now.date() + timedelta(days=1)
    if tz is None:
        # Naive local time lets astimezone() pick the offset in force at midnight.
        return datetime.combine(tomorrow, time()).astimezone()
    return datetime.combine(tomorrow, time(), tzinfo=tz)


def seconds_until_midnight(now: datetime, tz: Optional[tzinfo]) -> float:
    # Same-tzinfo subtraction ignores offsets, so compare in UTC.
    midnight = next_midnight(now, tz).astimezone(timezone.utc)
    delta = midnight - now.astimezone(timezone.utc)
    return max(delta.total_seconds(), 0.0)


__all__ = [
    "Clock",
    "SystemClock",
    "next_midnight",
    "resolve_timezone",
    "seconds_until_midnight",
]
