"""Strategies that turn a path template and a timestamp into a log file path."""

from __future__ import annotations

import os
import re
from datetime import datetime
from typing import Callable, Dict, Protocol

_BRACKETED = re.compile(r"\{([^{}]*)\}")

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _hour12(now: datetime) -> int:
    return now.hour % 12 or 12


def _offset(now: datetime, *, colon: bool, zulu: bool) -> str:
    delta = now.utcoffset()
    if delta is None:
        return ""
    minutes = int(delta.total_seconds()) // 60
    if zulu and minutes == 0:
        return "Z"
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    separator = ":" if colon else ""
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


# Reference-date layout tokens (Mon Jan 2 15:04:05 MST 2006).
_LAYOUT_TOKENS: Dict[str, Callable[[datetime], str]] = {
    "2006": lambda now: f"{now.year:04d}",
    "06": lambda now: f"{now.year % 100:02d}",
    "January": lambda now: _MONTHS[now.month - 1],
    "Jan": lambda now: _MONTHS[now.month - 1][:3],
    "01": lambda now: f"{now.month:02d}",
    "1": lambda now: str(now.month),
    "Monday": lambda now: _WEEKDAYS[now.weekday()],
    "Mon": lambda now: _WEEKDAYS[now.weekday()][:3],
    "002": lambda now: f"{now.timetuple().tm_yday:03d}",
    "02": lambda now: f"{now.day:02d}",
    "_2": lambda now: f"{now.day:2d}",
    "2": lambda now: str(now.day),
    "15": lambda now: f"{now.hour:02d}",
    "03": lambda now: f"{_hour12(now):02d}",
    "3": lambda now: str(_hour12(now)),
    "04": lambda now: f"{now.minute:02d}",
    "4": lambda now: str(now.minute),
    "05": lambda now: f"{now.second:02d}",
    "5": lambda now: str(now.second),
    "PM": lambda now: "PM" if now.hour >= 12 else "AM",
    "pm": lambda now: "pm" if now.hour >= 12 else "am",
    "MST": lambda now: now.tzname() or "",
    "-07:00": lambda now: _offset(now, colon=True, zulu=False),
    "-0700": lambda now: _offset(now, colon=False, zulu=False),
    "Z07:00": lambda now: _offset(now, colon=True, zulu=True),
    "Z0700": lambda now: _offset(now, colon=False, zulu=True),
}

_LAYOUT_PATTERN = re.compile(
    "|".join(re.escape(token) for token in sorted(_LAYOUT_TOKENS, key=len, reverse=True))
)


def render_layout(layout: str, now: datetime) -> str:
    """Render ``now`` using a reference-date layout such as ``2006-01-02``.

    Specifiers containing ``%`` are handed to :meth:`datetime.strftime`
    instead, so ``{%Y-%m-%d}`` and ``{2006-01-02}`` are interchangeable.
    """

    if "%" in layout:
        return now.strftime(layout)
    return _LAYOUT_PATTERN.sub(lambda match: _LAYOUT_TOKENS[match.group(0)](now), layout)


class PathFormatter(Protocol):
    """Produce the concrete path of the log file for the day containing ``now``."""

    def format(self, template: str, now: datetime) -> str:
        """Return the filesystem path for ``template`` at ``now``."""


class PatternPathFormatter:
    """Replace every ``{...}`` group in the template with the rendered date.

    ``logs/{2006/01/2006-01-02}/log.log`` becomes
    ``logs/2021/03/2021-03-05/log.log``. Text outside the braces is copied
    verbatim; unbalanced braces are left as they are.
    """

    def format(self, template: str, now: datetime) -> str:
        return _BRACKETED.sub(lambda match: render_layout(match.group(1), now), template)


class DatedDirectoryPathFormatter:
    """Insert ``YYYY/MM/YYYY-MM-DD`` between the directory and the file name.

    ``data/server.log`` becomes ``data/2021/03/2021-03-05/server.log``.
    """

    def format(self, template: str, now: datetime) -> str:
        directory, base = os.path.split(template)
        year, month, day = f"{now.year:04d}", f"{now.month:02d}", f"{now.day:02d}"
        return os.path.join(directory, year, month, f"{year}-{month}-{day}", base)


def build_formatter(layout: str) -> PathFormatter:
    if layout == "pattern":
        return PatternPathFormatter()
    if layout == "dated":
        return DatedDirectoryPathFormatter()
    raise ValueError(f"Unsupported path layout: {layout}")


__all__ = [
    "DatedDirectoryPathFormatter",
    "PathFormatter",
    "PatternPathFormatter",
    "build_formatter",
    "render_layout",
]
