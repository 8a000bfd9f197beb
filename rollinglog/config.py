"""Configuration utilities for the rolling log writer."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from .clock import resolve_timezone

DEFAULT_PATTERN = "logs/{2006/01/2006-01-02}/log.log"
DEFAULT_BASE_PATH = "logs/log.log"
DEFAULT_FILE_MODE = 0o600
DEFAULT_DIR_MODE = 0o2700

LAYOUTS = ("pattern", "dated")


class Capture(enum.IntFlag):
    """Standard streams whose descriptors should follow the active log file."""

    NONE = 0
    STDOUT = 1
    STDERR = 2

    @classmethod
    def parse(cls, value: Any) -> "Capture":
        """Build a flag set from an int, a stream name, or a list of names."""

        if value is None:
            return cls.NONE
        if isinstance(value, Capture):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            value = [value]
        flags = cls.NONE
        for name in value:
            key = str(name).strip().upper()
            if key not in cls.__members__:
                raise ValueError(f"capture must name 'stdout' or 'stderr', not {name!r}")
            flags |= cls[key]
        return flags


@dataclass(frozen=True, slots=True)
class RollingConfig:
    """Settings for a :class:`~rollinglog.writer.RollingWriter`.

    Zero values are replaced with defaults, so ``RollingConfig()`` writes to
    ``logs/<year>/<month>/<date>/log.log`` under the working directory.
    """

    path_template: str = ""
    layout: Literal["pattern", "dated"] = "pattern"
    file_mode: int = 0
    dir_mode: int = 0
    timezone: Optional[str] = None
    capture: Capture = Capture.NONE
    tzinfo: Any = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        if self.layout not in LAYOUTS:
            raise ValueError("layout must be either 'pattern' or 'dated'")
        if not self.path_template:
            default = DEFAULT_PATTERN if self.layout == "pattern" else DEFAULT_BASE_PATH
            object.__setattr__(self, "path_template", default)
        if not self.file_mode:
            object.__setattr__(self, "file_mode", DEFAULT_FILE_MODE)
        if not self.dir_mode:
            object.__setattr__(self, "dir_mode", DEFAULT_DIR_MODE)
        object.__setattr__(self, "capture", Capture.parse(self.capture))
        object.__setattr__(self, "tzinfo", resolve_timezone(self.timezone))

    @staticmethod
    def _coerce_mode(value: Optional[int | str]) -> int:
        if value is None or value == "":
            return 0
        if isinstance(value, int):
            return value
        text = str(value).strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            return int(text, 8)
        except ValueError as exc:
            raise ValueError(f"permission mode must be octal, not {value!r}") from exc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RollingConfig":
        layout = str(data.get("layout", "pattern")).lower()
        timezone = data.get("timezone") or None
        return cls(
            path_template=str(data.get("path_template") or ""),
            layout=layout,  # type: ignore[arg-type]
            file_mode=cls._coerce_mode(data.get("file_mode")),
            dir_mode=cls._coerce_mode(data.get("dir_mode")),
            timezone=str(timezone) if timezone is not None else None,
            capture=Capture.parse(data.get("capture")),
        )


def load_config(path: str | Path) -> RollingConfig:
    """Load configuration data from a JSON file."""

    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)

    return RollingConfig.from_dict(data)


__all__ = [
    "Capture",
    "DEFAULT_BASE_PATH",
    "DEFAULT_DIR_MODE",
    "DEFAULT_FILE_MODE",
    "DEFAULT_PATTERN",
    "RollingConfig",
    "load_config",
]
