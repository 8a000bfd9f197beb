"""Configuration parsing tests."""

from __future__ import annotations

import json
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from rollinglog.config import (
    DEFAULT_BASE_PATH,
    DEFAULT_PATTERN,
    Capture,
    RollingConfig,
    load_config,
)


def test_zero_values_fall_back_to_defaults() -> None:
    config = RollingConfig()

    assert config.path_template == DEFAULT_PATTERN
    assert config.file_mode == 0o600
    assert config.dir_mode == 0o2700
    assert config.capture == Capture.NONE
    assert config.tzinfo is None


def test_dated_layout_uses_base_path_default() -> None:
    config = RollingConfig(layout="dated")

    assert config.path_template == DEFAULT_BASE_PATH


def test_from_dict_parses_json_friendly_values() -> None:
    config = RollingConfig.from_dict(
        {
            "path_template": "var/{2006-01-02}.log",
            "file_mode": "0640",
            "dir_mode": "0o750",
            "timezone": "Europe/Paris",
            "capture": ["stdout", "STDERR"],
        }
    )

    assert config.path_template == "var/{2006-01-02}.log"
    assert config.file_mode == 0o640
    assert config.dir_mode == 0o750
    assert config.tzinfo == ZoneInfo("Europe/Paris")
    assert config.capture == Capture.STDOUT | Capture.STDERR


def test_capture_accepts_single_name_and_bitmask() -> None:
    assert Capture.parse("stderr") == Capture.STDERR
    assert Capture.parse(3) == Capture.STDOUT | Capture.STDERR
    with pytest.raises(ValueError):
        Capture.parse(["stdin"])


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        RollingConfig(layout="weekly")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        RollingConfig(timezone="Mars/Olympus_Mons")
    with pytest.raises(ValueError):
        RollingConfig.from_dict({"file_mode": "rw-------"})


def test_load_config_reads_json(tmp_path: Path) -> None:
    config_path = tmp_path / "rollinglog.json"
    config_path.write_text(
        json.dumps({"layout": "dated", "path_template": "out/app.log", "capture": "stdout"}),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.layout == "dated"
    assert config.path_template == "out/app.log"
    assert config.capture == Capture.STDOUT


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.json")
