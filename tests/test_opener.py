"""Directory and file opening tests."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from rollinglog.errors import RotationError
from rollinglog.opener import open_log_file


def test_open_log_file_creates_directories_and_appends(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "today.log"

    with open_log_file(str(target), file_mode=0o600, dir_mode=0o700) as handle:
        handle.write(b"first\n")
    with open_log_file(str(target), file_mode=0o600, dir_mode=0o700) as handle:
        handle.write(b"second\n")

    assert target.read_bytes() == b"first\nsecond\n"


@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_open_log_file_applies_file_mode(tmp_path: Path) -> None:
    target = tmp_path / "private.log"

    with open_log_file(str(target), file_mode=0o600, dir_mode=0o700):
        pass

    assert stat.S_IMODE(target.stat().st_mode) == 0o600


def test_directory_failure_is_reported_as_mkdir(tmp_path: Path) -> None:
    blocker = tmp_path / "logs"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(RotationError) as exc_info:
        open_log_file(str(blocker / "2021" / "app.log"), file_mode=0o600, dir_mode=0o700)

    assert exc_info.value.kind == "mkdir"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_open_failure_is_reported_as_open(tmp_path: Path) -> None:
    occupied = tmp_path / "app.log"
    occupied.mkdir()

    with pytest.raises(RotationError) as exc_info:
        open_log_file(str(occupied), file_mode=0o600, dir_mode=0o700)

    assert exc_info.value.kind == "open"
    assert exc_info.value.path == str(occupied)


@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_every_created_directory_gets_dir_mode(tmp_path: Path) -> None:
    target = tmp_path / "logs" / "2021" / "03" / "2021-03-05" / "log.log"
    previous = os.umask(0o022)
    try:
        with open_log_file(str(target), file_mode=0o600, dir_mode=0o700):
            pass
    finally:
        os.umask(previous)

    logs = tmp_path / "logs"
    created = [logs, logs / "2021", logs / "2021" / "03", target.parent]
    modes = {path.name: oct(stat.S_IMODE(path.stat().st_mode)) for path in created}
    assert modes == {"logs": "0o700", "2021": "0o700", "03": "0o700", "2021-03-05": "0o700"}


def test_existing_directories_are_reused(tmp_path: Path) -> None:
    (tmp_path / "logs" / "2021").mkdir(parents=True)
    target = tmp_path / "logs" / "2021" / "03" / "app.log"

    with open_log_file(str(target), file_mode=0o600, dir_mode=0o700) as handle:
        handle.write(b"ok\n")

    assert target.read_bytes() == b"ok\n"
