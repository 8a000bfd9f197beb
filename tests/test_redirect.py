"""Descriptor redirection tests."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from rollinglog.redirect import (
    DescriptorRedirector,
    NullRedirector,
    StandardStream,
    default_redirector,
)


@pytest.mark.skipif(os.name != "posix", reason="descriptor duplication is POSIX only")
def test_descriptor_redirector_points_stream_at_file(tmp_path: Path) -> None:
    target = tmp_path / "captured.log"
    saved = os.dup(StandardStream.STDERR.fileno)
    try:
        with open(target, "ab", buffering=0) as handle:
            DescriptorRedirector().redirect(handle, StandardStream.STDERR)
        os.write(StandardStream.STDERR.fileno, b"from fd 2\n")
    finally:
        os.dup2(saved, StandardStream.STDERR.fileno)
        os.close(saved)

    assert target.read_bytes() == b"from fd 2\n"


def test_null_redirector_does_nothing() -> None:
    handle = io.BytesIO()

    assert NullRedirector().redirect(handle, StandardStream.STDOUT) is None
    assert handle.getvalue() == b""


def test_default_redirector_matches_platform() -> None:
    expected = DescriptorRedirector if os.name == "posix" else NullRedirector

    assert isinstance(default_redirector(), expected)
