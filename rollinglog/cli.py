"""Command line interface: copy standard input into a rolling log file."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import BinaryIO

from .config import (
    DEFAULT_BASE_PATH,
    DEFAULT_PATTERN,
    Capture,
    RollingConfig,
    load_config,
)
from .errors import RollingLogError
from .writer import RollingWriter

LOGGER = logging.getLogger("rollinglog")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional JSON configuration file; flags below override its values.",
    )
    parser.add_argument(
        "--pattern",
        help=(
            "Path template. With the 'pattern' layout, {...} groups are replaced by "
            "the date, e.g. 'logs/{2006/01/2006-01-02}/app.log'."
        ),
    )
    parser.add_argument(
        "--layout",
        choices=("pattern", "dated"),
        help="How the date is inserted into the path.",
    )
    parser.add_argument(
        "--timezone",
        help="IANA time zone used to decide when a day starts (defaults to local time).",
    )
    parser.add_argument(
        "--capture-stdout",
        action="store_true",
        help="Also point this process's standard output at the log file.",
    )
    parser.add_argument(
        "--capture-stderr",
        action="store_true",
        help="Also point this process's standard error at the log file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging output.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RollingConfig:
    config = load_config(args.config) if args.config else RollingConfig()
    overrides: dict[str, object] = {}
    if args.pattern:
        overrides["path_template"] = args.pattern
    if args.layout:
        overrides["layout"] = args.layout
        if not args.pattern and config.path_template in (DEFAULT_PATTERN, DEFAULT_BASE_PATH):
            # Let the new layout pick its own default template.
            overrides["path_template"] = ""
    if args.timezone:
        overrides["timezone"] = args.timezone
    capture = config.capture
    if args.capture_stdout:
        capture |= Capture.STDOUT
    if args.capture_stderr:
        capture |= Capture.STDERR
    overrides["capture"] = capture
    return dataclasses.replace(config, **overrides)


def pump(source: BinaryIO, writer: RollingWriter) -> int:
    """Copy ``source`` line by line into ``writer``; return the bytes written."""

    total = 0
    for line in source:
        total += writer.write(line) or 0
    return total


def main(argv: list[str] | None = None, stdin: BinaryIO | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        config = build_config(args)
    except (OSError, ValueError) as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return 2

    try:
        writer = RollingWriter(config)
    except RollingLogError as exc:
        LOGGER.error("Unable to open rolling log: %s", exc)
        return 1

    source = stdin if stdin is not None else sys.stdin.buffer
    try:
        written = pump(source, writer)
    except KeyboardInterrupt:
        return 130
    except RollingLogError as exc:
        LOGGER.error("Rolling log stopped: %s", exc)
        return 1
    except OSError as exc:
        LOGGER.error("Write to rolling log failed: %s", exc)
        return 1
    finally:
        writer.close()
    LOGGER.debug("Copied %s byte(s) into the rolling log", written)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
