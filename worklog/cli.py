from __future__ import annotations

import argparse
import sys

from worklog.config import ConfigError, load_config
from worklog.core import paths
from worklog.tracker import WorkTracker


def _die(msg: str) -> None:
    print(msg, file=sys.stderr)
    sys.exit(1)


def _positive_int(value: str) -> int:
    try:
        minutes = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid interval: {value!r}")
    if minutes <= 0:
        raise argparse.ArgumentTypeError("interval must be a positive number of minutes")
    return minutes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worklog",
        description="Log working-tree activity at a fixed interval",
    )
    parser.add_argument(
        "--version", action="version", version="worklog 0.1.0"
    )
    parser.add_argument(
        "interval",
        nargs="?",
        type=_positive_int,
        default=None,
        help="minutes between log entries (default: 20)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    repo_root = paths.repo_root_or_cwd()
    try:
        config = load_config(repo_root, interval_minutes=args.interval)
    except ConfigError as exc:
        _die(f"config error: {exc}")
        return

    try:
        WorkTracker(config).start_tracking()
    except RuntimeError as exc:
        _die(str(exc))


if __name__ == "__main__":
    main()
