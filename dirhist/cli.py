"""Command-line front door for dirhist.

Parses options, loads settings, opens the store, and dispatches to either the
interactive browser or one of the small history/shortcut maintenance
commands. The browser's selection is the only thing written to stdout, so
shell integrations can use ``cd "$(dirhist)"``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, Settings, load_settings
from .logs import configure_logging
from .store import Store, StoreError

logger = logging.getLogger(__name__)


def _epoch(value: str) -> int:
    """argparse type for non-negative epoch seconds."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _absolute(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirhist",
        description="Browse visited directories and named shortcuts; print the chosen path.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to config.json.")
    parser.add_argument("-d", "--debug", action="store_true", help="Log debug output to the log file.")
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path.")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("select", help="Open the interactive browser (default).")

    add = sub.add_parser("add", help="Record a visit to PATH.")
    add.add_argument("path")
    add.add_argument("--date", type=_epoch, default=None, help="Visit time in epoch seconds.")

    forget = sub.add_parser("forget", help="Remove PATH from the history.")
    forget.add_argument("path")

    shortcut = sub.add_parser("shortcut", help="Create or replace shortcut NAME.")
    shortcut.add_argument("name")
    shortcut.add_argument("path", nargs="?", default=None, help="Target (default: current directory).")

    rm_shortcut = sub.add_parser("rm-shortcut", help="Delete shortcut NAME.")
    rm_shortcut.add_argument("name")

    find = sub.add_parser("find", help="Print the target of shortcut NAME.")
    find.add_argument("name")
    return parser


def run_command(args: argparse.Namespace, store: Store, settings: Settings) -> int:
    """Execute one parsed command against ``store`` and return an exit status."""
    command = args.command or "select"
    if command == "select":
        from .app import run_browser

        selected = run_browser(store, settings)
        if selected is not None:
            sys.stdout.write(selected + "\n")
        return 0
    if command == "add":
        path = _absolute(args.path)
        if args.date is None:
            store.add_path(path)
        else:
            store.add_path_with_time(path, args.date)
        return 0
    if command == "forget":
        store.delete_path(_absolute(args.path))
        return 0
    if command == "shortcut":
        store.add_shortcut(args.name, _absolute(args.path or os.getcwd()))
        return 0
    if command == "rm-shortcut":
        store.delete_shortcut(args.name)
        return 0
    if command == "find":
        target = store.find_shortcut(args.name)
        if target is None:
            return 1
        sys.stdout.write(target + "\n")
        return 0
    raise ValueError(f"unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the requested command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.debug, args.log_file)
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        raise SystemExit(f"dirhist: invalid configuration: {exc}") from exc

    try:
        store = Store.open(settings.database)
    except StoreError as exc:
        raise SystemExit(f"dirhist: {exc}") from exc

    try:
        return run_command(args, store, settings)
    except StoreError as exc:
        raise SystemExit(f"dirhist: {exc}") from exc
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
