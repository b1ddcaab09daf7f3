"""Command-line interface for statwatch."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from statwatch import __version__
from statwatch.config import Config, load_config
from statwatch.errors import ConfigurationError, IOFailure
from statwatch.logging import get_logger, setup_logging
from statwatch.reporting import ConsoleReporter
from statwatch.terminal import ShellCommandRunner
from statwatch.watching import PollingWatcher, SnapshotOptions, WatchTarget

log = get_logger("cli")

err_console = Console(stderr=True, highlight=False)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="statwatch",
        description="Poll files for changes and optionally run a command when they change",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Paths to watch (need not exist yet)",
    )
    parser.add_argument(
        "-c", "--command",
        help="Shell command to run after each changed path",
    )
    parser.add_argument(
        "-i", "--interval",
        type=int,
        help="Seconds between checks (default: 1)",
    )
    parser.add_argument(
        "--atime",
        action="store_true",
        default=None,
        help="Also report access time changes (ignored with --md5)",
    )
    parser.add_argument(
        "--md5",
        action="store_true",
        default=None,
        help="Compare MD5 digests of file contents",
    )
    parser.add_argument(
        "--rsrc",
        action="store_true",
        default=None,
        help="Also watch the resource fork (macOS)",
    )
    parser.add_argument(
        "-b", "--beep",
        action="store_true",
        default=None,
        help="Ring the terminal bell when something changed",
    )
    parser.add_argument(
        "-d", "--detailed",
        action="store_true",
        default=None,
        help="Timestamp reports and show a long listing of changed paths",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file path (default: ./.statwatch.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be repeated)",
    )
    return parser


def cli_overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    """Turn parsed arguments into a config layer; unset options stay None."""
    return {
        "watch": {
            "command": parsed.command,
            "interval": parsed.interval,
            "atime": parsed.atime,
            "md5": parsed.md5,
            "rsrc": parsed.rsrc,
            "beep": parsed.beep,
            "detailed": parsed.detailed,
        },
        "logging": {
            "verbose": min(parsed.verbose + 1, 4) if parsed.verbose else None,
        },
        "paths": parsed.paths or None,
    }


def build_watcher(config: Config) -> PollingWatcher:
    """Wire the watcher and its collaborators from a validated config."""
    watch = config.watch
    options = SnapshotOptions.resolve(atime=watch.atime, md5=watch.md5, rsrc=watch.rsrc)
    return PollingWatcher(
        [WatchTarget(path) for path in config.paths],
        options,
        ConsoleReporter(detailed=watch.detailed),
        runner=ShellCommandRunner() if watch.command else None,
        command=watch.command,
        interval=watch.interval,
        beep=watch.beep,
    )


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        config = load_config(cli_overrides(parsed), config_file=parsed.config)
    except ConfigurationError as e:
        parser.print_usage(err_console.file)
        err_console.print(f"statwatch: error: {escape(str(e))}")
        return 2

    setup_logging(config.logging)
    watcher = build_watcher(config)

    try:
        asyncio.run(watcher.run())
    except IOFailure as e:
        log.debug("Stopping on I/O failure", exc_info=True)
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except KeyboardInterrupt:
        return 130
    return 0
