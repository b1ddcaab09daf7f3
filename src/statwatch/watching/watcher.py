"""Polling loop that drives snapshot/diff cycles.

The watcher takes one snapshot per target at startup, then re-snapshots
every target once per cycle, compares against the stored snapshot, and
reports changes. Checks within a cycle run one after another; the triggered
command for a target finishes before the next target is looked at.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from statwatch.logging import get_logger
from statwatch.watching.detector import detect_changes
from statwatch.watching.snapshot import (
    Snapshot,
    SnapshotOptions,
    WatchTarget,
    build_snapshot,
)

if TYPE_CHECKING:
    from statwatch.reporting.console import Reporter
    from statwatch.terminal.protocol import CommandRunner

log = get_logger("watching")


class WatchPhase(Enum):
    INIT = "init"
    STEADY = "steady"


class PollingWatcher:
    """Watches a fixed list of paths for changes using polling.

    Example:
        watcher = PollingWatcher(
            [WatchTarget("main.c")],
            SnapshotOptions.resolve(md5=True),
            ConsoleReporter(),
            runner=ShellCommandRunner(),
            command="make",
        )
        await watcher.run()
    """

    def __init__(
        self,
        targets: Iterable[WatchTarget],
        options: SnapshotOptions,
        reporter: Reporter,
        runner: CommandRunner | None = None,
        command: str = "",
        interval: float = 1,
        beep: bool = False,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the watcher.

        Args:
            targets: Paths to watch, in the order they are checked.
            options: Resolved snapshot options.
            reporter: Receives initial-state and change reports.
            runner: Runs ``command`` after each changed target.
            command: Shell command line; empty means none.
            interval: Seconds to sleep between cycles.
            beep: Ring the bell once per cycle that saw a change.
            sleep: Awaitable sleep, replaceable in tests.
        """
        self._targets: list[WatchTarget] = []
        for target in targets:
            if target in self._targets:
                log.debug("Ignoring duplicate path %s", target.path)
                continue
            self._targets.append(target)
        self._options = options
        self._reporter = reporter
        self._runner = runner
        self._command = command
        self._interval = interval
        self._beep = beep
        self._sleep = sleep

        # Latest snapshot per target; replaced, never removed
        self._state: dict[WatchTarget, Snapshot] = {}
        self._phase = WatchPhase.INIT

    @property
    def phase(self) -> WatchPhase:
        return self._phase

    @property
    def state(self) -> Mapping[WatchTarget, Snapshot]:
        """Read-only view of the stored snapshots."""
        return MappingProxyType(self._state)

    @property
    def targets(self) -> list[WatchTarget]:
        return list(self._targets)

    def initialize(self) -> None:
        """Take and report the first snapshot of every target."""
        for target in self._targets:
            snapshot = build_snapshot(target.path, self._options)
            self._state[target] = snapshot
            self._reporter.initial_state(target, snapshot)
        self._phase = WatchPhase.STEADY
        log.debug("Initialized %d target(s)", len(self._targets))

    async def check_once(self) -> int:
        """Run one polling cycle.

        Returns:
            Number of targets that changed during the cycle.
        """
        if self._phase is WatchPhase.INIT:
            self.initialize()

        changes = 0
        for target in self._targets:
            previous = self._state.get(target)
            current = build_snapshot(target.path, self._options)
            report = detect_changes(previous, current, self._options)

            if report.changed:
                log.debug("%s changed: %s", target.path, [r.value for r in report.reasons])
                self._reporter.change(target, previous, current, report)
                if self._command and self._runner is not None:
                    # Exit status is ignored
                    await self._runner.run(self._command)
                changes += 1

            self._state[target] = current

        if changes and self._beep:
            self._reporter.alert()
        return changes

    async def run(self) -> None:
        """Poll forever; returns only by exception or cancellation."""
        if self._phase is WatchPhase.INIT:
            self.initialize()

        log.info(
            "Watching %d path(s) every %ss", len(self._targets), self._interval
        )
        while True:
            await self.check_once()
            await self._sleep(self._interval)
