"""Shared test fakes for statwatch tests."""

from __future__ import annotations

from collections.abc import Callable

from statwatch.terminal.result import CommandResult
from statwatch.watching.detector import ChangeReport
from statwatch.watching.snapshot import Snapshot, WatchTarget


class RecordingReporter:
    """Reporter that keeps every call instead of printing."""

    def __init__(self) -> None:
        self.events: list[tuple] = []
        self.alerts = 0

    def initial_state(self, target: WatchTarget, snapshot: Snapshot) -> None:
        self.events.append(("initial", target.path, snapshot.exists))

    def change(
        self,
        target: WatchTarget,
        previous: Snapshot,
        current: Snapshot,
        report: ChangeReport,
    ) -> None:
        self.events.append(("change", target.path, report.reasons))

    def alert(self) -> None:
        self.alerts += 1
        self.events.append(("alert",))

    @property
    def changes(self) -> list[tuple]:
        return [e for e in self.events if e[0] == "change"]


class RecordingRunner:
    """CommandRunner that records commands instead of spawning them."""

    def __init__(self, reporter: RecordingReporter | None = None) -> None:
        self.commands: list[str] = []
        self._reporter = reporter
        # Number of reporter events seen when each command ran
        self.events_at_run: list[int] = []

    async def run(self, command: str) -> CommandResult:
        self.commands.append(command)
        if self._reporter is not None:
            self.events_at_run.append(len(self._reporter.events))
        return CommandResult(command=command, exit_code=1, status="error", duration_ms=0.0)


class StopLoop(Exception):
    """Raised by FakeSleep to break out of PollingWatcher.run()."""


class FakeSleep:
    """Awaitable sleep that records intervals and stops after ``limit`` calls."""

    def __init__(self, limit: int, on_sleep: Callable[[int], None] | None = None) -> None:
        self.calls: list[float] = []
        self._limit = limit
        self._on_sleep = on_sleep

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self._on_sleep is not None:
            self._on_sleep(len(self.calls))
        if len(self.calls) >= self._limit:
            raise StopLoop
