"""Console reporter for initial state and change reports."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from rich.console import Console

from statwatch.reporting.listing import format_time, long_listing
from statwatch.watching.detector import FIELD_FOR_KIND, ChangeKind, ChangeReport
from statwatch.watching.snapshot import PresentSnapshot, Snapshot, WatchTarget

# Tags rendered without old/new values
_PLAIN_LABELS = {
    ChangeKind.CREATED: "created",
    ChangeKind.DELETED: "deleted",
    ChangeKind.CONTENT_DIGEST: "content",
    ChangeKind.SECONDARY_DIGEST: "resource fork content",
}

_TIME_KINDS = {ChangeKind.ACCESS_TIME, ChangeKind.MODIFY_TIME, ChangeKind.CHANGE_TIME}


class Reporter(Protocol):
    """What the watcher needs from its output side."""

    def initial_state(self, target: WatchTarget, snapshot: Snapshot) -> None: ...

    def change(
        self,
        target: WatchTarget,
        previous: Snapshot,
        current: Snapshot,
        report: ChangeReport,
    ) -> None: ...

    def alert(self) -> None: ...


def _label(kind: ChangeKind) -> str:
    label = kind.value.replace("-", " ")
    return label.replace("secondary", "resource fork")


def describe_reason(kind: ChangeKind, previous: Snapshot, current: Snapshot) -> str:
    """Readable text for one change tag, with old and new values where useful."""
    if kind in _PLAIN_LABELS:
        return _PLAIN_LABELS[kind]
    if not isinstance(previous, PresentSnapshot) or not isinstance(current, PresentSnapshot):
        return _label(kind)

    if kind in (ChangeKind.SECONDARY_SIZE, ChangeKind.SECONDARY_DIGEST):
        old_meta, new_meta = previous.secondary, current.secondary
    else:
        old_meta, new_meta = previous.primary, current.primary
    if old_meta is None or new_meta is None:
        return _label(kind)

    attr = FIELD_FOR_KIND[kind]
    old, new = getattr(old_meta, attr), getattr(new_meta, attr)
    if kind is ChangeKind.MODE:
        return f"mode {old:o} -> {new:o}"
    if kind in _TIME_KINDS:
        return f"{_label(kind)} {format_time(old)} -> {format_time(new)}"
    return f"{_label(kind)} {old} -> {new}"


class ConsoleReporter:
    """Print watch results to stdout with rich.

    Args:
        console: Console to write to (defaults to stdout).
        detailed: Prefix lines with a timestamp and follow each change with
            a long listing of the path.
    """

    def __init__(self, console: Console | None = None, detailed: bool = False) -> None:
        self.console = console or Console(highlight=False)
        self.detailed = detailed

    def _emit(self, text: str) -> None:
        if self.detailed:
            text = f"{datetime.now():%Y-%m-%d %H:%M:%S} {text}"
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def initial_state(self, target: WatchTarget, snapshot: Snapshot) -> None:
        if snapshot.exists:
            self._emit(f"Stored info for {target.path}")
        else:
            self._emit(f"{target.path}: Non-existent")

    def change(
        self,
        target: WatchTarget,
        previous: Snapshot,
        current: Snapshot,
        report: ChangeReport,
    ) -> None:
        reasons = ", ".join(describe_reason(kind, previous, current) for kind in report.reasons)
        self._emit(f"{target.path} changed: {reasons}")
        if self.detailed and isinstance(current, PresentSnapshot):
            self.console.print(
                long_listing(target.path, current.primary),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )

    def alert(self) -> None:
        self.console.bell()
