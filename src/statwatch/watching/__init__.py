"""Change detection for watched paths.

Provides polling-based watching of a fixed list of paths: snapshots of
each path's stat fields (and optionally content digest and resource fork),
an ordered diff between two snapshots, and the loop that ties them together.
"""

from statwatch.watching.detector import (
    ChangeKind,
    ChangeReport,
    detect_changes,
)
from statwatch.watching.snapshot import (
    ABSENT,
    DIRECTORY_DIGEST,
    AbsentSnapshot,
    PresentSnapshot,
    Snapshot,
    SnapshotOptions,
    StreamMetadata,
    WatchTarget,
    build_snapshot,
    digest_file,
)
from statwatch.watching.watcher import PollingWatcher, WatchPhase

__all__ = [
    "ABSENT",
    "DIRECTORY_DIGEST",
    "AbsentSnapshot",
    "ChangeKind",
    "ChangeReport",
    "PollingWatcher",
    "PresentSnapshot",
    "Snapshot",
    "SnapshotOptions",
    "StreamMetadata",
    "WatchPhase",
    "WatchTarget",
    "build_snapshot",
    "detect_changes",
    "digest_file",
]
