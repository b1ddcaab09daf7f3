"""Diffing of two snapshots of the same path."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from statwatch.watching.snapshot import Snapshot, SnapshotOptions, StreamMetadata


class ChangeKind(Enum):
    """What changed between two observations.

    Declaration order is the order tags appear in a ChangeReport.
    """

    CREATED = "created"
    DELETED = "deleted"
    INODE = "inode"
    MODE = "mode"
    LINK_COUNT = "link-count"
    OWNER_UID = "owner-uid"
    OWNER_GID = "owner-gid"
    SIZE = "size"
    CONTENT_DIGEST = "content-digest"
    ACCESS_TIME = "access-time"
    MODIFY_TIME = "modify-time"
    CHANGE_TIME = "change-time"
    SECONDARY_SIZE = "secondary-size"
    SECONDARY_DIGEST = "secondary-digest"


# Always-compared primary fields, in report order
_STAT_FIELDS: tuple[tuple[ChangeKind, str], ...] = (
    (ChangeKind.INODE, "inode"),
    (ChangeKind.MODE, "mode"),
    (ChangeKind.LINK_COUNT, "link_count"),
    (ChangeKind.OWNER_UID, "owner_uid"),
    (ChangeKind.OWNER_GID, "owner_gid"),
    (ChangeKind.SIZE, "size_bytes"),
)

# Fields whose ChangeKind maps back to a StreamMetadata attribute
FIELD_FOR_KIND: dict[ChangeKind, str] = {
    **dict(_STAT_FIELDS),
    ChangeKind.CONTENT_DIGEST: "content_digest",
    ChangeKind.ACCESS_TIME: "access_time",
    ChangeKind.MODIFY_TIME: "modify_time",
    ChangeKind.CHANGE_TIME: "change_time",
    ChangeKind.SECONDARY_SIZE: "size_bytes",
    ChangeKind.SECONDARY_DIGEST: "content_digest",
}


@dataclass(frozen=True)
class ChangeReport:
    """Ordered change tags for one target; empty means unchanged."""

    reasons: tuple[ChangeKind, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.reasons)

    def __bool__(self) -> bool:
        return self.changed


NO_CHANGE = ChangeReport()


def _compare_primary(
    old: StreamMetadata, new: StreamMetadata, options: SnapshotOptions
) -> list[ChangeKind]:
    reasons = [kind for kind, attr in _STAT_FIELDS if getattr(old, attr) != getattr(new, attr)]
    if options.digest and old.content_digest != new.content_digest:
        reasons.append(ChangeKind.CONTENT_DIGEST)
    if options.access_time and old.access_time != new.access_time:
        reasons.append(ChangeKind.ACCESS_TIME)
    if old.modify_time != new.modify_time:
        reasons.append(ChangeKind.MODIFY_TIME)
    if old.change_time != new.change_time:
        reasons.append(ChangeKind.CHANGE_TIME)
    return reasons


def _compare_secondary(
    old: StreamMetadata, new: StreamMetadata, options: SnapshotOptions
) -> list[ChangeKind]:
    reasons = []
    if old.size_bytes != new.size_bytes:
        reasons.append(ChangeKind.SECONDARY_SIZE)
    if options.digest and old.content_digest != new.content_digest:
        reasons.append(ChangeKind.SECONDARY_DIGEST)
    return reasons


def detect_changes(
    previous: Snapshot | None,
    current: Snapshot,
    options: SnapshotOptions | None = None,
) -> ChangeReport:
    """Compute what changed between ``previous`` and ``current``.

    Args:
        previous: Last stored snapshot, or None if the target was never seen.
        current: Fresh snapshot of the same target.
        options: Which optional fields to compare (defaults to none).

    Returns:
        ChangeReport whose reasons follow ChangeKind declaration order.
    """
    options = options or SnapshotOptions()

    if previous is None:
        return NO_CHANGE
    if not previous.exists and not current.exists:
        return NO_CHANGE
    if not previous.exists:
        return ChangeReport((ChangeKind.CREATED,))
    if not current.exists:
        return ChangeReport((ChangeKind.DELETED,))

    reasons = _compare_primary(previous.primary, current.primary, options)
    if options.secondary and previous.secondary is not None and current.secondary is not None:
        reasons.extend(_compare_secondary(previous.secondary, current.secondary, options))
    return ChangeReport(tuple(reasons))
