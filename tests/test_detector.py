"""Tests for diffing snapshots."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

import pytest

from statwatch.watching.detector import ChangeKind, ChangeReport, detect_changes
from statwatch.watching.snapshot import (
    ABSENT,
    PresentSnapshot,
    SnapshotOptions,
    StreamMetadata,
    build_snapshot,
)

BASE = StreamMetadata(
    inode=100,
    mode=0o100644,
    link_count=1,
    owner_uid=501,
    owner_gid=20,
    size_bytes=10,
    access_time=1000,
    modify_time=2000,
    change_time=3000,
    content_digest=b"\x01" * 16,
)


def present(secondary: StreamMetadata | None = None, **changes) -> PresentSnapshot:
    return PresentSnapshot(primary=dataclasses.replace(BASE, **changes), secondary=secondary)


ALL_ON = SnapshotOptions(digest=True, access_time=True, secondary=True)


class TestExistenceTransitions:
    """Test created/deleted handling."""

    def test_no_previous_is_no_change(self) -> None:
        assert detect_changes(None, present()).changed is False
        assert detect_changes(None, ABSENT).changed is False

    def test_absent_twice_is_no_change(self) -> None:
        """Two absent observations never produce a report."""
        report = detect_changes(ABSENT, ABSENT, ALL_ON)
        assert report == ChangeReport()
        assert not report

    def test_created(self) -> None:
        report = detect_changes(ABSENT, present())
        assert report.changed
        assert report.reasons == (ChangeKind.CREATED,)

    def test_deleted(self) -> None:
        report = detect_changes(present(), ABSENT)
        assert report.reasons == (ChangeKind.DELETED,)

    def test_transitions_skip_field_comparison(self) -> None:
        """Created/deleted reports carry no field tags, whatever the options."""
        assert detect_changes(ABSENT, present(size_bytes=1), ALL_ON).reasons == (
            ChangeKind.CREATED,
        )
        assert detect_changes(present(size_bytes=1), ABSENT, ALL_ON).reasons == (
            ChangeKind.DELETED,
        )


class TestFieldComparison:
    """Test per-field tags on present snapshots."""

    def test_identical_is_no_change(self) -> None:
        report = detect_changes(present(), present(), ALL_ON)
        assert report.reasons == ()
        assert report.changed is False

    def test_size_only(self) -> None:
        report = detect_changes(present(), present(size_bytes=11))
        assert report.reasons == (ChangeKind.SIZE,)

    @pytest.mark.parametrize(
        ("field", "value", "kind"),
        [
            ("inode", 101, ChangeKind.INODE),
            ("mode", 0o100600, ChangeKind.MODE),
            ("link_count", 2, ChangeKind.LINK_COUNT),
            ("owner_uid", 0, ChangeKind.OWNER_UID),
            ("owner_gid", 0, ChangeKind.OWNER_GID),
            ("modify_time", 2001, ChangeKind.MODIFY_TIME),
            ("change_time", 3001, ChangeKind.CHANGE_TIME),
        ],
    )
    def test_single_field(self, field: str, value: int, kind: ChangeKind) -> None:
        report = detect_changes(present(), present(**{field: value}))
        assert report.reasons == (kind,)

    def test_all_fields_in_fixed_order(self) -> None:
        """Tags follow the fixed field order, not the order fields changed."""
        old = present(secondary=StreamMetadata.empty(b"\x00" * 16))
        new = present(
            secondary=dataclasses.replace(StreamMetadata.empty(b"\x02" * 16), size_bytes=5),
            change_time=1,
            modify_time=1,
            access_time=1,
            content_digest=b"\x03" * 16,
            size_bytes=1,
            owner_gid=1,
            owner_uid=1,
            link_count=9,
            mode=0o40755,
            inode=1,
        )
        report = detect_changes(old, new, ALL_ON)
        assert [r.value for r in report.reasons] == [
            "inode",
            "mode",
            "link-count",
            "owner-uid",
            "owner-gid",
            "size",
            "content-digest",
            "access-time",
            "modify-time",
            "change-time",
            "secondary-size",
            "secondary-digest",
        ]

    def test_subset_keeps_order(self) -> None:
        report = detect_changes(
            present(), present(change_time=1, size_bytes=1, inode=1)
        )
        assert report.reasons == (ChangeKind.INODE, ChangeKind.SIZE, ChangeKind.CHANGE_TIME)


class TestOptionalFields:
    """Test fields that are only compared when enabled."""

    def test_digest_ignored_when_disabled(self) -> None:
        report = detect_changes(present(), present(content_digest=b"\x09" * 16))
        assert report.reasons == ()

    def test_digest_compared_when_enabled(self) -> None:
        options = SnapshotOptions(digest=True)
        report = detect_changes(present(), present(content_digest=b"\x09" * 16), options)
        assert report.reasons == (ChangeKind.CONTENT_DIGEST,)

    def test_access_time_ignored_by_default(self) -> None:
        assert detect_changes(present(), present(access_time=1)).reasons == ()

    def test_access_time_compared_when_enabled(self) -> None:
        options = SnapshotOptions(access_time=True)
        report = detect_changes(present(), present(access_time=1), options)
        assert report.reasons == (ChangeKind.ACCESS_TIME,)

    def test_md5_suppresses_access_time(self) -> None:
        """With digests on, access time differences are never reported."""
        options = SnapshotOptions.resolve(atime=True, md5=True)
        report = detect_changes(present(), present(access_time=1), options)
        assert ChangeKind.ACCESS_TIME not in report.reasons
        assert report.changed is False

    def test_secondary_requires_both_sides(self) -> None:
        """Secondary fields are compared only when both snapshots have them."""
        fork = StreamMetadata.empty()
        grown = dataclasses.replace(fork, size_bytes=4)
        options = SnapshotOptions(secondary=True)
        assert detect_changes(present(), present(secondary=grown), options).reasons == ()
        assert detect_changes(
            present(secondary=fork), present(secondary=grown), options
        ).reasons == (ChangeKind.SECONDARY_SIZE,)

    def test_secondary_ignored_when_disabled(self) -> None:
        fork = StreamMetadata.empty()
        grown = dataclasses.replace(fork, size_bytes=4)
        report = detect_changes(present(secondary=fork), present(secondary=grown))
        assert report.reasons == ()


class TestRealFiles:
    """Scenario from creation through a same-size rewrite."""

    def test_create_then_rewrite(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        plain = SnapshotOptions.resolve()
        hashed = SnapshotOptions.resolve(md5=True)

        before = build_snapshot(str(path), plain)
        assert before is ABSENT

        path.write_text("x")
        created = build_snapshot(str(path), plain)
        assert detect_changes(before, created, plain).reasons == (ChangeKind.CREATED,)

        created_hashed = build_snapshot(str(path), hashed)
        mtime = os.stat(path).st_mtime
        path.write_text("y")
        os.utime(path, (mtime + 10, mtime + 10))

        rewritten = build_snapshot(str(path), plain)
        report = detect_changes(created, rewritten, plain)
        assert ChangeKind.MODIFY_TIME in report.reasons
        assert ChangeKind.SIZE not in report.reasons
        assert ChangeKind.CONTENT_DIGEST not in report.reasons

        rewritten_hashed = build_snapshot(str(path), hashed)
        report = detect_changes(created_hashed, rewritten_hashed, hashed)
        assert ChangeKind.CONTENT_DIGEST in report.reasons
        assert ChangeKind.MODIFY_TIME in report.reasons

    def test_unchanged_file_reports_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("stable")
        options = SnapshotOptions.resolve(md5=True)
        first = build_snapshot(str(path), options)
        second = build_snapshot(str(path), options)
        assert detect_changes(first, second, options).changed is False
