"""Point-in-time observations of watched paths.

A snapshot is either ``ABSENT`` or a ``PresentSnapshot`` carrying the stat
fields of the primary stream and, optionally, of the secondary (resource
fork) stream. Snapshots are frozen; the watcher replaces them every cycle.
"""

from __future__ import annotations

import hashlib
import os
import stat as stat_module
import sys
from dataclasses import dataclass
from typing import ClassVar

from statwatch.errors import IOFailure
from statwatch.logging import get_logger

log = get_logger("watching")

# Digest of a directory. Shorter than any MD5 digest, so it never matches one.
DIRECTORY_DIGEST = b"<directory>"

_CHUNK_SIZE = 1024 * 128


@dataclass(frozen=True)
class WatchTarget:
    """One watched path, as given on the command line."""

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class StreamMetadata:
    """Stat fields of a single data stream.

    Timestamps are truncated to whole seconds.
    """

    inode: int
    mode: int
    link_count: int
    owner_uid: int
    owner_gid: int
    size_bytes: int
    access_time: int
    modify_time: int
    change_time: int
    content_digest: bytes | None = None

    @classmethod
    def from_stat(
        cls, st: os.stat_result, content_digest: bytes | None = None
    ) -> StreamMetadata:
        return cls(
            inode=st.st_ino,
            mode=st.st_mode,
            link_count=st.st_nlink,
            owner_uid=st.st_uid,
            owner_gid=st.st_gid,
            size_bytes=st.st_size,
            access_time=int(st.st_atime),
            modify_time=int(st.st_mtime),
            change_time=int(st.st_ctime),
            content_digest=content_digest,
        )

    @classmethod
    def empty(cls, content_digest: bytes | None = None) -> StreamMetadata:
        """All-zero metadata, used where a stream does not exist."""
        return cls(0, 0, 0, 0, 0, 0, 0, 0, 0, content_digest)


@dataclass(frozen=True)
class AbsentSnapshot:
    """The path did not exist when observed."""

    exists: ClassVar[bool] = False


@dataclass(frozen=True)
class PresentSnapshot:
    """The path existed; ``secondary`` is set only when fork tracking is on."""

    primary: StreamMetadata
    secondary: StreamMetadata | None = None

    exists: ClassVar[bool] = True


Snapshot = AbsentSnapshot | PresentSnapshot

ABSENT = AbsentSnapshot()


def md5_available() -> bool:
    """Whether the runtime lets us compute MD5 (FIPS builds may refuse)."""
    try:
        hashlib.md5(b"", usedforsecurity=False)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class SnapshotOptions:
    """Which optional fields to capture and compare.

    Use ``resolve()`` to build this from user options: reading content for a
    digest updates the access time, so access-time comparison is turned off
    whenever digest tracking is on.
    """

    digest: bool = False
    access_time: bool = False
    secondary: bool = False

    @classmethod
    def resolve(
        cls, atime: bool = False, md5: bool = False, rsrc: bool = False
    ) -> SnapshotOptions:
        if md5 and not md5_available():
            log.warning("MD5 is not available in this Python build; content digests disabled")
            md5 = False
        if md5 and atime:
            log.info("Access time comparison disabled while content digests are enabled")
        return cls(digest=md5, access_time=atime and not md5, secondary=rsrc)


def digest_file(path: str) -> bytes:
    """Return the MD5 digest of a file's full content.

    Directories yield ``DIRECTORY_DIGEST``. The path is opened literally, so
    names starting with whitespace or "-" need no escaping.

    Raises:
        IOFailure: If the file cannot be read.
    """
    if os.path.isdir(path):
        return DIRECTORY_DIGEST
    digest = hashlib.md5(usedforsecurity=False)
    try:
        with open(path, "rb") as handle:
            while True:
                chunk = handle.read(_CHUNK_SIZE)
                if not chunk:
                    break
                digest.update(chunk)
    except OSError as e:
        raise IOFailure(path, e) from e
    return digest.digest()


def secondary_stream_path(path: str, is_dir: bool = False) -> str | None:
    """Path of the resource fork of ``path``, or None if it has none.

    Only macOS exposes forks through the filesystem, via ``..namedfork/rsrc``.
    """
    if sys.platform != "darwin" or is_dir:
        return None
    return os.path.join(path, "..namedfork", "rsrc")


def _read_stream(path: str, options: SnapshotOptions) -> StreamMetadata:
    try:
        st = os.stat(path)
    except OSError as e:
        raise IOFailure(path, e) from e
    content_digest = digest_file(path) if options.digest else None
    return StreamMetadata.from_stat(st, content_digest)


def build_snapshot(path: str, options: SnapshotOptions) -> Snapshot:
    """Observe ``path`` under ``options``.

    A missing path is a normal result (``ABSENT``).

    Raises:
        IOFailure: If stat or read fails for any other reason.
    """
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return ABSENT
    except OSError as e:
        raise IOFailure(path, e) from e

    content_digest = None
    if options.digest:
        try:
            content_digest = digest_file(path)
        except IOFailure as e:
            # Removed between the stat and the read
            if isinstance(e.error, FileNotFoundError):
                return ABSENT
            raise
    primary = StreamMetadata.from_stat(st, content_digest)

    secondary = None
    if options.secondary:
        fork_path = secondary_stream_path(path, is_dir=stat_module.S_ISDIR(st.st_mode))
        if fork_path is None:
            empty_digest = hashlib.md5(b"", usedforsecurity=False).digest() if options.digest else None
            secondary = StreamMetadata.empty(empty_digest)
        else:
            secondary = _read_stream(fork_path, options)

    return PresentSnapshot(primary=primary, secondary=secondary)
