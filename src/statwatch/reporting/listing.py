"""``ls -l`` style rendering of a snapshot."""

from __future__ import annotations

import stat as stat_module
import sys
from datetime import datetime

from statwatch.watching.snapshot import StreamMetadata


def owner_name(uid: int) -> str:
    if sys.platform == "win32":
        return str(uid)
    import pwd

    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def group_name(gid: int) -> str:
    if sys.platform == "win32":
        return str(gid)
    import grp

    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def format_time(seconds: int) -> str:
    return datetime.fromtimestamp(seconds).strftime("%Y-%m-%d %H:%M:%S")


def long_listing(path: str, meta: StreamMetadata) -> str:
    """One line in the shape of ``ls -l`` for ``path``."""
    return " ".join(
        [
            stat_module.filemode(meta.mode),
            str(meta.link_count),
            owner_name(meta.owner_uid),
            group_name(meta.owner_gid),
            str(meta.size_bytes),
            format_time(meta.modify_time),
            path,
        ]
    )
