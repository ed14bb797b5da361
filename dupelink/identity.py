"""Filesystem identity of a file, independent of the name it was found under."""
from __future__ import annotations
import os
from typing import Dict, NamedTuple, Optional, Tuple

from .config import DEFAULT_LINK_LIMIT
from .errors import UnreadableFileError


class FileIdentity(NamedTuple):
    """Volume + file index pair. Equal for two paths iff they are hard links."""

    device: int
    inode: int


def resolve_identity(path: str) -> Tuple[FileIdentity, int, os.stat_result]:
    """Open ``path`` read-only and return its identity, link count and stat.

    Opening (rather than a bare stat) confirms the file is readable before any
    signature work is spent on it.
    """
    flags = os.O_RDONLY | getattr(os, "O_BINARY", 0)
    try:
        fd = os.open(path, flags)
    except OSError as exc:
        raise UnreadableFileError(path, f"could not read ({exc.strerror or exc})") from exc
    try:
        st = os.fstat(fd)
    except OSError as exc:
        raise UnreadableFileError(path, f"stat failed ({exc.strerror or exc})") from exc
    finally:
        os.close(fd)
    return FileIdentity(st.st_dev, st.st_ino), st.st_nlink, st


class LinkLimits:
    """Per-device cache of the maximum hard link count a file may have."""

    def __init__(self, override: Optional[int] = None) -> None:
        self._override = override
        self._by_device: Dict[int, int] = {}

    def limit_for(self, path: str, device: int) -> int:
        if self._override is not None:
            return self._override
        cached = self._by_device.get(device)
        if cached is not None:
            return cached
        limit = DEFAULT_LINK_LIMIT
        try:
            limit = os.pathconf(path, "PC_LINK_MAX")
        except (AttributeError, ValueError, OSError):
            # pathconf is POSIX only; some filesystems refuse the query
            pass
        if limit is None or limit <= 0:
            limit = DEFAULT_LINK_LIMIT
        self._by_device[device] = limit
        return limit
