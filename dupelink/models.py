from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable

from .identity import FileIdentity


@dataclass
class FileRecord:
    """One file retained by the signature index.

    ``key`` is the content signature in the normal modes and the file
    identity itself in hardlink discovery mode. ``nlink`` is the link count
    observed at scan time and is bumped as duplicates get linked onto it.
    """

    key: Hashable
    identity: FileIdentity
    nlink: int
    size: int
    path: str
    st_mode: int = 0
    st_mtime: float = 0.0
    reference: bool = False


@dataclass
class ScanStats:
    files_scanned: int = 0
    total_files: int = 0
    total_bytes: int = 0
    duplicate_files: int = 0
    duplicate_bytes: int = 0
    already_linked: int = 0
    zero_length_files: int = 0
    unreadable_files: int = 0
    readonly_skipped: int = 0
    link_limit_skipped: int = 0
    cross_device_skipped: int = 0
    hardlink_groups: int = 0
    outcomes: Dict[str, int] = field(default_factory=dict)

    def count_outcome(self, name: str) -> None:
        self.outcomes[name] = self.outcomes.get(name, 0) + 1

    def as_dict(self) -> Dict[str, object]:
        return {
            "files_scanned": self.files_scanned,
            "total_files": self.total_files,
            "total_bytes": self.total_bytes,
            "duplicate_files": self.duplicate_files,
            "duplicate_bytes": self.duplicate_bytes,
            "already_linked": self.already_linked,
            "zero_length_files": self.zero_length_files,
            "unreadable_files": self.unreadable_files,
            "readonly_skipped": self.readonly_skipped,
            "link_limit_skipped": self.link_limit_skipped,
            "cross_device_skipped": self.cross_device_skipped,
            "hardlink_groups": self.hardlink_groups,
            "outcomes": dict(self.outcomes),
        }
