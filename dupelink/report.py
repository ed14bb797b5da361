from __future__ import annotations
from typing import List

from .config import Mode
from .models import ScanStats


def format_summary(stats: ScanStats, mode: Mode) -> List[str]:
    lines = ["", "=" * 70]
    if mode == Mode.DISCOVER:
        lines.append("HARDLINK DISCOVERY SUMMARY")
        lines.append("=" * 70)
        lines.append(f"Files scanned:         {stats.files_scanned:>10,}")
        lines.append(f"Linked files:          {stats.total_files:>10,}")
        lines.append(f"Hardlink groups:       {stats.hardlink_groups:>10,}")
    else:
        lines.append("DUPLICATE SCAN SUMMARY")
        lines.append("=" * 70)
        lines.append(f"Files: {stats.total_bytes // 1000:>12,} kBytes in {stats.total_files:>8,} files")
        lines.append(f"Dupes: {stats.duplicate_bytes // 1000:>12,} kBytes in {stats.duplicate_files:>8,} files")
        if stats.already_linked:
            lines.append(f"  {stats.already_linked:,} pairs were already hardlinked")
        if stats.readonly_skipped:
            lines.append(f"  {stats.readonly_skipped:,} read-only duplicates were left alone")
        if stats.link_limit_skipped:
            lines.append(f"  {stats.link_limit_skipped:,} duplicates were left because of the link limit")
        if stats.cross_device_skipped:
            lines.append(f"  {stats.cross_device_skipped:,} duplicates were on a different device than their original")
    if stats.zero_length_files:
        lines.append(f"  {stats.zero_length_files:,} files of zero length were skipped")
    if stats.unreadable_files:
        lines.append(f"  {stats.unreadable_files:,} files could not be opened")
    lines.append("=" * 70)
    return lines
