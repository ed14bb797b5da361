"""Report clusters of files that are already hard links of one another."""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from .grouping import SignatureIndex
from .util import LogCallback, emit_log


@dataclass
class LinkGroup:
    paths: List[str]
    total_links: int

    @property
    def found(self) -> int:
        return len(self.paths)

    @property
    def complete(self) -> bool:
        return self.found >= self.total_links


def find_link_groups(index: SignatureIndex, list_all: bool = False) -> List[LinkGroup]:
    """Collect link groups from an index built in discovery mode.

    By default only groups with more than one member found AND more links on
    disk than were found are reported, i.e. groups that reach outside the
    scanned path set. ``list_all`` reports every chain.
    """
    groups: List[LinkGroup] = []
    for chain in index.chains():
        # Members were stat'ed at different times; trust the highest count seen
        total_links = max(rec.nlink for rec in chain)
        group = LinkGroup([rec.path for rec in chain], total_links)
        if list_all or (group.found > 1 and total_links > group.found):
            groups.append(group)
    return groups


def report_link_groups(groups: List[LinkGroup], log_cb: Optional[LogCallback] = None) -> int:
    for group in groups:
        emit_log("", log_cb)
        emit_log(
            f"Hardlink group, {group.found} of {group.total_links} hardlinked instances found in search tree:",
            log_cb,
        )
        for path in group.paths:
            emit_log(f'  "{path}"', log_cb)
    emit_log("", log_cb)
    emit_log(f"Number of hardlink groups found: {len(groups)}", log_cb)
    return len(groups)
