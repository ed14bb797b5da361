# dupelink/scan.py
"""
Single-pass duplicate scan.

Each candidate path is fully handled (identity, signature, grouping,
verification, elimination) before the next one is requested, so the index and
the counters are only ever touched by one caller.
"""
from __future__ import annotations
import os
from contextlib import ExitStack
from typing import Iterable, Optional, Sequence, Set

from .config import DupelinkConfig, Mode, validate_config
from .eliminate import Eliminator
from .errors import UnreadableFileError
from .grouping import Outcome, SignatureIndex
from .hardlinks import find_link_groups, report_link_groups
from .identity import LinkLimits, resolve_identity
from .models import FileRecord, ScanStats
from .script import ScriptWriter, make_script_writer
from .signature import file_signature, format_signature
from .util import LogCallback, ProgressCallback, emit_log, emit_progress, emit_warning
from .walk import iter_patterns


class ScanSession:
    """Owns the signature index and counters for one run."""

    def __init__(
        self,
        cfg: DupelinkConfig,
        script_writer: Optional[ScriptWriter] = None,
        log_cb: Optional[LogCallback] = None,
        progress_cb: Optional[ProgressCallback] = None,
    ) -> None:
        self.cfg = cfg
        self.index = SignatureIndex()
        self.stats = ScanStats()
        self.link_limits = LinkLimits(cfg.engine.link_limit)
        self.script_writer = script_writer
        self.eliminator = Eliminator(cfg, self.stats, self.link_limits, script_writer, log_cb)
        self.log_cb = log_cb
        self.progress_cb = progress_cb
        self.files_seen = 0
        self._seen_paths: Set[str] = set()

    @property
    def discovering(self) -> bool:
        return self.cfg.scan.mode == Mode.DISCOVER

    def _unreadable(self, exc: UnreadableFileError) -> None:
        self.stats.unreadable_files += 1
        if not self.cfg.scan.hide_unreadable_warning:
            emit_warning(str(exc), self.log_cb)

    def process_file(self, path: str, reference: bool = False) -> Optional[Outcome]:
        """Scan one candidate. Returns where it was placed, or None if skipped."""
        path = os.path.abspath(path)
        # Overlapping patterns can name a file twice; it must never meet itself
        if path in self._seen_paths:
            return None
        self._seen_paths.add(path)
        self.files_seen += 1
        emit_progress(self.progress_cb, "scanning", self.files_seen, 0, path)

        if self.script_writer is not None and path == self.script_writer.path:
            return None
        self.stats.files_scanned += 1

        try:
            identity, nlink, st = resolve_identity(path)
        except UnreadableFileError as exc:
            self._unreadable(exc)
            return None

        size = st.st_size
        if size == 0 and self.cfg.scan.skip_zero_length:
            self.stats.zero_length_files += 1
            return None

        if self.cfg.scan.verbose:
            emit_log(
                f"[INFO] Hardlinked ({nlink} links) node={identity.device:x} {identity.inode:x}: {path}",
                self.log_cb,
            )

        if self.discovering:
            if nlink == 1:
                return None
            # Discovery groups by identity; the file contents are never read
            key = identity
        else:
            try:
                key = file_signature(path, size, self.cfg.engine.signature_bytes)
            except UnreadableFileError as exc:
                self._unreadable(exc)
                return None
            if self.cfg.scan.print_signatures:
                emit_log(f"[SIG] {format_signature(key)} {size:10d} {path}", self.log_cb)

        record = FileRecord(
            key=key,
            identity=identity,
            nlink=nlink,
            size=size,
            path=path,
            st_mode=st.st_mode,
            st_mtime=st.st_mtime,
            reference=reference,
        )
        self.stats.total_files += 1
        self.stats.total_bytes += size

        chain_all = reference or self.cfg.scan.reference_only or self.discovering
        placement = self.index.insert(record, self.eliminator.check, chain_all=chain_all)
        return placement.outcome

    def run(self, paths: Iterable[str], reference_paths: Iterable[str] = ()) -> ScanStats:
        """Scan reference files first, then the candidates."""
        for path in reference_paths:
            self.process_file(path, reference=True)
        for path in paths:
            self.process_file(path)
        return self.stats

    def report_link_groups(self) -> int:
        groups = find_link_groups(self.index, self.cfg.scan.list_all_link_groups)
        self.stats.hardlink_groups = report_link_groups(groups, self.log_cb)
        return self.stats.hardlink_groups


def run_scan(
    cfg: DupelinkConfig,
    patterns: Sequence[str],
    reference_patterns: Sequence[str] = (),
    log_cb: Optional[LogCallback] = None,
    progress_cb: Optional[ProgressCallback] = None,
) -> ScanStats:
    """Expand ``patterns`` and run a full scan with the configured mode.

    Raises:
        ConfigError: the configuration is not runnable.
        FatalIOError: an elimination failed part way; the run was aborted.
    """
    validate_config(cfg)
    emit_progress(progress_cb, "start", 0, 0, "Preparing scan...")

    with ExitStack() as stack:
        writer = make_script_writer(cfg)
        if writer is not None:
            stack.enter_context(writer)
        session = ScanSession(cfg, writer, log_cb, progress_cb)
        follow = cfg.scan.follow_links
        session.run(
            iter_patterns(patterns, follow, log_cb),
            iter_patterns(reference_patterns, follow, log_cb),
        )
        if session.discovering:
            session.report_link_groups()

    emit_progress(progress_cb, "done", session.files_seen, session.files_seen, "Scan complete")
    return session.stats
