"""
Elimination policy for confirmed duplicates.

Given a candidate that the verifier matched against a kept record, decide
whether to leave it, delete it, replace it with a hard link to the kept file,
or write the equivalent commands to a script, and carry that out.
"""
from __future__ import annotations
import os
import stat
from enum import Enum
from typing import Optional

from .config import DupelinkConfig, Mode
from .errors import FatalIOError
from .identity import LinkLimits
from .models import FileRecord, ScanStats
from .script import ScriptWriter
from .util import LogCallback, emit_log, emit_warning
from .verify import Verdict, verify


class Action(str, Enum):
    NOT_DUPLICATE = "not_duplicate"
    SAME_PATH = "same_path"
    REPORTED = "reported"
    SKIPPED_READONLY = "skipped_readonly"
    SKIPPED_LINK_LIMIT = "skipped_link_limit"
    SKIPPED_CROSS_DEVICE = "skipped_cross_device"
    ALREADY_LINKED = "already_linked"
    DELETED = "deleted"
    HARDLINKED = "hardlinked"
    SCRIPTED = "scripted"


# Outcomes after which the candidate is dropped rather than stored. The rest
# leave the candidate on disk untouched, so it joins the chain and can be the
# kept copy for later duplicates.
ABSORBING_ACTIONS = frozenset(
    {
        Action.SAME_PATH,
        Action.REPORTED,
        Action.SKIPPED_READONLY,
        Action.DELETED,
        Action.HARDLINKED,
        Action.SCRIPTED,
    }
)


def absorbs(action: Action) -> bool:
    return action in ABSORBING_ACTIONS


def is_readonly(st_mode: int) -> bool:
    return not (st_mode & stat.S_IWUSR)


class Eliminator:
    def __init__(
        self,
        cfg: DupelinkConfig,
        stats: ScanStats,
        link_limits: Optional[LinkLimits] = None,
        script_writer: Optional[ScriptWriter] = None,
        log_cb: Optional[LogCallback] = None,
    ) -> None:
        self.cfg = cfg
        self.stats = stats
        self.link_limits = link_limits or LinkLimits(cfg.engine.link_limit)
        self.script_writer = script_writer
        self.log_cb = log_cb
        self._counted: Optional[FileRecord] = None

    def check(self, candidate: FileRecord, kept: FileRecord) -> bool:
        """Absorb callback for the signature index."""
        if candidate.path == kept.path:
            self.stats.count_outcome(Action.SAME_PATH.value)
            return True
        verdict = verify(candidate, kept, self.cfg.engine.compare_chunk_bytes, self.log_cb)
        if verdict is Verdict.DISTINCT:
            return False

        # A candidate may be confirmed against several chain members; count it once
        if self._counted is not candidate:
            self._counted = candidate
            if verdict is Verdict.DUPLICATE:
                self.stats.duplicate_files += 1
                self.stats.duplicate_bytes += candidate.size
            else:
                self.stats.already_linked += 1

        action = self.apply(candidate, kept, verdict)
        self.stats.count_outcome(action.value)
        if action is Action.SKIPPED_READONLY:
            self.stats.readonly_skipped += 1
        elif action is Action.SKIPPED_LINK_LIMIT:
            self.stats.link_limit_skipped += 1
        elif action is Action.SKIPPED_CROSS_DEVICE:
            self.stats.cross_device_skipped += 1
        return absorbs(action)

    def apply(self, candidate: FileRecord, kept: FileRecord, verdict: Verdict) -> Action:
        """Run the policy for one confirmed pair and return what was done."""
        # The same name seen twice is not a duplicate of itself
        if candidate.path == kept.path:
            return Action.SAME_PATH
        if not verdict.is_duplicate:
            return Action.NOT_DUPLICATE

        if self.cfg.scan.print_duplicates:
            emit_log(f"[DUPE] Duplicate: '{kept.path}'", self.log_cb)
            emit_log(f"       With:      '{candidate.path}'", self.log_cb)
            if verdict is Verdict.SAME_FILE:
                emit_log("    (hardlinked instances of same file)", self.log_cb)

        if self.cfg.scan.mode == Mode.REPORT:
            return Action.REPORTED

        try:
            st = os.stat(candidate.path)
        except OSError as exc:
            raise FatalIOError(candidate.path, f"stat failed ({exc.strerror or exc})") from exc
        readonly = is_readonly(st.st_mode)

        if readonly and not self.cfg.scan.allow_readonly:
            emit_log(f"[SKIP] Skipping duplicate readonly file '{candidate.path}'", self.log_cb)
            return Action.SKIPPED_READONLY

        link = self.cfg.links_wanted
        if link:
            if verdict is Verdict.SAME_FILE:
                return Action.ALREADY_LINKED
            if kept.identity.device != candidate.identity.device:
                emit_log(
                    f"[SKIP] Can't hardlink across devices: '{candidate.path}' -> '{kept.path}'",
                    self.log_cb,
                )
                return Action.SKIPPED_CROSS_DEVICE
            limit = self.link_limits.limit_for(kept.path, kept.identity.device)
            if kept.nlink >= limit:
                emit_log(
                    f"[SKIP] '{kept.path}' already has {kept.nlink} links (limit {limit}); "
                    f"leaving '{candidate.path}'",
                    self.log_cb,
                )
                return Action.SKIPPED_LINK_LIMIT

        if self.script_writer is not None:
            self.script_writer.record(candidate.path, kept.path, link, readonly)
            if link:
                kept.nlink += 1
            return Action.SCRIPTED

        if readonly:
            try:
                os.chmod(candidate.path, st.st_mode | stat.S_IWUSR)
            except OSError as exc:
                raise FatalIOError(candidate.path, f"could not clear read-only ({exc.strerror or exc})") from exc

        try:
            os.unlink(candidate.path)
        except OSError as exc:
            raise FatalIOError(candidate.path, f"delete failed ({exc.strerror or exc})") from exc

        if not link:
            emit_log(f"[DEL] Deleted duplicate '{candidate.path}'", self.log_cb)
            return Action.DELETED

        try:
            os.link(kept.path, candidate.path)
        except OSError as exc:
            raise FatalIOError(
                candidate.path, f"create hard link to '{kept.path}' failed ({exc.strerror or exc})"
            ) from exc
        kept.nlink += 1
        self._restore_metadata(candidate.path, st)
        emit_log(f"[LINK] Created hardlink '{candidate.path}' -> '{kept.path}'", self.log_cb)
        return Action.HARDLINKED

    def _restore_metadata(self, path: str, st: os.stat_result) -> None:
        # The new name shares the kept file's inode, so this rewrites its
        # permission bits and mtime too.
        try:
            os.chmod(path, stat.S_IMODE(st.st_mode))
            os.utime(path, (st.st_mtime, st.st_mtime))
        except OSError as exc:
            emit_warning(f"Could not restore mode/mtime on '{path}': {exc}", self.log_cb)
