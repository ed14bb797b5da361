"""Byte-exact confirmation of signature matches."""
from __future__ import annotations
from enum import Enum
from typing import Optional

from .models import FileRecord
from .util import LogCallback, emit_warning

COMPARE_CHUNK_BYTES = 0x10000


class Verdict(str, Enum):
    DUPLICATE = "duplicate"
    SAME_FILE = "same_file"  # already hard links of one file, nothing was read
    DISTINCT = "distinct"

    @property
    def is_duplicate(self) -> bool:
        return self is not Verdict.DISTINCT


def compare_contents(
    path_a: str,
    path_b: str,
    size: int,
    chunk_bytes: int = COMPARE_CHUNK_BYTES,
    log_cb: Optional[LogCallback] = None,
) -> bool:
    """Compare ``size`` bytes of two files chunk by chunk.

    A short read is reported but does not stop the comparison; the shorter
    buffer then simply fails to match unless both came up equally short.
    Raises OSError if either file cannot be opened.
    """
    with open(path_a, "rb") as fa, open(path_b, "rb") as fb:
        left = size
        while left:
            want = min(left, chunk_bytes)
            buf_a = fa.read(want)
            if len(buf_a) != want:
                emit_warning(f"Error doing full file read on '{path_a}'", log_cb)
            buf_b = fb.read(want)
            if len(buf_b) != want:
                emit_warning(f"Error doing full file read on '{path_b}'", log_cb)
            left -= want
            if buf_a != buf_b:
                return False
    return True


def verify(
    candidate: FileRecord,
    existing: FileRecord,
    chunk_bytes: int = COMPARE_CHUNK_BYTES,
    log_cb: Optional[LogCallback] = None,
) -> Verdict:
    if candidate.size != existing.size:
        return Verdict.DISTINCT

    if candidate.nlink and existing.nlink and candidate.identity == existing.identity:
        return Verdict.SAME_FILE

    try:
        same = compare_contents(candidate.path, existing.path, candidate.size, chunk_bytes, log_cb)
    except OSError as exc:
        # Equality not proven, so the pair is treated as distinct
        emit_warning(f"Could not compare '{candidate.path}' with '{existing.path}': {exc}", log_cb)
        return Verdict.DISTINCT
    return Verdict.DUPLICATE if same else Verdict.DISTINCT
