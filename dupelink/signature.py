"""
Cheap file signatures used to bucket candidate duplicates.

The signature is a 32-bit CRC-style register and a 32-bit rotating sum over
the first block of a file, with the file length folded into the sum. It is a
pre-filter only: equal signatures never prove equal content.
"""
from __future__ import annotations
from typing import NamedTuple, Tuple

from .errors import UnreadableFileError

SIGNATURE_BYTES = 32768
MASK32 = 0xFFFFFFFF


class Signature(NamedTuple):
    crc: int
    sum: int


def calc_checksum(data: bytes, crc: int = 0, total: int = 0) -> Tuple[int, int]:
    """Fold ``data`` into the (crc, sum) pair, one byte at a time."""
    for byte in data:
        crc ^= byte
        crc = (crc >> 8) ^ ((crc & 0xFF) << 24) ^ ((crc & 0xFF) << 9)
        total = (total + byte) & MASK32
        total = ((total << 1) & MASK32) + (total >> 31)
    return crc, total


def signature_of(prefix: bytes, size: int) -> Signature:
    crc, total = calc_checksum(prefix)
    return Signature(crc, (total + size) & MASK32)


def file_signature(path: str, size: int, nbytes: int = SIGNATURE_BYTES) -> Signature:
    """Read up to ``nbytes`` from the start of ``path`` and sign it.

    Raises:
        UnreadableFileError: the file could not be opened, or returned fewer
          bytes than its recorded size promised.
    """
    want = min(size, nbytes)
    try:
        with open(path, "rb") as f:
            prefix = f.read(want)
    except OSError as exc:
        raise UnreadableFileError(path, f"can't open ({exc.strerror or exc})") from exc
    if len(prefix) != want:
        raise UnreadableFileError(path, "file read problem")
    return signature_of(prefix, size)


def format_signature(sig: Signature) -> str:
    return f"{sig.crc:08x}{sig.sum:08x}"
