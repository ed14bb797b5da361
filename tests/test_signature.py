import pytest

from dupelink.errors import UnreadableFileError
from dupelink.signature import (
    MASK32,
    Signature,
    calc_checksum,
    file_signature,
    format_signature,
    signature_of,
)
from tests.utils import collision_pair, write


def test_calc_checksum_single_byte():
    # crc: 0x61 -> (0x61 << 24) ^ (0x61 << 9); sum: 0x61 rotated left by one
    assert calc_checksum(b"a") == (0x6100C200, 0xC2)


def test_calc_checksum_empty():
    assert calc_checksum(b"") == (0, 0)


def test_sum_rotates_high_bit_into_low_bit():
    assert calc_checksum(b"\x00", crc=0, total=0x80000000) == (0, 1)


def test_checksum_stays_32_bit():
    crc, total = calc_checksum(b"\xff" * 5000)
    assert 0 <= crc <= MASK32
    assert 0 <= total <= MASK32


def test_checksum_is_incremental():
    whole = calc_checksum(b"hello world")
    crc, total = calc_checksum(b"hello ")
    assert calc_checksum(b"world", crc, total) == whole


def test_size_is_folded_into_sum():
    assert signature_of(b"", 7) == Signature(0, 7)
    assert signature_of(b"", 2**32 + 5) == Signature(0, 5)


def test_equal_content_equal_signature(tmp_path):
    a = write(tmp_path / "a.txt", b"hello")
    b = write(tmp_path / "b.txt", b"hello")
    c = write(tmp_path / "c.txt", b"world")
    assert file_signature(str(a), 5) == file_signature(str(b), 5)
    assert file_signature(str(a), 5) != file_signature(str(c), 5)


def test_same_prefix_different_length(tmp_path):
    a = write(tmp_path / "a.bin", b"x" * 40000)
    b = write(tmp_path / "b.bin", b"x" * 40001)
    assert file_signature(str(a), 40000) != file_signature(str(b), 40001)


def test_difference_after_window_is_invisible(tmp_path):
    a, b = collision_pair(tmp_path)
    assert file_signature(str(a), 40000) == file_signature(str(b), 40000)


def test_missing_file_is_unreadable(tmp_path):
    with pytest.raises(UnreadableFileError):
        file_signature(str(tmp_path / "nope"), 10)


def test_short_read_is_unreadable(tmp_path):
    a = write(tmp_path / "a.txt", b"hello")
    with pytest.raises(UnreadableFileError):
        file_signature(str(a), 100)


def test_format_signature():
    assert format_signature(Signature(0x1, 0xABC)) == "0000000100000abc"
