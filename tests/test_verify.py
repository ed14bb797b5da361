import importlib
import os

import pytest

from dupelink.identity import FileIdentity
from dupelink.models import FileRecord
from dupelink.verify import Verdict, compare_contents, verify
from tests.utils import collision_pair, record_for, write

# The package re-exports the verify() function, which shadows the submodule attribute.
verify_mod = importlib.import_module("dupelink.verify")


def test_identical_files_are_duplicates(tmp_path):
    a = record_for(write(tmp_path / "a.txt", b"hello"))
    b = record_for(write(tmp_path / "b.txt", b"hello"))
    assert verify(b, a) is Verdict.DUPLICATE
    assert verify(a, b) is Verdict.DUPLICATE


def test_collision_is_distinct(tmp_path):
    a_path, b_path = collision_pair(tmp_path)
    a = record_for(a_path)
    b = record_for(b_path)
    assert a.key == b.key
    assert verify(b, a) is Verdict.DISTINCT


def test_size_mismatch_needs_no_io():
    a = FileRecord(key=1, identity=FileIdentity(1, 1), nlink=1, size=5, path="/missing/a")
    b = FileRecord(key=1, identity=FileIdentity(1, 2), nlink=1, size=6, path="/missing/b")
    assert verify(a, b) is Verdict.DISTINCT


def test_hardlinked_pair_is_never_read(tmp_path, monkeypatch):
    a_path = write(tmp_path / "a.txt", b"hello")
    b_path = tmp_path / "b.txt"
    os.link(a_path, b_path)
    a = record_for(a_path)
    b = record_for(b_path)

    calls = []
    monkeypatch.setattr(verify_mod, "compare_contents", lambda *args, **kw: calls.append(args))
    # Reading is now impossible; identity alone must decide
    a_path.unlink()
    b_path.unlink()

    assert verify(b, a) is Verdict.SAME_FILE
    assert calls == []


def test_zero_link_count_falls_back_to_content(tmp_path):
    a = record_for(write(tmp_path / "a.txt", b"hello"))
    b = record_for(write(tmp_path / "b.txt", b"hellp"))
    b.identity = a.identity
    b.nlink = 0
    assert verify(b, a) is Verdict.DISTINCT


def test_unopenable_file_is_distinct(tmp_path, capsys):
    a = record_for(write(tmp_path / "a.txt", b"hello"))
    b = record_for(write(tmp_path / "b.txt", b"hello"))
    os.unlink(b.path)
    assert verify(b, a) is Verdict.DISTINCT
    assert "Could not compare" in capsys.readouterr().err


def test_compare_contents_small_chunks(tmp_path):
    a = write(tmp_path / "a.bin", b"0123456789" * 10)
    b = write(tmp_path / "b.bin", b"0123456789" * 9 + b"012345678X")
    assert compare_contents(str(a), str(a), 100, chunk_bytes=7)
    assert not compare_contents(str(a), str(b), 100, chunk_bytes=7)


def test_short_read_is_reported(tmp_path, capsys):
    a = write(tmp_path / "a.txt", b"abc")
    b = write(tmp_path / "b.txt", b"abd")
    assert not compare_contents(str(a), str(b), 5)
    err = capsys.readouterr().err
    assert "Error doing full file read" in err


def test_compare_missing_file_raises(tmp_path):
    a = write(tmp_path / "a.txt", b"abc")
    with pytest.raises(OSError):
        compare_contents(str(a), str(tmp_path / "nope"), 3)
