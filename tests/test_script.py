import pytest

from dupelink.config import DupelinkConfig, ScriptDialect
from dupelink.script import BatchScriptWriter, ShScriptWriter, escape_batch, make_script_writer


def test_escape_batch_doubles_percent():
    assert escape_batch("C:\\100%\\a%b.txt") == "C:\\100%%\\a%%b.txt"
    assert escape_batch("plain") == "plain"


def test_batch_hardlink_entry(tmp_path):
    out = tmp_path / "fix.bat"
    with BatchScriptWriter(str(out)) as writer:
        writer.record("C:\\x\\50%.txt", "C:\\y\\50%.txt", link=True, readonly=True)
    lines = out.read_text().splitlines()
    assert lines[0] == "@echo off"
    assert lines[-3:] == [
        'del /F "C:\\x\\50%%.txt"',
        'fsutil hardlink create "C:\\x\\50%%.txt" "C:\\y\\50%%.txt"',
        'attrib +r "C:\\x\\50%%.txt"',
    ]
    assert writer.entries == 1


def test_batch_delete_entry(tmp_path):
    out = tmp_path / "fix.bat"
    with BatchScriptWriter(str(out)) as writer:
        writer.record("a.txt", "b.txt", link=False, readonly=False)
    assert out.read_text().splitlines()[-2:] == ['del "a.txt"', 'rem duplicate of "b.txt"']


def test_sh_entries_are_quoted(tmp_path):
    out = tmp_path / "fix.sh"
    with ShScriptWriter(str(out)) as writer:
        writer.record("/d/my file.txt", "/k/it's.txt", link=True, readonly=True)
    lines = out.read_text().splitlines()
    assert lines[0] == "#!/bin/sh"
    assert lines[-3:] == [
        "rm -f '/d/my file.txt'",
        "ln '/k/it'\"'\"'s.txt' '/d/my file.txt'",
        "chmod a-w '/d/my file.txt'",
    ]


def test_write_after_close_fails(tmp_path):
    writer = ShScriptWriter(str(tmp_path / "fix.sh"))
    with writer:
        pass
    with pytest.raises(ValueError):
        writer.record("a", "b", link=False, readonly=False)


def test_make_script_writer(tmp_path):
    cfg = DupelinkConfig()
    assert make_script_writer(cfg) is None
    cfg.script.path = str(tmp_path / "x.bat")
    assert isinstance(make_script_writer(cfg), BatchScriptWriter)
    cfg.script.dialect = ScriptDialect.SH
    assert isinstance(make_script_writer(cfg), ShScriptWriter)
