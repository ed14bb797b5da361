"""Writers that record eliminations as a shell script instead of doing them."""
from __future__ import annotations
import shlex
from pathlib import Path
from typing import IO, List, Optional

from .config import DupelinkConfig, ScriptDialect


class ScriptWriter:
    """Base writer. Subclasses render one dialect's command lines."""

    def __init__(self, path: str) -> None:
        self.path = str(Path(path).absolute())
        self._fd: Optional[IO[str]] = None
        self.entries = 0

    def __enter__(self) -> "ScriptWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def open(self) -> None:
        self._fd = open(self.path, "w", encoding="utf-8", newline="\n")
        for line in self.header():
            self._fd.write(line + "\n")

    def close(self) -> None:
        if self._fd is None:
            return
        self._fd.close()
        self._fd = None

    def _write(self, line: str) -> None:
        if self._fd is None:
            raise ValueError("Script file is not open.")
        self._fd.write(line + "\n")

    def header(self) -> List[str]:
        return []

    def record(self, duplicate: str, kept: str, link: bool, readonly: bool) -> None:
        """Write the commands that eliminate ``duplicate`` in favour of ``kept``."""
        self._write(self.delete_command(duplicate, readonly))
        if link:
            self._write(self.link_command(duplicate, kept))
            if readonly:
                self._write(self.readonly_command(duplicate))
        else:
            self._write(self.note_command(kept))
        self.entries += 1

    def delete_command(self, path: str, readonly: bool) -> str:
        raise NotImplementedError

    def link_command(self, new_path: str, existing: str) -> str:
        raise NotImplementedError

    def readonly_command(self, path: str) -> str:
        raise NotImplementedError

    def note_command(self, kept: str) -> str:
        raise NotImplementedError


def escape_batch(path: str) -> str:
    """Double '%' so cmd.exe does not expand it as a variable."""
    return path.replace("%", "%%")


class BatchScriptWriter(ScriptWriter):
    def header(self) -> List[str]:
        return [
            "@echo off",
            "REM Batch file for replacing duplicates with hard links",
            "REM created by dupelink",
            "",
        ]

    def delete_command(self, path: str, readonly: bool) -> str:
        force = "/F " if readonly else ""
        return f'del {force}"{escape_batch(path)}"'

    def link_command(self, new_path: str, existing: str) -> str:
        return f'fsutil hardlink create "{escape_batch(new_path)}" "{escape_batch(existing)}"'

    def readonly_command(self, path: str) -> str:
        return f'attrib +r "{escape_batch(path)}"'

    def note_command(self, kept: str) -> str:
        return f'rem duplicate of "{escape_batch(kept)}"'


class ShScriptWriter(ScriptWriter):
    def header(self) -> List[str]:
        return [
            "#!/bin/sh",
            "# Script for replacing duplicates with hard links",
            "# created by dupelink",
            "set -e",
            "",
        ]

    def delete_command(self, path: str, readonly: bool) -> str:
        return f"rm -f {shlex.quote(path)}"

    def link_command(self, new_path: str, existing: str) -> str:
        return f"ln {shlex.quote(existing)} {shlex.quote(new_path)}"

    def readonly_command(self, path: str) -> str:
        return f"chmod a-w {shlex.quote(path)}"

    def note_command(self, kept: str) -> str:
        return f"# duplicate of {shlex.quote(kept)}"


def make_script_writer(cfg: DupelinkConfig) -> Optional[ScriptWriter]:
    """Build (unopened) the writer configured in ``cfg``, if any."""
    if not cfg.script.path:
        return None
    if cfg.script.dialect == ScriptDialect.SH:
        return ShScriptWriter(cfg.script.path)
    return BatchScriptWriter(cfg.script.path)
