import os
from pathlib import Path

from dupelink.identity import resolve_identity
from dupelink.models import FileRecord
from dupelink.signature import file_signature


def write(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def record_for(path: Path) -> FileRecord:
    """Build the record the scan loop would build for ``path``."""
    identity, nlink, st = resolve_identity(str(path))
    return FileRecord(
        key=file_signature(str(path), st.st_size),
        identity=identity,
        nlink=nlink,
        size=st.st_size,
        path=os.path.abspath(str(path)),
        st_mode=st.st_mode,
        st_mtime=st.st_mtime,
    )


def collision_pair(tmp_path: Path):
    """Two 40000-byte files sharing the first 35000 bytes."""
    common = (bytes(range(256)) * 137)[:35000]
    a = write(tmp_path / "big_a.bin", common + b"A" * 5000)
    b = write(tmp_path / "big_b.bin", common + b"B" * 5000)
    return a, b
