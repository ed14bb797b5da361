"""
dupelink - find byte-identical files and replace them with hard links.

Files are bucketed by a cheap signature over their first 32 KiB plus their
length; only files sharing a signature are ever compared byte for byte, and
nothing is deleted or relinked without that full comparison.

Example usage:
    >>> from dupelink import default_config, run_scan, Mode
    >>> cfg = default_config()
    >>> cfg.scan.mode = Mode.HARDLINK
    >>> stats = run_scan(cfg, ["photos/**/*.jpg"])
    >>> print(stats.duplicate_files, stats.duplicate_bytes)
"""

__version__ = "1.25.0"

from dupelink.config import DupelinkConfig, Mode, default_config, load_config
from dupelink.errors import ConfigError, DupelinkError, FatalIOError, UnreadableFileError
from dupelink.grouping import SignatureIndex
from dupelink.models import FileRecord, ScanStats
from dupelink.scan import ScanSession, run_scan
from dupelink.signature import Signature, file_signature
from dupelink.verify import Verdict, verify

__all__ = [
    "__version__",
    "ConfigError",
    "DupelinkConfig",
    "DupelinkError",
    "FatalIOError",
    "FileRecord",
    "Mode",
    "ScanSession",
    "ScanStats",
    "Signature",
    "SignatureIndex",
    "UnreadableFileError",
    "Verdict",
    "default_config",
    "file_signature",
    "load_config",
    "run_scan",
    "verify",
]
