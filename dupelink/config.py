from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError
import yaml

from .errors import ConfigError

DEFAULT_LINK_LIMIT = 1023  # NTFS per-file hard link cap

class Mode(str, Enum):
    REPORT = "report"
    HARDLINK = "hardlink"
    DELETE = "delete"
    SCRIPT = "script"
    DISCOVER = "discover"

class ScriptDialect(str, Enum):
    BATCH = "batch"
    SH = "sh"

class ScanConfig(BaseModel):
    mode: Mode = Mode.REPORT
    follow_links: bool = False
    skip_zero_length: bool = True
    allow_readonly: bool = False
    reference_only: bool = False
    hide_unreadable_warning: bool = False
    print_signatures: bool = False
    print_duplicates: bool = True
    verbose: bool = False
    show_progress: bool = True
    list_all_link_groups: bool = False

class EngineConfig(BaseModel):
    signature_bytes: int = 32768
    compare_chunk_bytes: int = 65536
    link_limit: Optional[int] = None  # None: ask the filesystem

class ScriptConfig(BaseModel):
    path: Optional[str] = None
    dialect: ScriptDialect = ScriptDialect.BATCH

class DupelinkConfig(BaseModel):
    scan: ScanConfig = Field(default_factory=ScanConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    script: ScriptConfig = Field(default_factory=ScriptConfig)

    @property
    def links_wanted(self) -> bool:
        """True when confirmed duplicates are to be replaced by hard links."""
        return self.scan.mode in (Mode.HARDLINK, Mode.SCRIPT)

    @property
    def eliminating(self) -> bool:
        return self.scan.mode in (Mode.HARDLINK, Mode.DELETE, Mode.SCRIPT)

def validate_config(cfg: DupelinkConfig) -> DupelinkConfig:
    if cfg.scan.mode == Mode.DISCOVER:
        if cfg.script.path or cfg.scan.allow_readonly:
            raise ConfigError("hardlink discovery is not valid with a script file or read-only elimination")
    if cfg.scan.mode == Mode.SCRIPT and not cfg.script.path:
        raise ConfigError("script mode needs a script path")
    if cfg.engine.signature_bytes <= 0 or cfg.engine.compare_chunk_bytes <= 0:
        raise ConfigError("signature_bytes and compare_chunk_bytes must be positive")
    if cfg.engine.link_limit is not None and cfg.engine.link_limit < 1:
        raise ConfigError("link_limit must be at least 1")
    return cfg

def default_config() -> DupelinkConfig:
    return DupelinkConfig()

def load_config(path: Optional[Path]) -> DupelinkConfig:
    if path is None:
        return default_config()
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        return DupelinkConfig(**data)
    except (OSError, yaml.YAMLError, ValidationError, TypeError) as exc:
        raise ConfigError(f"could not load config {path}: {exc}") from exc
