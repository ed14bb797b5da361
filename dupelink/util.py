from __future__ import annotations
import sys
import time
from typing import Callable, Optional

ProgressCallback = Callable[[str, int, int, str], None]
LogCallback = Callable[[str], None]

def _emit(cb: Optional[Callable[..., None]], *args, **kwargs) -> None:
    if not cb:
        return
    try:
        cb(*args, **kwargs)
    except Exception:
        pass

def emit_log(message: str, log_cb: Optional[LogCallback] = None) -> None:
    print(message)
    _emit(log_cb, message)

def emit_warning(message: str, log_cb: Optional[LogCallback] = None) -> None:
    # Warnings go to stderr so redirected stdout stays a clean listing
    print(f"[WARN] {message}", file=sys.stderr)
    _emit(log_cb, f"[WARN] {message}")

def emit_progress(
    progress_cb: Optional[ProgressCallback], stage: str, current: int, total: int, message: str
) -> None:
    _emit(progress_cb, stage, current, total, message)

def shorten(text: str, limit: int = 100) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."

class ProgressPrinter:
    """Progress callback that prints at most one line every ``interval`` seconds."""

    def __init__(self, interval: float = 0.5) -> None:
        self.interval = interval
        self._last = 0.0

    def __call__(self, stage: str, current: int, total: int, message: str) -> None:
        if stage != "scanning":
            return
        now = time.monotonic()
        if now - self._last < self.interval:
            return
        self._last = now
        print(f"Scanned {current:4d} files: {shorten(message)}", flush=True)
