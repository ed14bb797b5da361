"""Exception types raised by the dupelink engine."""
from __future__ import annotations


class DupelinkError(Exception):
    """Base class for dupelink failures."""


class ConfigError(DupelinkError):
    """Raised for option combinations the engine refuses to run with."""


class UnreadableFileError(DupelinkError):
    """A candidate could not be opened, stat'ed or read. The file is skipped."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: '{path}'")
        self.path = path
        self.reason = reason


class FatalIOError(DupelinkError):
    """A delete or link failed part way through eliminating a duplicate.

    The run must stop here; carrying on could leave files half-eliminated.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: '{path}'")
        self.path = path
        self.reason = reason
