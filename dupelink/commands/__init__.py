"""Command registration for the dupelink CLI."""
from __future__ import annotations

from typing import Iterable

from . import dedupe, links

COMMAND_MODULES: Iterable = (dedupe, links)

__all__ = ["COMMAND_MODULES"]
