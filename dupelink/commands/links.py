"""CLI command for listing groups of files that are already hard linked."""
from __future__ import annotations

import argparse
import sys
from argparse import _SubParsersAction
from pathlib import Path
from typing import Optional, Sequence

from ..config import Mode, load_config
from ..errors import ConfigError
from ..report import format_summary
from ..scan import run_scan
from ..util import ProgressPrinter


def _configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="File, directory or wildcard pattern (** matches any depth)")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--all", action="store_true", help="List every hardlink group, not only those with links outside the scanned paths")
    parser.add_argument("--hide-unreadable", action="store_true", help="Do not warn about files that cannot be read")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress indicator")
    parser.add_argument("--follow-links", action="store_true", help="Follow symbolic links and junctions while expanding patterns")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show the file identity of every linked file")


def add_parser(subparsers: _SubParsersAction[argparse.ArgumentParser]) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "links",
        help="List groups of files that are already hard linked",
        description="Group the scanned files by filesystem identity and report hardlink groups. Nothing is modified.",
    )
    _configure_parser(parser)
    parser.set_defaults(handler=run_from_args)
    return parser


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog or "dupelink links", description="List existing hardlink groups")
    _configure_parser(parser)
    return parser


def run_from_args(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    cfg.scan.mode = Mode.DISCOVER
    if args.all:
        cfg.scan.list_all_link_groups = True
    if args.hide_unreadable:
        cfg.scan.hide_unreadable_warning = True
    if args.no_progress:
        cfg.scan.show_progress = False
    if args.follow_links:
        cfg.scan.follow_links = True
    if args.verbose:
        cfg.scan.verbose = True

    progress = ProgressPrinter() if cfg.scan.show_progress else None
    try:
        stats = run_scan(cfg, args.patterns, progress_cb=progress)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if stats.files_scanned == 0:
        print("No files to process", file=sys.stderr)
        return 1

    for line in format_summary(stats, cfg.scan.mode):
        print(line)
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return run_from_args(args)


__all__ = ["add_parser", "build_parser", "run_cli", "run_from_args"]
