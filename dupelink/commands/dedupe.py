"""CLI command for finding and eliminating duplicate files."""
from __future__ import annotations

import argparse
import sys
from argparse import _SubParsersAction
from pathlib import Path
from typing import Optional, Sequence

from ..config import DupelinkConfig, Mode, ScriptDialect, load_config
from ..errors import ConfigError, FatalIOError
from ..report import format_summary
from ..scan import run_scan
from ..util import ProgressPrinter


def _configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="File, directory or wildcard pattern (** matches any depth)")
    parser.add_argument("--ref", action="append", metavar="PATTERN", help="Reference files: checked against but never eliminated (may repeat)")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--hardlink", action="store_true", help="Replace duplicates with hard links to the kept copy")
    parser.add_argument("--delete", action="store_true", help="Delete duplicate files")
    parser.add_argument("--script", metavar="FILE", help="Write the commands to FILE instead of changing anything")
    parser.add_argument("--script-dialect", choices=[d.value for d in ScriptDialect], help="Script flavour (default: batch)")
    parser.add_argument("--readonly", action="store_true", help="Eliminate read-only duplicates too instead of skipping them")
    parser.add_argument("--zero-length", action="store_true", help="Do not skip zero-length files")
    parser.add_argument("--hide-unreadable", action="store_true", help="Do not warn about files that cannot be read")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress indicator")
    parser.add_argument("--follow-links", action="store_true", help="Follow symbolic links and junctions while expanding patterns")
    parser.add_argument("--link-limit", type=int, help="Override the per-file hard link cap")
    parser.add_argument("--sigs", action="store_true", help="Show the signature computed for each file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")


def add_parser(subparsers: _SubParsersAction[argparse.ArgumentParser]) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "dedupe",
        help="Find duplicate files and hard link, delete or script them",
        description="Find byte-identical files and optionally replace them with hard links, delete them, or write a script doing either.",
    )
    _configure_parser(parser)
    parser.set_defaults(handler=run_from_args)
    return parser


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog or "dupelink dedupe", description="Find and eliminate duplicate files")
    _configure_parser(parser)
    return parser


def apply_args(cfg: DupelinkConfig, args: argparse.Namespace) -> DupelinkConfig:
    if args.hardlink and args.delete:
        raise ConfigError("--hardlink and --delete are mutually exclusive")
    if args.hardlink:
        cfg.scan.mode = Mode.HARDLINK
    elif args.delete:
        cfg.scan.mode = Mode.DELETE
    if args.script:
        cfg.script.path = args.script
        if cfg.scan.mode == Mode.REPORT:
            cfg.scan.mode = Mode.SCRIPT
    if args.script_dialect:
        cfg.script.dialect = ScriptDialect(args.script_dialect)
    if args.readonly:
        cfg.scan.allow_readonly = True
    if args.zero_length:
        cfg.scan.skip_zero_length = False
    if args.hide_unreadable:
        cfg.scan.hide_unreadable_warning = True
    if args.no_progress:
        cfg.scan.show_progress = False
    if args.follow_links:
        cfg.scan.follow_links = True
    if args.link_limit is not None:
        cfg.engine.link_limit = args.link_limit
    if args.sigs:
        cfg.scan.print_signatures = True
        cfg.scan.print_duplicates = False
    if args.verbose:
        cfg.scan.verbose = True
        cfg.scan.print_signatures = True
        cfg.scan.print_duplicates = True
        cfg.scan.hide_unreadable_warning = False
    return cfg


def run_from_args(args: argparse.Namespace) -> int:
    try:
        cfg = apply_args(load_config(Path(args.config) if args.config else None), args)
        progress = ProgressPrinter() if cfg.scan.show_progress else None
        stats = run_scan(cfg, args.patterns, args.ref or [], progress_cb=progress)
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except FatalIOError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        print("[ERROR] Stopping before more files are changed.", file=sys.stderr)
        return 1

    if stats.total_files == 0:
        print("No files to process", file=sys.stderr)
        return 1

    for line in format_summary(stats, cfg.scan.mode):
        print(line)
    if cfg.script.path:
        print(f"[OK] Commands written to {cfg.script.path}")
    return 0


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return run_from_args(args)


__all__ = ["add_parser", "apply_args", "build_parser", "run_cli", "run_from_args"]
