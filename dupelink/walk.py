"""
Expansion of path patterns into candidate files.

A pattern is a plain file, a directory (everything below it), or a path with
``*`` / ``?`` wildcards where a ``**`` component matches any number of
directory levels, e.g. ``photos/**/*.jpg`` or ``**/foo/**``.
"""
from __future__ import annotations
import os
import re
from typing import Iterable, Iterator, List, Optional, Pattern, Tuple

from .util import LogCallback, emit_warning

_MAGIC = re.compile(r"[*?]")


def _split_components(pattern: str) -> List[str]:
    seps = r"[\\/]" if os.sep == "\\" else "/"
    return [c for c in re.split(seps, pattern) if c not in ("", ".")]


def _translate_component(component: str) -> str:
    out = []
    for ch in component:
        if ch == "*":
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def compile_pattern(components: List[str]) -> Tuple[Pattern[str], Optional[int]]:
    """Build a matcher for '/'-joined relative paths.

    Returns the regex and the fixed depth of matching files, or None when a
    ``**`` component makes the depth unbounded.
    """
    parts = []
    depth: Optional[int] = len(components)
    last = len(components) - 1
    for i, comp in enumerate(components):
        if comp == "**":
            depth = None
            parts.append(".*" if i == last else "(?:.*/)?")
        else:
            parts.append(_translate_component(comp) + ("" if i == last else "/"))
    return re.compile("".join(parts)), depth


def split_pattern(pattern: str) -> Tuple[str, List[str]]:
    """Split into the literal base directory and the wildcard remainder."""
    path = os.path.abspath(os.path.expanduser(pattern))
    anchor, rest = os.path.splitdrive(path)
    root = rest[:1] if rest[:1] in ("/", "\\") else ""
    components = _split_components(rest)
    base = [anchor + root]
    for i, comp in enumerate(components):
        if _MAGIC.search(comp):
            return os.path.join(*base), components[i:]
        base.append(comp)
    return os.path.join(*base), []


def iter_pattern(pattern: str, follow_links: bool = False) -> Iterator[str]:
    """Yield absolute paths of the files ``pattern`` names, sorted per directory."""
    base, remainder = split_pattern(pattern)
    if not remainder:
        if os.path.isfile(base):
            yield base
            return
        if not os.path.isdir(base):
            return
        remainder = ["**"]

    matcher, depth = compile_pattern(remainder)
    for dirpath, dirnames, filenames in os.walk(base, followlinks=follow_links):
        dirnames.sort()
        if depth is not None:
            rel_dir = os.path.relpath(dirpath, base)
            level = 0 if rel_dir == "." else rel_dir.count(os.sep) + 1
            if level + 1 >= depth:
                # Files below this level can't match a fixed-depth pattern
                dirnames[:] = []
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            if not follow_links and os.path.islink(full):
                continue
            rel = os.path.relpath(full, base).replace(os.sep, "/")
            if matcher.fullmatch(rel):
                yield full


def iter_patterns(
    patterns: Iterable[str],
    follow_links: bool = False,
    log_cb: Optional[LogCallback] = None,
) -> Iterator[str]:
    for pattern in patterns:
        matched = 0
        for path in iter_pattern(pattern, follow_links):
            matched += 1
            yield path
        if not matched:
            emit_warning(f"No files matched '{pattern}'", log_cb)
