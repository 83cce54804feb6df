"""Gitignore rule loading for the pattern filter.

Reads the analysis root's ``.gitignore`` and compiles it with ``pathspec``
gitignore semantics. Lines that fail to compile are reported and skipped so
the remaining rules still apply.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import pathspec

from .diagnostics import Diagnostics

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class GitIgnoreRules:
    """Compiled gitignore snapshot for one analysis root.

    ``patterns`` keeps the active (comment-free, compiled) lines in file order
    so negations keep their meaning.
    """

    root: Path
    patterns: tuple[str, ...]
    spec: pathspec.GitIgnoreSpec

    def matches(self, relative_path: str) -> bool:
        """Return whether ``relative_path`` (``/``-separated) is ignored."""
        return self.spec.match_file(relative_path)


def active_pattern_lines(text: str) -> list[str]:
    """Return non-blank, non-comment lines from gitignore ``text``."""
    lines: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r")
        if not line.strip() or line.startswith("#"):
            continue
        lines.append(line)
    return lines


def _compile_pattern(line: str) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines([line])


def compile_patterns(
    lines: list[str],
    diagnostics: Diagnostics,
    source: str,
) -> tuple[tuple[str, ...], pathspec.GitIgnoreSpec]:
    """Compile ``lines`` one by one, recording an error for each bad line."""
    valid: list[str] = []
    for line in lines:
        try:
            _compile_pattern(line)
        except (ValueError, re.error) as exc:
            diagnostics.error(f"Error setting up ignore patterns: invalid pattern {line!r} in {source}: {exc}")
            continue
        valid.append(line)
    return tuple(valid), pathspec.GitIgnoreSpec.from_lines(valid)


def load_gitignore_rules(root: Path, diagnostics: Diagnostics) -> GitIgnoreRules | None:
    """Load ``<root>/.gitignore`` rules.

    Returns ``None`` when the file does not exist. Read failures are recorded
    as errors and also yield ``None``.
    """
    root = root.resolve()
    gitignore_path = root / GITIGNORE_FILENAME
    if not gitignore_path.is_file():
        return None

    try:
        text = gitignore_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        diagnostics.error(f"Error setting up ignore patterns: {exc}")
        return None

    patterns, spec = compile_patterns(active_pattern_lines(text), diagnostics, GITIGNORE_FILENAME)
    return GitIgnoreRules(root=root, patterns=patterns, spec=spec)


__all__ = [
    "GITIGNORE_FILENAME",
    "GitIgnoreRules",
    "active_pattern_lines",
    "compile_patterns",
    "load_gitignore_rules",
]
