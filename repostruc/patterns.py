"""Ignore/include pattern filter over root-relative paths.

One ``PatternFilter`` per analysis combines the built-in defaults, the
root's ``.gitignore``, user ignore globs and the tool's own output/config
files into ``is_ignored``. Include globs are kept separately and drive
discovery through ``is_included``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pathspec

from .config import CONFIG_FILENAME, Settings
from .diagnostics import Diagnostics
from .gitignore import GitIgnoreRules, compile_patterns, load_gitignore_rules

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = ("**/*",)

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "node_modules/",
    ".git/",
    "dist/",
    "build/",
    "*.log",
    ".DS_Store",
    "coverage/",
    ".next/",
    ".cache/",
    "*.tmp",
    "*.temp",
    "*.swp",
    "*.swo",
    "Thumbs.db",
    ".vscode/",
    ".idea/",
    "*.sublime-*",
    ".env*",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".nyc_output/",
    ".pytest_cache/",
    "__pycache__/",
    "*.pyc",
    ".mypy_cache/",
    ".tox/",
    "venv/",
    "env/",
    ".virtualenv/",
    "target/",
    "out/",
    "bin/",
    "obj/",
    ".gradle/",
    ".mvn/",
    "*.class",
    "*.jar",
    "*.war",
    "*.ear",
)

_DEFAULT_SPEC = pathspec.GitIgnoreSpec.from_lines(DEFAULT_IGNORE_PATTERNS)


def normalize_relative_path(path: str) -> str:
    """Return ``path`` with ``/`` separators and no leading ``./`` or slashes."""
    normalized = path.replace(os.sep, "/") if os.sep != "/" else path
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.strip("/")


def _relative_to_root(path: Path, root: Path) -> str | None:
    try:
        resolved = path.resolve()
    except OSError:
        return None
    if not resolved.is_relative_to(root):
        return None
    return resolved.relative_to(root).as_posix()


@dataclass(frozen=True)
class PatternFilter:
    """Combined ignore predicate plus include matcher for one root."""

    root: Path
    default_spec: pathspec.GitIgnoreSpec | None
    gitignore: GitIgnoreRules | None
    user_spec: pathspec.GitIgnoreSpec
    include_spec: pathspec.GitIgnoreSpec
    excluded_paths: frozenset[str] = frozenset()

    @classmethod
    def from_settings(cls, root: Path, settings: Settings, diagnostics: Diagnostics) -> "PatternFilter":
        """Build the filter for ``root``; bad patterns become errors, not exceptions."""
        root = root.resolve()
        gitignore = load_gitignore_rules(root, diagnostics) if settings.use_gitignore else None

        user_lines = list(settings.ignore_patterns)
        excluded: set[str] = set()
        output_name = Path(settings.output_file).name
        if output_name:
            user_lines.append(output_name)
        output_relative = _relative_to_root(Path(settings.output_file), root)
        if output_relative:
            excluded.add(output_relative)
        if settings.hide_config:
            user_lines.append(CONFIG_FILENAME)
        _user_patterns, user_spec = compile_patterns(user_lines, diagnostics, "ignore patterns")

        include_lines = list(settings.include_patterns) or list(DEFAULT_INCLUDE_PATTERNS)
        _include_patterns, include_spec = compile_patterns(include_lines, diagnostics, "include patterns")

        return cls(
            root=root,
            default_spec=_DEFAULT_SPEC if settings.use_default_patterns else None,
            gitignore=gitignore,
            user_spec=user_spec,
            include_spec=include_spec,
            excluded_paths=frozenset(excluded),
        )

    def _matches(self, candidate: str) -> bool:
        if self.default_spec is not None and self.default_spec.match_file(candidate):
            return True
        if self.gitignore is not None and self.gitignore.matches(candidate):
            return True
        return self.user_spec.match_file(candidate)

    def is_ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        """Return whether ``relative_path`` or any of its ancestor directories is ignored.

        Directories are matched with a trailing ``/`` so dir-only rules apply.
        """
        relative_path = normalize_relative_path(relative_path)
        if not relative_path:
            return False
        if relative_path in self.excluded_paths:
            return True
        parts = relative_path.split("/")
        for index in range(1, len(parts)):
            if self._matches("/".join(parts[:index]) + "/"):
                return True
        return self._matches(relative_path + "/" if is_dir else relative_path)

    def is_included(self, relative_path: str, is_dir: bool = False) -> bool:
        """Return whether ``relative_path`` matches at least one include glob."""
        relative_path = normalize_relative_path(relative_path)
        if not relative_path:
            return False
        return self.include_spec.match_file(relative_path + "/" if is_dir else relative_path)


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_INCLUDE_PATTERNS",
    "PatternFilter",
    "normalize_relative_path",
]
