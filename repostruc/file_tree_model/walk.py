"""Filesystem discovery under an analysis root."""

from __future__ import annotations

import os
from pathlib import Path

from ..diagnostics import Diagnostics
from ..patterns import PatternFilter
from .structure import child_path


def _describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc)


def walk_paths(
    root: Path,
    pattern_filter: PatternFilter,
    diagnostics: Diagnostics,
    show_hidden: bool = False,
    follow_symlinks: bool = False,
    max_depth: int | None = None,
) -> list[str]:
    """Return root-relative ``/`` paths of files and directories to analyze.

    Paths must match an include glob and must not be ignored. Directories are
    descended even when they are not included themselves. With ``max_depth``
    the walk stops at ``max_depth + 1`` segments so renderers can mark the
    cut. Unreadable directories are recorded as warnings and skipped.
    """
    root = root.resolve()
    depth_limit = None if max_depth is None else max_depth + 1
    results: list[str] = []

    def walk(directory: Path, real_directory: Path, parent_rel: str, depth: int, ancestors: frozenset[Path]) -> None:
        """Depth-first traversal appending visible children of ``directory``."""
        try:
            with os.scandir(directory) as entries:
                children = sorted(entries, key=lambda item: item.name)
        except OSError as exc:
            diagnostics.warn(f"Could not read directory {parent_rel or '.'}: {_describe_os_error(exc)}")
            return

        for child in children:
            name = child.name
            if not show_hidden and name.startswith("."):
                continue
            rel = child_path(parent_rel, name)
            try:
                is_link = child.is_symlink()
                is_dir = child.is_dir(follow_symlinks=True)
            except OSError:
                is_link = False
                is_dir = False

            if pattern_filter.is_ignored(rel, is_dir=is_dir):
                continue
            if pattern_filter.is_included(rel, is_dir=is_dir):
                results.append(rel)

            if not is_dir:
                continue
            if depth_limit is not None and depth >= depth_limit:
                continue
            if is_link:
                if not follow_symlinks:
                    continue
                try:
                    real_child = Path(child.path).resolve()
                except OSError:
                    continue
                # Link back into the current branch would loop forever.
                if real_child in ancestors:
                    continue
            else:
                real_child = real_directory / name
            walk(Path(child.path), real_child, rel, depth + 1, ancestors | {real_child})

    walk(root, root, "", 1, frozenset({root}))
    return results


__all__ = ["walk_paths"]
