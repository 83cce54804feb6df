"""Analysis pass: discovery, per-entry metadata, structure and statistics.

``analyze`` is the single core entry point. It walks the root once, stats
every discovered path and folds accepted entries into the structure tree and
the statistics in the same loop, in walk order.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from pathlib import Path

from .config import Settings
from .diagnostics import Diagnostics
from .file_tree_model import Entry, Statistics, StructureNode, insert_path, walk_paths
from .git_status import GitStatusError, GitStatusProvider, collect_git_status
from .patterns import PatternFilter

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything renderers need from one analysis run."""

    root: Path
    filtered_paths: list[str]
    statistics: Statistics
    structure: StructureNode
    entries: dict[str, Entry]
    git_status: dict[str, str]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def fetch_git_status(root: Path, provider: GitStatusProvider, diagnostics: Diagnostics) -> dict[str, str]:
    """Call ``provider`` once; failures degrade to ``{}`` plus a warning."""
    try:
        return dict(provider(root))
    except GitStatusError as exc:
        diagnostics.warn(str(exc))
    except OSError as exc:
        diagnostics.warn(f"Git status unavailable: {exc}")
    return {}


def _is_empty_directory(path: Path) -> bool:
    with os.scandir(path) as entries:
        return next(entries, None) is None


def collect_entry(
    root: Path,
    relative_path: str,
    git_status: dict[str, str],
    diagnostics: Diagnostics,
    exclude_empty: bool = False,
) -> Entry | None:
    """Stat one path and build its ``Entry``.

    Returns ``None`` when the path is dropped: stat failed (warning), it is
    an empty directory under ``exclude_empty``, or it could not be processed
    (error).
    """
    full_path = root / relative_path
    try:
        try:
            link_stat = os.lstat(full_path)
            target_stat = os.stat(full_path)
        except OSError as exc:
            diagnostics.warn(f"Could not stat file {relative_path}: {exc.strerror or exc}")
            return None

        is_dir = stat.S_ISDIR(target_stat.st_mode)
        if exclude_empty and is_dir:
            try:
                if _is_empty_directory(full_path):
                    return None
            except OSError as exc:
                diagnostics.warn(f"Could not read directory {relative_path}: {exc.strerror or exc}")

        return Entry(
            path=relative_path,
            size=0 if is_dir else int(target_stat.st_size),
            is_dir=is_dir,
            is_symlink=stat.S_ISLNK(link_stat.st_mode),
            mtime_ns=int(target_stat.st_mtime_ns),
            permissions=int(target_stat.st_mode),
            git_status=git_status.get(relative_path),
        )
    except ValueError as exc:
        diagnostics.error(f"Error processing {relative_path}: {exc}")
        return None


def analyze(
    directory: Path | str = ".",
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
    git_status_provider: GitStatusProvider = collect_git_status,
) -> AnalysisResult:
    """Analyze ``directory`` and return paths, entries, tree and statistics.

    Raises ``FileNotFoundError``/``NotADirectoryError`` when the root itself is
    unusable and ``PermissionError`` (or another ``OSError``) when it cannot be
    listed; every per-entry problem lands in ``diagnostics`` instead.
    """
    settings = settings or Settings()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    root = Path(directory).resolve()
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    # Unreadable root is fatal; deeper unreadable directories are warnings.
    with os.scandir(root):
        pass

    git_status: dict[str, str] = {}
    if settings.show_git_status:
        git_status = fetch_git_status(root, git_status_provider, diagnostics)
        logger.debug("git status entries: %d", len(git_status))

    pattern_filter = PatternFilter.from_settings(root, settings, diagnostics)
    discovered = walk_paths(
        root,
        pattern_filter,
        diagnostics,
        show_hidden=settings.show_hidden,
        follow_symlinks=settings.follow_symlinks,
        max_depth=settings.max_depth,
    )
    logger.debug("discovered %d paths under %s", len(discovered), root)

    statistics = Statistics()
    structure: StructureNode = {}
    entries: dict[str, Entry] = {}
    accepted: list[str] = []
    for relative_path in discovered:
        entry = collect_entry(
            root,
            relative_path,
            git_status,
            diagnostics,
            exclude_empty=settings.exclude_empty,
        )
        if entry is None:
            continue
        entries[relative_path] = entry
        accepted.append(relative_path)
        statistics.add_entry(entry)
        insert_path(structure, relative_path)

    logger.debug(
        "accepted %d entries (%d files, %d dirs), %d errors, %d warnings",
        len(accepted),
        statistics.total_files,
        statistics.total_dirs,
        len(diagnostics.errors),
        len(diagnostics.warnings),
    )
    return AnalysisResult(
        root=root,
        filtered_paths=accepted,
        statistics=statistics,
        structure=structure,
        entries=entries,
        git_status=git_status,
        diagnostics=diagnostics,
    )


__all__ = [
    "AnalysisResult",
    "analyze",
    "collect_entry",
    "fetch_git_status",
]
