"""Domain model for analyzed file trees.

This package contains the non-rendering pieces of an analysis:
- the per-path ``Entry`` record and the nested ``StructureNode`` tree
- filesystem discovery honoring the pattern filter
- statistics aggregation by extension and category
"""

from __future__ import annotations

from .types import Entry, StructureNode
from .structure import build_structure, child_path, insert_path, iter_tree_paths, path_depth
from .stats import (
    FILE_CATEGORIES,
    LARGEST_FILES_LIMIT,
    NO_EXTENSION,
    LargeFile,
    Statistics,
    Tally,
    file_category,
    file_extension,
)
from .walk import walk_paths

__all__ = [
    "Entry",
    "StructureNode",
    "build_structure",
    "child_path",
    "insert_path",
    "iter_tree_paths",
    "path_depth",
    "FILE_CATEGORIES",
    "LARGEST_FILES_LIMIT",
    "NO_EXTENSION",
    "LargeFile",
    "Statistics",
    "Tally",
    "file_category",
    "file_extension",
    "walk_paths",
]
