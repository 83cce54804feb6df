"""Shared sort and traversal contract for tree renderers.

Every format walks the structure tree through ``sorted_children`` and
``iter_tree_rows``, so all of them show the same paths in the same order
and cut the tree at the same depth.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from ..file_tree_model import Entry, StructureNode, child_path, path_depth

TRUNCATION_MARKER = "..."


@dataclass(frozen=True)
class TreeChild:
    """One sibling in a sorted group, with its entry looked up by full path."""

    name: str
    path: str
    subtree: StructureNode
    entry: Entry | None

    @property
    def is_dir(self) -> bool:
        """Directory when it has children or its entry says so."""
        return bool(self.subtree) or (self.entry is not None and self.entry.is_dir)


@dataclass(frozen=True)
class TreeRow:
    """One rendered line of the tree: a path or a truncation placeholder.

    ``guides`` holds, for every ancestor level, whether that ancestor was the
    last of its siblings (drives the ``│`` continuation columns).
    """

    kind: str
    name: str
    path: str
    depth: int
    is_last: bool
    guides: tuple[bool, ...]
    entry: Entry | None = None
    is_dir: bool = False


def _sort_key(child: TreeChild) -> tuple[bool, str, str]:
    has_dir_entry = child.entry is not None and child.entry.is_dir
    return (not has_dir_entry, child.name.casefold(), child.name)


def sort_entries(children: list[TreeChild]) -> list[TreeChild]:
    """Order siblings: directories first, then by case-folded and raw name.

    Classification uses the entry only; a child without an entry sorts as a
    file.
    """
    return sorted(children, key=_sort_key)


def sorted_children(node: StructureNode, entries: dict[str, Entry], parent_path: str = "") -> list[TreeChild]:
    children = [
        TreeChild(name=name, path=child_path(parent_path, name), subtree=subtree, entry=entries.get(child_path(parent_path, name)))
        for name, subtree in node.items()
    ]
    return sort_entries(children)


def is_truncated(child: TreeChild, max_depth: int | None) -> bool:
    """Return whether ``child`` sits at ``max_depth`` and has hidden children."""
    if max_depth is None or not child.subtree:
        return False
    return path_depth(child.path) >= max_depth


def iter_tree_rows(
    node: StructureNode,
    entries: dict[str, Entry],
    max_depth: int | None = None,
    parent_path: str = "",
    guides: tuple[bool, ...] = (),
) -> Iterator[TreeRow]:
    """Yield rows depth-first in sort-contract order with truncation markers."""
    children = sorted_children(node, entries, parent_path)
    depth = len(guides) + 1
    for index, child in enumerate(children):
        is_last = index == len(children) - 1
        yield TreeRow(
            kind="path",
            name=child.name,
            path=child.path,
            depth=depth,
            is_last=is_last,
            guides=guides,
            entry=child.entry,
            is_dir=child.is_dir,
        )
        if not child.subtree:
            continue
        if is_truncated(child, max_depth):
            yield TreeRow(
                kind="truncated",
                name=TRUNCATION_MARKER,
                path=child.path,
                depth=depth + 1,
                is_last=True,
                guides=guides + (is_last,),
            )
            continue
        yield from iter_tree_rows(child.subtree, entries, max_depth, child.path, guides + (is_last,))


__all__ = [
    "TRUNCATION_MARKER",
    "TreeChild",
    "TreeRow",
    "is_truncated",
    "iter_tree_rows",
    "sort_entries",
    "sorted_children",
]
