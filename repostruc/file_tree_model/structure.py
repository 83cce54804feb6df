"""Nested name-to-children tree built from flat relative paths."""

from __future__ import annotations

from collections.abc import Iterator

from .types import StructureNode


def insert_path(tree: StructureNode, relative_path: str) -> None:
    """Ensure a node exists for every prefix of ``relative_path``.

    Pure insertion: existing nodes (and their children) are reused, never
    replaced or removed.
    """
    current = tree
    for part in relative_path.split("/"):
        if not part:
            continue
        current = current.setdefault(part, {})


def build_structure(paths: list[str]) -> StructureNode:
    tree: StructureNode = {}
    for path in paths:
        insert_path(tree, path)
    return tree


def iter_tree_paths(tree: StructureNode, parent_path: str = "") -> Iterator[str]:
    """Yield every node path in ``tree`` (parents before children)."""
    for name, children in tree.items():
        path = f"{parent_path}/{name}" if parent_path else name
        yield path
        yield from iter_tree_paths(children, path)


def child_path(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


def path_depth(relative_path: str) -> int:
    """Return the number of ``/``-separated segments in ``relative_path``."""
    return len([part for part in relative_path.split("/") if part])


__all__ = [
    "build_structure",
    "child_path",
    "insert_path",
    "iter_tree_paths",
    "path_depth",
]
