"""JSON renderer: one object with the recursive structure and optional stats."""

from __future__ import annotations

import json

from ..analyzer import AnalysisResult
from ..file_tree_model import Entry, StructureNode
from .formatting import format_iso_timestamp, format_permissions
from .options import DisplayOptions
from .tree import is_truncated, sorted_children


def _entry_fields(entry: Entry, options: DisplayOptions) -> dict[str, object]:
    fields: dict[str, object] = {}
    if options.show_sizes and not entry.is_dir:
        fields["size"] = entry.size
    if options.show_timestamps:
        fields["modified"] = format_iso_timestamp(entry.modified)
    if options.show_permissions:
        fields["permissions"] = format_permissions(entry.permissions)
    if options.show_git_status and entry.git_status:
        fields["gitStatus"] = entry.git_status
    return fields


def build_json_structure(
    node: StructureNode,
    entries: dict[str, Entry],
    options: DisplayOptions,
    parent_path: str = "",
) -> dict[str, dict[str, object]]:
    """Return ``{name: {type, children?, ...}}`` in sort-contract order.

    A node cut at ``max_depth`` carries ``"truncated": true`` instead of
    ``children``.
    """
    structure: dict[str, dict[str, object]] = {}
    for child in sorted_children(node, entries, parent_path):
        item: dict[str, object] = {"type": "directory" if child.is_dir else "file"}
        if child.subtree:
            if is_truncated(child, options.max_depth):
                item["truncated"] = True
            else:
                item["children"] = build_json_structure(child.subtree, entries, options, child.path)
        if child.entry is not None:
            item.update(_entry_fields(child.entry, options))
        structure[child.name] = item
    return structure


def build_json_document(result: AnalysisResult, options: DisplayOptions) -> dict[str, object]:
    document: dict[str, object] = {
        "generated": format_iso_timestamp(options.timestamp()),
        "directory": str(result.root),
        "structure": build_json_structure(result.structure, result.entries, options),
    }
    if options.show_stats:
        document["stats"] = result.statistics.to_dict()
    if result.diagnostics.errors:
        document["errors"] = list(result.diagnostics.errors)
    if result.diagnostics.warnings:
        document["warnings"] = list(result.diagnostics.warnings)
    return document


def render_json(result: AnalysisResult, options: DisplayOptions) -> str:
    return json.dumps(build_json_document(result, options), indent=2, ensure_ascii=False) + "\n"


__all__ = [
    "build_json_document",
    "build_json_structure",
    "render_json",
]
