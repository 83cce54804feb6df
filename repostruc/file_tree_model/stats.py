"""Statistics aggregation over accepted entries.

Files feed totals, per-extension and per-category tallies and the bounded
largest-files list; directories only bump ``total_dirs``.
"""

from __future__ import annotations

import bisect
import os
from dataclasses import dataclass, field

from .types import Entry

NO_EXTENSION = "(no extension)"
OTHER_CATEGORY = "other"
LARGEST_FILES_LIMIT = 10

FILE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "code": (".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c", ".h", ".go", ".rs", ".php", ".rb", ".swift", ".kt"),
    "web": (".html", ".css", ".scss", ".sass", ".less"),
    "data": (".json", ".xml", ".yaml", ".yml", ".toml", ".csv"),
    "docs": (".md", ".txt", ".rst", ".tex", ".doc", ".docx", ".pdf"),
    "config": (".config", ".conf", ".ini", ".cfg", ".rc"),
    "image": (".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico"),
    "media": (".mp4", ".mp3", ".wav", ".avi", ".mov", ".webm"),
    "archive": (".zip", ".tar", ".gz", ".rar", ".7z", ".bz2"),
}

_CATEGORY_BY_EXTENSION: dict[str, str] = {
    extension: category
    for category, extensions in FILE_CATEGORIES.items()
    for extension in extensions
}


def file_extension(path: str) -> str:
    """Return the dotted suffix of the file name, or ``(no extension)``."""
    name = path.rsplit("/", 1)[-1]
    return os.path.splitext(name)[1] or NO_EXTENSION


def file_category(extension: str) -> str:
    """Return the category for ``extension`` (case-insensitive), else ``other``."""
    return _CATEGORY_BY_EXTENSION.get(extension.lower(), OTHER_CATEGORY)


@dataclass
class Tally:
    count: int = 0
    size: int = 0

    def add(self, size: int) -> None:
        self.count += 1
        self.size += size


@dataclass(frozen=True)
class LargeFile:
    path: str
    size: int


def _largest_sort_key(item: LargeFile) -> tuple[int, str]:
    return (-item.size, item.path)


@dataclass
class Statistics:
    """Aggregate counters for one analysis run."""

    total_files: int = 0
    total_dirs: int = 0
    total_size: int = 0
    by_extension: dict[str, Tally] = field(default_factory=dict)
    by_category: dict[str, Tally] = field(default_factory=dict)
    largest_files: list[LargeFile] = field(default_factory=list)

    def add_entry(self, entry: Entry) -> None:
        if entry.is_dir:
            self.total_dirs += 1
            return

        self.total_files += 1
        self.total_size += entry.size
        extension = file_extension(entry.path)
        self.by_extension.setdefault(extension, Tally()).add(entry.size)
        self.by_category.setdefault(file_category(extension), Tally()).add(entry.size)
        self._track_largest(LargeFile(entry.path, entry.size))

    def _track_largest(self, item: LargeFile) -> None:
        # Ordered by size descending, then path ascending.
        keys = [_largest_sort_key(existing) for existing in self.largest_files]
        position = bisect.bisect_right(keys, _largest_sort_key(item))
        if position >= LARGEST_FILES_LIMIT:
            return
        self.largest_files.insert(position, item)
        del self.largest_files[LARGEST_FILES_LIMIT:]

    def categories_by_count(self) -> list[tuple[str, Tally]]:
        return sorted(self.by_category.items(), key=lambda item: (-item[1].count, item[0]))

    def extensions_by_count(self, limit: int | None = None) -> list[tuple[str, Tally]]:
        ranked = sorted(self.by_extension.items(), key=lambda item: (-item[1].count, item[0]))
        return ranked if limit is None else ranked[:limit]

    def to_dict(self) -> dict[str, object]:
        """Serialize with the camelCase keys used in JSON output."""
        return {
            "totalFiles": self.total_files,
            "totalDirs": self.total_dirs,
            "totalSize": self.total_size,
            "byExtension": {
                extension: {"count": tally.count, "size": tally.size}
                for extension, tally in self.by_extension.items()
            },
            "byCategory": {
                category: {"count": tally.count, "size": tally.size}
                for category, tally in self.by_category.items()
            },
            "largestFiles": [{"path": item.path, "size": item.size} for item in self.largest_files],
        }


__all__ = [
    "FILE_CATEGORIES",
    "LARGEST_FILES_LIMIT",
    "NO_EXTENSION",
    "OTHER_CATEGORY",
    "LargeFile",
    "Statistics",
    "Tally",
    "file_category",
    "file_extension",
]
