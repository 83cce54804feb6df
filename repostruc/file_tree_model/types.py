"""Domain datatypes for analyzed filesystem entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Entry:
    """Metadata observed for one surviving root-relative path."""

    path: str
    size: int
    is_dir: bool
    is_symlink: bool
    mtime_ns: int
    permissions: int
    git_status: str | None = None

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000, tz=timezone.utc)


StructureNode = dict[str, "StructureNode"]


__all__ = [
    "Entry",
    "StructureNode",
]
