"""Display options passed to every renderer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..config import Settings


@dataclass(frozen=True)
class DisplayOptions:
    """Which extras to show, how deep to render and whether to colorize.

    ``generated_at`` pins the header timestamp; when ``None`` the current UTC
    time is used at render time.
    """

    directory: Path
    show_stats: bool = False
    show_files: bool = False
    show_sizes: bool = False
    show_timestamps: bool = False
    show_permissions: bool = False
    show_git_status: bool = False
    group_by_type: bool = False
    color: bool = False
    max_depth: int | None = None
    generated_at: datetime | None = None

    @classmethod
    def from_settings(cls, settings: Settings, directory: Path, color: bool = False) -> "DisplayOptions":
        return cls(
            directory=directory,
            show_stats=settings.show_stats,
            show_files=settings.show_files,
            show_sizes=settings.show_sizes,
            show_timestamps=settings.show_timestamps,
            show_permissions=settings.show_permissions,
            show_git_status=settings.show_git_status,
            group_by_type=settings.group_by_type,
            color=color,
            max_depth=settings.max_depth,
        )

    @property
    def simple(self) -> bool:
        """True when no optional section or per-entry extra is enabled."""
        return not (
            self.show_stats
            or self.show_files
            or self.show_sizes
            or self.show_timestamps
            or self.show_permissions
            or self.show_git_status
        )

    def timestamp(self) -> datetime:
        return self.generated_at or datetime.now(timezone.utc)


__all__ = ["DisplayOptions"]
