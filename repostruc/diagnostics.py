"""Error/warning collector shared by one analysis run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Diagnostics:
    """Append-only errors and warnings accumulated during a run.

    Errors mark entries that were dropped; warnings are advisory. Neither
    aborts the scan, and both are surfaced by every renderer.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def has_issues(self) -> bool:
        return bool(self.errors or self.warnings)


__all__ = ["Diagnostics"]
