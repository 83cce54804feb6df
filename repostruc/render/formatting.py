"""Value formatting shared by all output formats."""

from __future__ import annotations

from datetime import datetime, timezone

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size: int) -> str:
    """Return base-1024 human-readable size with two decimals (``1.50 KB``)."""
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {SIZE_UNITS[unit_index]}"


def format_permissions(mode: int) -> str:
    """Return the permission bits of ``mode`` as zero-padded 3-digit octal."""
    return format(mode & 0o777, "03o")


def format_date(moment: datetime) -> str:
    """Return ``YYYY-MM-DD`` for ``moment`` in UTC."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d")


def format_iso_timestamp(moment: datetime) -> str:
    """Return a millisecond ISO-8601 UTC timestamp ending in ``Z``."""
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


__all__ = [
    "SIZE_UNITS",
    "format_bytes",
    "format_date",
    "format_iso_timestamp",
    "format_permissions",
]
