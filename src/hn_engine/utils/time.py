"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from datetime import datetime, timezone

INVALID_TIMESTAMP = "Invalid timestamp"


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso(*, seconds_precision: bool = True) -> str:
    """Return UTC as ISO-8601 with trailing Z and deterministic precision."""
    current = utc_now()
    if seconds_precision:
        current = current.replace(microsecond=0)
    return current.isoformat().replace("+00:00", "Z")


def format_unix_utc(timestamp: int) -> str:
    """
    Format a Unix timestamp (seconds) as ``YYYY-MM-DD HH:MM:SS UTC``.

    Values outside the platform's representable range yield ``INVALID_TIMESTAMP``.
    """
    try:
        moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_TIMESTAMP
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")
