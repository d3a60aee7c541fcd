"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

SHOW_HN_PREFIX = "Show HN:"


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True)
class Story:
    """One Hacker News item as returned by ``/item/<id>.json``."""

    id: int
    title: Optional[str] = None
    text: Optional[str] = None
    time: Optional[int] = None
    url: Optional[str] = None
    by: Optional[str] = None
    type: Optional[str] = None
    score: Optional[int] = None
    descendants: Optional[int] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Story":
        item_id = _opt_int(payload.get("id"))
        if item_id is None:
            raise ValueError(f"item payload has no integer id: {payload.get('id')!r}")
        return cls(
            id=item_id,
            title=_opt_str(payload.get("title")),
            text=_opt_str(payload.get("text")),
            time=_opt_int(payload.get("time")),
            url=_opt_str(payload.get("url")),
            by=_opt_str(payload.get("by")),
            type=_opt_str(payload.get("type")),
            score=_opt_int(payload.get("score")),
            descendants=_opt_int(payload.get("descendants")),
        )

    @property
    def is_show_hn(self) -> bool:
        return bool(self.title) and self.title.startswith(SHOW_HN_PREFIX)
