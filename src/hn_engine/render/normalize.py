"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations


def normalize_lines(text: str) -> str:
    """
    Strip every line and drop the ones left empty.

    Lines are split on ``\\n`` only; a trailing ``\\r`` is removed by the strip.
    The result has no leading, trailing or repeated blank lines and is stable
    under a second pass.
    """
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


__all__ = ["normalize_lines"]
