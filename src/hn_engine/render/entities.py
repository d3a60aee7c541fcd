"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from typing import Tuple

# Applied in order; each pass sees the output of the previous one. The tree
# builder already decodes entities once, so these only catch text the API
# escaped twice. Anything not listed here is left as-is.
ENTITY_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("&#x27;", "'"),
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&#x2F;", "/"),
)

ESCAPED_NEWLINE = "\\n"


def decode_entities(text: str) -> str:
    for pattern, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(pattern, replacement)
    # Some items carry a literal backslash-n instead of a newline.
    return text.replace(ESCAPED_NEWLINE, "\n")


__all__ = ["ENTITY_REPLACEMENTS", "decode_entities"]
