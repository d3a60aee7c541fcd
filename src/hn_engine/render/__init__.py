"""
HN Brief fragment renderer.
"""

from hn_engine.render.entities import decode_entities
from hn_engine.render.html_text import FragmentRenderer, RecursionLimitExceeded, RenderResult, html_to_text
from hn_engine.render.normalize import normalize_lines

__all__ = [
    "FragmentRenderer",
    "RecursionLimitExceeded",
    "RenderResult",
    "decode_entities",
    "html_to_text",
    "normalize_lines",
]
