"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import sys
import warnings
from dataclasses import dataclass
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from hn_engine.config import DEFAULT_RENDER_MAX_DEPTH, DEFAULT_TREE_BUILDER
from hn_engine.render.entities import decode_entities
from hn_engine.render.normalize import normalize_lines

logger = logging.getLogger(__name__)

NBSP = "\u00a0"
# Document scaffolding a tree builder may add around a fragment; not counted as depth.
_DOCUMENT_WRAPPERS = frozenset({"html", "head", "body"})
# Frames kept free for the caller and for bs4 itself.
_STACK_HEADROOM = 100


class RecursionLimitExceeded(RuntimeError):
    """An element sits deeper than the renderer's configured max depth."""

    def __init__(self, depth: int, tag_name: str) -> None:
        super().__init__(f"<{tag_name}> at depth {depth} exceeds max depth")
        self.depth = depth
        self.tag_name = tag_name


@dataclass(frozen=True)
class RenderResult:
    text: str
    truncated: int = 0


class _TextBuffer:
    """Append-only list of string parts; empty parts are never stored."""

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: List[str] = []

    def append(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def is_empty(self) -> bool:
        return not self._parts

    def ends_with_newline(self) -> bool:
        return bool(self._parts) and self._parts[-1].endswith("\n")

    def getvalue(self) -> str:
        return "".join(self._parts)


class _RenderCall:
    __slots__ = ("max_depth", "truncated")

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.truncated = 0


def _depth_ceiling() -> int:
    # Each nesting level costs up to three frames (node, anchor, children loop).
    return max(1, (sys.getrecursionlimit() - _STACK_HEADROOM) // 3)


def _render_anchor(tag: Tag, out: _TextBuffer, call: _RenderCall, depth: int) -> None:
    inner_buf = _TextBuffer()
    _render_children(tag, inner_buf, call, depth)
    inner = inner_buf.getvalue().strip()

    href_attr = tag.get("href")
    if href_attr is None:
        out.append(inner)
        return

    href = str(href_attr).strip()
    if not inner:
        out.append(href)
    elif not href or href == inner:
        out.append(href or inner)
    else:
        out.append(f"{inner} ({href})")


def _render_node(node, out: _TextBuffer, call: _RenderCall, depth: int) -> None:
    if isinstance(node, PreformattedString):
        # Comment, Doctype, Declaration, CData, ProcessingInstruction.
        return
    if isinstance(node, NavigableString):
        out.append(str(node).replace(NBSP, " "))
        return
    if not isinstance(node, Tag):
        return

    if depth > call.max_depth:
        raise RecursionLimitExceeded(depth, node.name)

    name = (node.name or "").lower()
    if name == "a":
        _render_anchor(node, out, call, depth)
    elif name == "p":
        _render_children(node, out, call, depth)
        if not out.is_empty() and not out.ends_with_newline():
            out.append("\n")
    elif name == "br":
        out.append("\n")
    else:
        _render_children(node, out, call, depth)


def _render_children(parent: Tag, out: _TextBuffer, call: _RenderCall, depth: int) -> None:
    _render_nodes(parent.children, out, call, depth)


def _render_nodes(nodes: Iterable, out: _TextBuffer, call: _RenderCall, depth: int) -> None:
    for child in nodes:
        try:
            _render_node(child, out, call, depth + 1)
        except RecursionLimitExceeded as exc:
            call.truncated += 1
            logger.warning("Truncating HTML subtree: %s", exc)


def _fragment_nodes(soup: BeautifulSoup) -> List:
    """Top-level nodes of the fragment, looking through <html> then <head>/<body>."""
    nodes = list(soup.children)
    for _ in range(2):
        expanded = []
        for node in nodes:
            if isinstance(node, Tag) and (node.name or "").lower() in _DOCUMENT_WRAPPERS:
                expanded.extend(node.children)
            else:
                expanded.append(node)
        nodes = expanded
    return nodes


def _scrub_surrogates(html: str) -> str:
    # Lone surrogates (broken \ud83d escapes in API JSON) cannot be encoded for lxml.
    return html.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


class FragmentRenderer:
    """
    Render untrusted HTML fragments (HN item ``text`` fields) to plain text.

    Pipeline: parse with BeautifulSoup -> depth-first render -> decode the
    small entity table -> strip lines and drop blank ones.

    Per-tag rules:
      - text: U+00A0 becomes a plain space
      - <a>: "label (href)", or a single token when label and href match
        or one of them is missing
      - <p>: children, then a newline unless the output already ends in one
      - <br>: a newline; children are ignored
      - anything else: transparent
      - comments, doctypes, processing instructions: dropped

    Instances hold configuration only and may be shared across threads.
    """

    def __init__(self, *, features: str = DEFAULT_TREE_BUILDER, max_depth: int = DEFAULT_RENDER_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        ceiling = _depth_ceiling()
        if max_depth > ceiling:
            logger.debug("Clamping render max_depth %s to %s (recursion limit)", max_depth, ceiling)
            max_depth = ceiling
        self.features = features
        self.max_depth = max_depth

    def parse(self, html: str) -> Optional[BeautifulSoup]:
        try:
            with warnings.catch_warnings():
                # Item text that happens to be a bare URL is still a fragment, not a locator.
                warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
                return BeautifulSoup(_scrub_surrogates(html), self.features)
        except ParserRejectedMarkup as exc:
            logger.warning("HTML fragment rejected by %s tree builder: %s", self.features, exc)
            return None

    def render_raw(self, html: Optional[str]) -> RenderResult:
        """Tree walk only; no entity decoding or line normalization."""
        if not html:
            return RenderResult(text="")
        soup = self.parse(html)
        if soup is None:
            return RenderResult(text="")
        call = _RenderCall(self.max_depth)
        out = _TextBuffer()
        _render_nodes(_fragment_nodes(soup), out, call, 0)
        return RenderResult(text=out.getvalue(), truncated=call.truncated)

    def render(self, html: Optional[str]) -> RenderResult:
        raw = self.render_raw(html)
        text = normalize_lines(decode_entities(raw.text))
        return RenderResult(text=text, truncated=raw.truncated)


def html_to_text(
    html: Optional[str],
    *,
    features: str = DEFAULT_TREE_BUILDER,
    max_depth: int = DEFAULT_RENDER_MAX_DEPTH,
) -> str:
    """Convenience wrapper returning only the rendered text ('' when nothing renders)."""
    return FragmentRenderer(features=features, max_depth=max_depth).render(html).text


__all__ = [
    "FragmentRenderer",
    "RecursionLimitExceeded",
    "RenderResult",
    "html_to_text",
]
