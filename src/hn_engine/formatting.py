"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from hn_engine.models import Story
from hn_engine.render import FragmentRenderer
from hn_engine.utils.time import format_unix_utc

SEPARATOR = "-" * 50
NOT_AVAILABLE = "N/A"


def format_header(max_stories: int) -> str:
    return f"Top {max_stories} Hacker News Stories:"


def render_story_text(story: Story, renderer: Optional[FragmentRenderer] = None) -> str:
    if not story.text:
        return ""
    return (renderer or FragmentRenderer()).render(story.text).text


def _info_line(story: Story) -> str:
    timestamp = format_unix_utc(story.time) if story.time is not None else NOT_AVAILABLE
    by = story.by if story.by is not None else NOT_AVAILABLE
    return f"Timestamp: {timestamp} | By: {by} | ID: {story.id}"


def format_story(
    story: Story,
    *,
    rendered_text: Optional[str] = None,
    summary: Optional[str] = None,
) -> List[str]:
    """
    Lines for one story block.

    ``rendered_text`` is the already-rendered ``text`` field; when omitted it
    is rendered with a default renderer. Show HN posts always get their URL;
    other posts only when they carry no text.
    """
    lines = [SEPARATOR, "", _info_line(story)]
    if story.title is not None:
        lines.append(f"Title: {story.title}")

    show_hn = story.is_show_hn
    if show_hn and story.url is not None:
        lines.append(f"URL: {story.url}")

    if story.text is not None:
        text = rendered_text if rendered_text is not None else render_story_text(story)
        if text:
            lines.append(f"Text: {text}")
    elif not show_hn and story.url is not None:
        lines.append(f"URL: {story.url}")

    if summary:
        lines.append(f"Summary: {summary}")
    return lines


def story_to_dict(
    story: Story,
    *,
    rendered_text: str,
    summary: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": story.id,
        "title": story.title,
        "by": story.by,
        "time": story.time,
        "timestamp": format_unix_utc(story.time) if story.time is not None else None,
        "url": story.url,
        "show_hn": story.is_show_hn,
        "score": story.score,
        "comments": story.descendants,
        "text": rendered_text or None,
        "summary": summary,
    }


__all__ = ["SEPARATOR", "format_header", "format_story", "render_story_text", "story_to_dict"]
