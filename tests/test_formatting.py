from __future__ import annotations

import pytest

from hn_engine.formatting import SEPARATOR, format_header, format_story, story_to_dict
from hn_engine.models import Story
from hn_engine.utils.time import INVALID_TIMESTAMP, format_unix_utc


def test_format_unix_utc() -> None:
    assert format_unix_utc(0) == "1970-01-01 00:00:00 UTC"
    assert format_unix_utc(1700000000) == "2023-11-14 22:13:20 UTC"


def test_format_unix_utc_out_of_range() -> None:
    assert format_unix_utc(10**20) == INVALID_TIMESTAMP


def test_header() -> None:
    assert format_header(5) == "Top 5 Hacker News Stories:"


def test_story_with_text_prints_rendered_text_not_url() -> None:
    story = Story(
        id=1,
        title="Ask HN: Anything?",
        text='<p>Question&nbsp;here</p><p>See <a href="https://x.test">docs</a></p>',
        time=1700000000,
        url="https://ignored.test",
        by="alice",
    )

    lines = format_story(story)

    assert lines == [
        SEPARATOR,
        "",
        "Timestamp: 2023-11-14 22:13:20 UTC | By: alice | ID: 1",
        "Title: Ask HN: Anything?",
        "Text: Question here\nSee docs (https://x.test)",
    ]


def test_story_without_text_prints_url() -> None:
    story = Story(id=2, title="A link", url="https://example.com")
    lines = format_story(story)
    assert lines[2] == "Timestamp: N/A | By: N/A | ID: 2"
    assert lines[-1] == "URL: https://example.com"


def test_show_hn_prints_url_before_text() -> None:
    story = Story(id=3, title="Show HN: Tool", text="<p>Built it</p>", url="https://tool.test", by="bob")
    lines = format_story(story)
    assert lines[-2:] == ["URL: https://tool.test", "Text: Built it"]


def test_show_hn_without_text_prints_url_once() -> None:
    story = Story(id=4, title="Show HN: Tool", url="https://tool.test")
    lines = format_story(story)
    assert lines.count("URL: https://tool.test") == 1


def test_empty_rendered_text_is_skipped() -> None:
    story = Story(id=5, title="Ask HN: empty", text="<!-- nothing -->", url="https://x.test")
    lines = format_story(story)
    assert not any(line.startswith("Text:") for line in lines)
    assert not any(line.startswith("URL:") for line in lines)


def test_summary_line_and_prerendered_text() -> None:
    story = Story(id=6, title="T", text="<p>raw</p>")
    lines = format_story(story, rendered_text="already rendered", summary="Short.")
    assert lines[-2:] == ["Text: already rendered", "Summary: Short."]


def test_story_to_dict() -> None:
    story = Story(id=7, title="Show HN: X", time=0, url="https://x.test", score=10, descendants=3)
    record = story_to_dict(story, rendered_text="")
    assert record == {
        "id": 7,
        "title": "Show HN: X",
        "by": None,
        "time": 0,
        "timestamp": "1970-01-01 00:00:00 UTC",
        "url": "https://x.test",
        "show_hn": True,
        "score": 10,
        "comments": 3,
        "text": None,
        "summary": None,
    }


def test_story_from_dict_ignores_bad_types() -> None:
    story = Story.from_dict({"id": 9, "title": 123, "time": "yesterday", "by": "carol", "extra": []})
    assert story == Story(id=9, by="carol")


@pytest.mark.parametrize("payload", [{}, {"id": "9"}, {"id": True}])
def test_story_from_dict_requires_integer_id(payload) -> None:
    with pytest.raises(ValueError):
        Story.from_dict(payload)


def test_is_show_hn_is_prefix_match() -> None:
    assert Story(id=1, title="Show HN: x").is_show_hn
    assert not Story(id=1, title="show hn: x").is_show_hn
    assert not Story(id=1, title="Not Show HN: x").is_show_hn
    assert not Story(id=1).is_show_hn
