from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import pytest
import requests

from hn_engine.integrations.hackernews_api import HackerNewsAPIError, HackerNewsClient


@dataclass
class _FakeResponse:
    status_code: int
    payload: Any = None
    invalid_json: bool = False

    def json(self) -> Any:
        if self.invalid_json:
            raise ValueError("not json")
        return self.payload


@dataclass
class _FakeSession:
    responses: List[Any]
    headers: dict = field(default_factory=dict)
    calls: List[dict] = field(default_factory=list)
    closed: bool = False

    def get(self, url: str, params: Optional[dict] = None, timeout: Optional[float] = None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected request: {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


def _client(responses: List[Any], **kwargs) -> tuple[HackerNewsClient, _FakeSession, list]:
    session = _FakeSession(responses=list(responses))
    sleeps: list = []
    client = HackerNewsClient("https://hn.test/v0/", session=session, sleep=sleeps.append, **kwargs)
    return client, session, sleeps


def test_fetch_top_story_ids_uses_pretty_print_and_timeout() -> None:
    client, session, _ = _client([_FakeResponse(200, [3, 2, 1])], timeout_s=7.5)

    assert client.fetch_top_story_ids() == [3, 2, 1]
    assert session.calls == [
        {"url": "https://hn.test/v0/topstories.json", "params": {"print": "pretty"}, "timeout": 7.5}
    ]
    assert session.headers["User-Agent"].startswith("hnbrief/")


def test_fetch_top_story_ids_rejects_non_list() -> None:
    client, _, _ = _client([_FakeResponse(200, {"oops": True})])
    with pytest.raises(HackerNewsAPIError, match="not a list"):
        client.fetch_top_story_ids()


def test_fetch_item_builds_story() -> None:
    payload = {
        "id": 42,
        "title": "Show HN: A thing",
        "text": "<p>hi</p>",
        "time": 1700000000,
        "url": "https://example.com",
        "by": "pg",
        "kids": [1, 2],
        "type": "story",
    }
    client, session, _ = _client([_FakeResponse(200, payload)])

    story = client.fetch_item(42)

    assert session.calls[0]["url"] == "https://hn.test/v0/item/42.json"
    assert story.id == 42
    assert story.by == "pg"
    assert story.is_show_hn is True
    assert story.text == "<p>hi</p>"


def test_fetch_item_null_payload_is_not_found() -> None:
    client, _, _ = _client([_FakeResponse(200, None)])
    with pytest.raises(HackerNewsAPIError, match="item 7 not found"):
        client.fetch_item(7)


def test_fetch_item_without_id_is_rejected() -> None:
    client, _, _ = _client([_FakeResponse(200, {"title": "no id"})])
    with pytest.raises(HackerNewsAPIError, match="no integer id"):
        client.fetch_item(7)


def test_retries_transient_statuses_with_linear_backoff() -> None:
    client, session, sleeps = _client(
        [_FakeResponse(503), _FakeResponse(429), _FakeResponse(200, [1])],
        backoff_s=1.5,
    )

    assert client.fetch_top_story_ids() == [1]
    assert len(session.calls) == 3
    assert sleeps == [1.5, 3.0]


def test_gives_up_after_max_retries() -> None:
    client, session, sleeps = _client([_FakeResponse(502)] * 3, max_retries=2)

    with pytest.raises(HackerNewsAPIError) as excinfo:
        client.fetch_top_story_ids()

    assert excinfo.value.status_code == 502
    assert len(session.calls) == 3
    assert len(sleeps) == 2


def test_non_retryable_status_fails_fast() -> None:
    client, session, sleeps = _client([_FakeResponse(404)])
    with pytest.raises(HackerNewsAPIError, match="unexpected status 404"):
        client.fetch_item(1)
    assert len(session.calls) == 1
    assert sleeps == []


def test_transport_errors_are_wrapped() -> None:
    client, _, _ = _client([requests.ConnectionError("boom")])
    with pytest.raises(HackerNewsAPIError, match="request failed") as excinfo:
        client.fetch_top_story_ids()
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_invalid_json_is_wrapped() -> None:
    client, _, _ = _client([_FakeResponse(200, invalid_json=True)])
    with pytest.raises(HackerNewsAPIError, match="invalid JSON"):
        client.fetch_top_story_ids()


def test_fetch_top_stories_limits_and_counts_failures() -> None:
    client, session, _ = _client(
        [
            _FakeResponse(200, [10, 11, 12, 13]),
            _FakeResponse(200, {"id": 10, "title": "first"}),
            _FakeResponse(200, None),
            _FakeResponse(200, {"id": 12, "title": "third"}),
        ]
    )
    errors: list = []

    stories = client.fetch_top_stories(3, on_error=lambda item_id, exc: errors.append((item_id, str(exc))))

    assert [s.id for s in stories] == [10, 12]
    assert errors == [(11, "item 11 not found")]
    assert len(session.calls) == 4


def test_fetch_top_stories_logs_without_callback(caplog) -> None:
    client, _, _ = _client([_FakeResponse(200, [5]), _FakeResponse(404)])

    with caplog.at_level("WARNING"):
        stories = client.fetch_top_stories(1)

    assert stories == []
    assert "Error fetching story 5" in caplog.text


def test_fetch_top_stories_rejects_zero() -> None:
    client, _, _ = _client([])
    with pytest.raises(ValueError):
        client.fetch_top_stories(0)


def test_context_manager_closes_owned_session_only() -> None:
    client, session, _ = _client([])
    with client:
        pass
    assert session.closed is False
