"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

import requests

from hn_engine.config import DEFAULT_API_BASE, DEFAULT_HTTP_TIMEOUT_S, USER_AGENT
from hn_engine.models import Story

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_S = 1.5

ErrorCallback = Callable[[int, "HackerNewsAPIError"], None]


class HackerNewsAPIError(RuntimeError):
    """Failed request or unusable payload from the Hacker News API."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class HackerNewsClient:
    """
    Thin client for the public Hacker News Firebase API.

    Endpoints:
      - /topstories.json  -> list of item ids, best first
      - /item/<id>.json   -> one item, or null when unknown/deleted
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        *,
        timeout_s: float = DEFAULT_HTTP_TIMEOUT_S,
        session: Optional[requests.Session] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_s: float = DEFAULT_BACKOFF_S,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.max_retries = max(0, max_retries)
        self.backoff_s = backoff_s
        self._sleep = sleep
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    def __enter__(self) -> "HackerNewsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}/{path}"
        # light retry for rate limits and transient CDN errors
        for attempt in range(self.max_retries + 1):
            try:
                resp = self._session.get(url, params={"print": "pretty"}, timeout=self.timeout_s)
            except requests.RequestException as exc:
                raise HackerNewsAPIError(f"request failed for {url}: {exc}", url=url) from exc

            if resp.status_code == 200:
                try:
                    return resp.json()
                except ValueError as exc:
                    raise HackerNewsAPIError(f"invalid JSON from {url}", url=url, status_code=200) from exc

            if resp.status_code in RETRY_STATUS_CODES and attempt < self.max_retries:
                delay = self.backoff_s * (attempt + 1)
                logger.info("HTTP %s from %s; retrying in %.1fs", resp.status_code, url, delay)
                self._sleep(delay)
                continue

            raise HackerNewsAPIError(
                f"unexpected status {resp.status_code} from {url}",
                url=url,
                status_code=resp.status_code,
            )

        raise RuntimeError("Unreachable")

    def fetch_top_story_ids(self) -> List[int]:
        payload = self._get_json("topstories.json")
        if not isinstance(payload, list):
            raise HackerNewsAPIError(f"top stories payload is not a list: {type(payload).__name__}")
        return [item for item in payload if isinstance(item, int) and not isinstance(item, bool)]

    def fetch_item(self, item_id: int) -> Story:
        payload = self._get_json(f"item/{item_id}.json")
        if payload is None:
            raise HackerNewsAPIError(f"item {item_id} not found")
        if not isinstance(payload, dict):
            raise HackerNewsAPIError(f"item {item_id} payload is not an object")
        try:
            return Story.from_dict(payload)
        except ValueError as exc:
            raise HackerNewsAPIError(f"item {item_id}: {exc}") from exc

    def fetch_top_stories(self, max_stories: int, *, on_error: Optional[ErrorCallback] = None) -> List[Story]:
        """
        Fetch details for the first ``max_stories`` top story ids, in order.

        A failing item is reported and skipped, but still counts toward the
        limit. Failure to fetch the id list itself propagates.
        """
        if max_stories < 1:
            raise ValueError("max_stories must be >= 1")

        story_ids = self.fetch_top_story_ids()
        stories: List[Story] = []
        for item_id in story_ids[:max_stories]:
            try:
                stories.append(self.fetch_item(item_id))
            except HackerNewsAPIError as exc:
                if on_error is None:
                    logger.warning("Error fetching story %s: %s", item_id, exc)
                else:
                    on_error(item_id, exc)
        return stories


__all__ = ["HackerNewsAPIError", "HackerNewsClient", "RETRY_STATUS_CODES"]
