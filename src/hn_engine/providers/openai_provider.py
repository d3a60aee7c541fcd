from __future__ import annotations

import importlib.util
from typing import Any, Optional

from hn_engine.config import DEFAULT_SUMMARY_MAX_CHARS, DEFAULT_SUMMARY_MODEL
from hn_engine.models import Story
from hn_engine.providers.base import BaseSummarizer, SummarizerError, build_summary_input

SYSTEM_PROMPT = (
    "You summarize Hacker News submissions for a terminal digest. "
    "Reply with two or three plain sentences. No markdown, no preamble."
)


class OpenAISummarizer(BaseSummarizer):
    """
    Summaries via the OpenAI chat completions API.

    The ``openai`` package is an optional extra (``pip install 'hnbrief[ai]'``);
    without it, or without an API key, the provider reports itself disabled
    and the digest prints without summaries.
    """

    name = "openai"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = DEFAULT_SUMMARY_MODEL,
        max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
        timeout_s: float = 30.0,
        client: Any = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.max_chars = max_chars
        self.timeout_s = timeout_s
        self._client = client

    def unavailable_reason(self) -> Optional[str]:
        if self._client is not None:
            return None
        if not self.api_key:
            return "OPENAI_API_KEY not set"
        if importlib.util.find_spec("openai") is None:
            return "openai package not installed (pip install 'hnbrief[ai]')"
        return None

    def _get_client(self) -> Any:
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout_s)
        return self._client

    def _summarize_live(self, story: Story, text: str) -> str:
        client = self._get_client()
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_input(story, text, max_chars=self.max_chars)},
            ],
            temperature=0.2,
        )
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise SummarizerError(f"no choices returned by model {self.model}")
        return choices[0].message.content or ""
