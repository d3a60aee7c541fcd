"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from hn_engine.config import Settings
from hn_engine.providers.base import BaseSummarizer, DisabledSummarizer
from hn_engine.providers.openai_provider import OpenAISummarizer

KNOWN_PROVIDERS = ("openai", "none")


def select_summarizer(*, enabled: bool, settings: Settings) -> BaseSummarizer:
    """
    Pick the summarizer for a run.

    Precedence: the ``--summarize`` flag gates everything, then
    ``HNBRIEF_SUMMARY_PROVIDER`` picks the backend.
    """
    if not enabled:
        return DisabledSummarizer()

    provider = (settings.summary_provider or "").strip().lower()
    if provider == "none":
        return DisabledSummarizer("summaries disabled by HNBRIEF_SUMMARY_PROVIDER=none")
    if provider == "openai":
        return OpenAISummarizer(
            api_key=settings.openai_api_key,
            model=settings.summary_model,
            max_chars=settings.summary_max_chars,
        )
    raise ValueError(f"Unknown summary provider '{provider}'. Known: {', '.join(KNOWN_PROVIDERS)}")
