"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

# src/hn_engine/providers/base.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Optional

from hn_engine.config import DEFAULT_SUMMARY_MAX_CHARS
from hn_engine.models import Story

logger = logging.getLogger(__name__)

SummaryStatus = Literal["ok", "disabled", "error"]
_REASON_LIMIT = 240


class SummarizerError(RuntimeError):
    """Provider-side failure while producing a summary."""


@dataclass(frozen=True)
class SummaryResult:
    status: SummaryStatus
    text: Optional[str] = None
    reason: Optional[str] = None
    model: Optional[str] = None


def _clip(value: str, *, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."


def build_summary_input(story: Story, text: str, *, max_chars: int = DEFAULT_SUMMARY_MAX_CHARS) -> str:
    """Plain-text prompt body: title, URL and rendered text, clipped to ``max_chars``."""
    parts = []
    if story.title:
        parts.append(f"Title: {story.title}")
    if story.url:
        parts.append(f"URL: {story.url}")
    if text:
        parts.append(f"Text:\n{text}")
    return _clip("\n".join(parts), limit=max_chars)


class BaseSummarizer(ABC):
    """
    Base summarizer that turns provider failures into a ``SummaryResult``.

    Statuses:
      - ok: summary produced
      - disabled: provider not configured (no key, missing package, turned off)
      - error: provider was called and failed; the run continues without it
    """

    name = "base"
    model: Optional[str] = None

    def unavailable_reason(self) -> Optional[str]:
        return None

    def summarize(self, story: Story, text: str) -> SummaryResult:
        reason = self.unavailable_reason()
        if reason:
            return SummaryResult(status="disabled", reason=reason, model=self.model)
        try:
            summary = self._summarize_live(story, text)
        except SummarizerError as exc:
            logger.warning("[%s] Summary failed for item %s: %s", self.__class__.__name__, story.id, exc)
            return SummaryResult(status="error", reason=_clip(str(exc), limit=_REASON_LIMIT), model=self.model)
        except Exception as exc:
            logger.error(
                "[%s] Summary failed (unexpected) for item %s: %s",
                self.__class__.__name__,
                story.id,
                exc,
            )
            return SummaryResult(
                status="error",
                reason=_clip(f"{type(exc).__name__}: {exc}", limit=_REASON_LIMIT),
                model=self.model,
            )

        summary = (summary or "").strip()
        if not summary:
            return SummaryResult(status="error", reason="empty summary", model=self.model)
        return SummaryResult(status="ok", text=summary, model=self.model)

    @abstractmethod
    def _summarize_live(self, story: Story, text: str) -> str:
        """Call the provider and return the raw summary text."""
        raise NotImplementedError


class DisabledSummarizer(BaseSummarizer):
    name = "none"

    def __init__(self, reason: str = "summaries disabled") -> None:
        self._reason = reason

    def unavailable_reason(self) -> Optional[str]:
        return self._reason

    def _summarize_live(self, story: Story, text: str) -> str:
        raise SummarizerError(self._reason)
