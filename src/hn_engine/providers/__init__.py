"""
HN Brief summary providers.
"""

from hn_engine.providers.base import BaseSummarizer, DisabledSummarizer, SummarizerError, SummaryResult
from hn_engine.providers.openai_provider import OpenAISummarizer
from hn_engine.providers.selection import select_summarizer

__all__ = [
    "BaseSummarizer",
    "DisabledSummarizer",
    "OpenAISummarizer",
    "SummarizerError",
    "SummaryResult",
    "select_summarizer",
]
