"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://hacker-news.firebaseio.com/v0"
DEFAULT_HTTP_TIMEOUT_S = 20.0
DEFAULT_MAX_STORIES = 5
MAX_STORIES_LIMIT = 25
DEFAULT_TREE_BUILDER = "lxml"
DEFAULT_RENDER_MAX_DEPTH = 256
DEFAULT_SUMMARY_PROVIDER = "openai"
DEFAULT_SUMMARY_MODEL = "gpt-4o-mini"
DEFAULT_SUMMARY_MAX_CHARS = 6000
DEFAULT_LOG_LEVEL = "WARNING"
USER_AGENT = "hnbrief/0.1 (+terminal digest)"


def _env_text(env: Mapping[str, str], key: str, default: str) -> str:
    value = (env.get(key) or "").strip()
    return value or default


def _env_int(env: Mapping[str, str], key: str, default: int, *, minimum: int = 1) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %s", key, raw, default)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r (must be >= %s); using %s", key, raw, minimum, default)
        return default
    return value


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number); using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r (must be > 0); using %s", key, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment (``HNBRIEF_*``)."""

    api_base: str = DEFAULT_API_BASE
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    max_stories: int = DEFAULT_MAX_STORIES
    tree_builder: str = DEFAULT_TREE_BUILDER
    render_max_depth: int = DEFAULT_RENDER_MAX_DEPTH
    summary_provider: str = DEFAULT_SUMMARY_PROVIDER
    summary_model: str = DEFAULT_SUMMARY_MODEL
    summary_max_chars: int = DEFAULT_SUMMARY_MAX_CHARS
    openai_api_key: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env_map = os.environ if env is None else env

        max_stories = _env_int(env_map, "HNBRIEF_MAX_STORIES", DEFAULT_MAX_STORIES)
        if max_stories > MAX_STORIES_LIMIT:
            logger.warning(
                "HNBRIEF_MAX_STORIES=%s exceeds limit %s; clamping",
                max_stories,
                MAX_STORIES_LIMIT,
            )
            max_stories = MAX_STORIES_LIMIT

        api_key = (env_map.get("OPENAI_API_KEY") or "").strip() or None

        return cls(
            api_base=_env_text(env_map, "HNBRIEF_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            http_timeout_s=_env_float(env_map, "HNBRIEF_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT_S),
            max_stories=max_stories,
            tree_builder=_env_text(env_map, "HNBRIEF_HTML_PARSER", DEFAULT_TREE_BUILDER),
            render_max_depth=_env_int(env_map, "HNBRIEF_RENDER_MAX_DEPTH", DEFAULT_RENDER_MAX_DEPTH),
            summary_provider=_env_text(env_map, "HNBRIEF_SUMMARY_PROVIDER", DEFAULT_SUMMARY_PROVIDER).lower(),
            summary_model=_env_text(env_map, "HNBRIEF_SUMMARY_MODEL", DEFAULT_SUMMARY_MODEL),
            summary_max_chars=_env_int(env_map, "HNBRIEF_SUMMARY_MAX_CHARS", DEFAULT_SUMMARY_MAX_CHARS),
            openai_api_key=api_key,
            log_level=_env_text(env_map, "HNBRIEF_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
