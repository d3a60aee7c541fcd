"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from typing import Callable, List, Optional

from bs4 import FeatureNotFound
from bs4.builder import builder_registry

from hn_engine.config import Settings
from hn_engine.integrations.hackernews_api import HackerNewsAPIError, HackerNewsClient
from hn_engine.providers.openai_provider import OpenAISummarizer
from hn_engine.render import FragmentRenderer

MIN_PYTHON = (3, 10)
SELFTEST_FRAGMENT = '<p>Hello&nbsp;<a href="https://example.com">world</a></p><p>x &amp;amp; y<!-- c --></p>'
SELFTEST_EXPECTED = "Hello world (https://example.com)\nx & y"

ClientFactory = Callable[[Settings], HackerNewsClient]


@dataclass(frozen=True)
class CheckResult:
    name: str
    level: str  # PASS | WARN | FAIL
    detail: str


def _default_client_factory(settings: Settings) -> HackerNewsClient:
    return HackerNewsClient(settings.api_base, timeout_s=settings.http_timeout_s, max_retries=0)


def _check_python(version_info=None) -> CheckResult:
    version = tuple((version_info or sys.version_info)[:2])
    label = ".".join(str(part) for part in version)
    if version < MIN_PYTHON:
        required = ".".join(str(part) for part in MIN_PYTHON)
        return CheckResult("python", "FAIL", f"python {label} found; {required}+ required")
    return CheckResult("python", "PASS", f"python {label}")


def _check_html_parser(settings: Settings) -> CheckResult:
    if builder_registry.lookup(settings.tree_builder) is None:
        return CheckResult(
            "html_parser",
            "FAIL",
            f"bs4 tree builder '{settings.tree_builder}' unavailable (install lxml or set HNBRIEF_HTML_PARSER)",
        )
    return CheckResult("html_parser", "PASS", f"bs4 tree builder '{settings.tree_builder}' available")


def _check_renderer(settings: Settings) -> CheckResult:
    renderer = FragmentRenderer(features=settings.tree_builder, max_depth=settings.render_max_depth)
    try:
        rendered = renderer.render(SELFTEST_FRAGMENT).text
    except FeatureNotFound as exc:
        return CheckResult("renderer_selftest", "FAIL", f"renderer unavailable: {exc}")
    if rendered != SELFTEST_EXPECTED:
        return CheckResult("renderer_selftest", "FAIL", f"unexpected output: {rendered!r}")
    return CheckResult("renderer_selftest", "PASS", "fragment renderer output matches")


def _check_api(settings: Settings, *, offline: bool, client_factory: ClientFactory) -> CheckResult:
    if offline:
        return CheckResult("api", "WARN", "skipped (--offline)")
    with client_factory(settings) as client:
        try:
            story_ids = client.fetch_top_story_ids()
        except HackerNewsAPIError as exc:
            return CheckResult("api", "FAIL", f"{settings.api_base}: {exc}")
    if not story_ids:
        return CheckResult("api", "WARN", f"{settings.api_base} returned no top stories")
    return CheckResult("api", "PASS", f"{len(story_ids)} top story ids from {settings.api_base}")


def _check_summarizer(settings: Settings) -> CheckResult:
    if settings.summary_provider == "none":
        return CheckResult("summarizer", "PASS", "summaries disabled by configuration")
    if settings.summary_provider != "openai":
        return CheckResult("summarizer", "FAIL", f"unknown summary provider '{settings.summary_provider}'")
    summarizer = OpenAISummarizer(api_key=settings.openai_api_key, model=settings.summary_model)
    reason = summarizer.unavailable_reason()
    if reason:
        return CheckResult("summarizer", "WARN", f"--summarize unavailable: {reason}")
    return CheckResult("summarizer", "PASS", f"openai ready (model {settings.summary_model})")


def run_checks(
    settings: Settings,
    *,
    offline: bool = False,
    client_factory: Optional[ClientFactory] = None,
) -> List[CheckResult]:
    results = [_check_python(), _check_html_parser(settings)]
    if results[-1].level == "FAIL":
        results.append(CheckResult("renderer_selftest", "FAIL", "skipped: tree builder unavailable"))
    else:
        results.append(_check_renderer(settings))
    results.append(_check_api(settings, offline=offline, client_factory=client_factory or _default_client_factory))
    results.append(_check_summarizer(settings))
    return results


def _format_result(result: CheckResult) -> str:
    return f"[{result.level}] {result.name}: {result.detail}"


def report(results: List[CheckResult], *, as_json: bool = False) -> int:
    if as_json:
        print(json.dumps([asdict(r) for r in results], ensure_ascii=False, indent=2, sort_keys=True))
    else:
        print("hnbrief doctor")
        for result in results:
            print(_format_result(result))

    fail_count = sum(1 for r in results if r.level == "FAIL")
    if fail_count:
        if not as_json:
            print(f"doctor: {fail_count} failing check(s)")
        return 2
    if not as_json:
        warn_count = sum(1 for r in results if r.level == "WARN")
        if warn_count:
            print(f"doctor: completed with {warn_count} warning(s)")
        else:
            print("doctor: all checks passed")
    return 0
