"""
HN Brief
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from hn_engine.config import MAX_STORIES_LIMIT, Settings
from hn_engine.formatting import format_header, format_story, render_story_text, story_to_dict
from hn_engine.integrations.hackernews_api import HackerNewsAPIError, HackerNewsClient
from hn_engine.models import Story
from hn_engine.providers import BaseSummarizer, select_summarizer
from hn_engine.render import FragmentRenderer
from hn_engine.utils.time import utc_now_iso

from . import doctor

COMMANDS = ("top", "item", "render", "doctor")


def _setup_logging(settings: Settings, verbose: bool = False) -> None:
    if logging.getLogger().hasHandlers():
        return
    level = logging.INFO if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _build_client(settings: Settings) -> HackerNewsClient:
    return HackerNewsClient(settings.api_base, timeout_s=settings.http_timeout_s)


def _build_renderer(settings: Settings, max_depth: Optional[int] = None) -> FragmentRenderer:
    return FragmentRenderer(
        features=settings.tree_builder,
        max_depth=max_depth if max_depth is not None else settings.render_max_depth,
    )


def _max_stories(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if not 1 <= parsed <= MAX_STORIES_LIMIT:
        raise argparse.ArgumentTypeError(f"{parsed} is not in 1..={MAX_STORIES_LIMIT}")
    return parsed


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"{parsed} must be >= 1")
    return parsed


def _report_fetch_error(item_id: int, exc: HackerNewsAPIError) -> None:
    print(f"Error fetching story {item_id}: {exc}", file=sys.stderr)


def _resolve_summarizer(args: argparse.Namespace, settings: Settings) -> Optional[BaseSummarizer]:
    if not args.summarize:
        return None
    try:
        summarizer = select_summarizer(enabled=True, settings=settings)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    reason = summarizer.unavailable_reason()
    if reason:
        print(f"Summaries disabled: {reason}", file=sys.stderr)
        return None
    return summarizer


def _summarize(summarizer: Optional[BaseSummarizer], story: Story, text: str) -> Optional[str]:
    if summarizer is None:
        return None
    result = summarizer.summarize(story, text)
    return result.text if result.status == "ok" else None


def _emit_stories(
    stories: List[Story],
    *,
    renderer: FragmentRenderer,
    summarizer: Optional[BaseSummarizer],
    as_json: bool,
) -> List[dict]:
    records: List[dict] = []
    for story in stories:
        text = render_story_text(story, renderer)
        summary = _summarize(summarizer, story, text)
        if as_json:
            records.append(story_to_dict(story, rendered_text=text, summary=summary))
            continue
        for line in format_story(story, rendered_text=text, summary=summary):
            print(line)
    return records


def _top(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    _setup_logging(settings, args.verbose)

    max_stories = args.max_stories if args.max_stories is not None else settings.max_stories
    renderer = _build_renderer(settings)
    summarizer = _resolve_summarizer(args, settings)

    if not args.json:
        print(format_header(max_stories))

    with _build_client(settings) as client:
        try:
            stories = client.fetch_top_stories(max_stories, on_error=_report_fetch_error)
        except HackerNewsAPIError as exc:
            print(f"Error fetching top stories: {exc}", file=sys.stderr)
            return 1

    records = _emit_stories(stories, renderer=renderer, summarizer=summarizer, as_json=args.json)
    if args.json:
        payload = {"generated_at": utc_now_iso(), "max_stories": max_stories, "stories": records}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def _item(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    _setup_logging(settings, args.verbose)

    renderer = _build_renderer(settings)
    summarizer = _resolve_summarizer(args, settings)

    with _build_client(settings) as client:
        try:
            story = client.fetch_item(args.item_id)
        except HackerNewsAPIError as exc:
            print(f"Error fetching story {args.item_id}: {exc}", file=sys.stderr)
            return 1

    records = _emit_stories([story], renderer=renderer, summarizer=summarizer, as_json=args.json)
    if args.json:
        print(json.dumps(records[0], ensure_ascii=False, indent=2))
    return 0


def _render(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    _setup_logging(settings, args.verbose)

    if args.path == "-":
        html = sys.stdin.read()
    else:
        path = Path(args.path)
        try:
            html = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SystemExit(f"Cannot read {path}: {exc}") from exc

    result = _build_renderer(settings, args.max_depth).render(html)
    if result.text:
        print(result.text)
    if result.truncated:
        print(
            f"render: truncated {result.truncated} subtree(s) nested deeper than the max depth",
            file=sys.stderr,
        )
    return 0


def _doctor(args: argparse.Namespace) -> int:
    settings = Settings.from_env()
    _setup_logging(settings, args.verbose)
    results = doctor.run_checks(settings, offline=args.offline, client_factory=_build_client)
    return doctor.report(results, as_json=args.json)


def _add_common_args(parser: argparse.ArgumentParser, *, root: bool = False) -> None:
    # Subcommands leave the flag unset unless given so "hnbrief -v top" keeps the root value.
    default = False if root else argparse.SUPPRESS
    parser.add_argument("-v", "--verbose", action="store_true", default=default, help="Log progress at INFO level.")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--summarize", action="store_true", help="Add an LLM summary per story (needs OPENAI_API_KEY).")
    parser.add_argument("--json", action="store_true", help="Output machine-readable JSON.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hnbrief",
        description="Print the top Hacker News stories as plain text. Defaults to 'top' when no command is given.",
    )
    _add_common_args(parser, root=True)
    subparsers = parser.add_subparsers(dest="command", required=True)

    top_cmd = subparsers.add_parser("top", help="Print the top stories")
    top_cmd.add_argument(
        "-m",
        "--max-stories",
        dest="max_stories",
        type=_max_stories,
        default=None,
        help=f"Maximum number of stories to display (default: 5 or HNBRIEF_MAX_STORIES, max: {MAX_STORIES_LIMIT}).",
    )
    _add_output_args(top_cmd)
    _add_common_args(top_cmd)
    top_cmd.set_defaults(func=_top)

    item_cmd = subparsers.add_parser("item", help="Print a single item by id")
    item_cmd.add_argument("item_id", type=_positive_int, help="Hacker News item id.")
    _add_output_args(item_cmd)
    _add_common_args(item_cmd)
    item_cmd.set_defaults(func=_item)

    render_cmd = subparsers.add_parser("render", help="Render an HTML fragment to plain text")
    render_cmd.add_argument("path", nargs="?", default="-", help="Fragment file path, or '-' for stdin (default).")
    render_cmd.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        help="Maximum element nesting depth to render (default: HNBRIEF_RENDER_MAX_DEPTH or 256).",
    )
    _add_common_args(render_cmd)
    render_cmd.set_defaults(func=_render)

    doctor_cmd = subparsers.add_parser("doctor", help="Check parser, API reachability and summary setup")
    doctor_cmd.add_argument("--offline", action="store_true", help="Skip the network check.")
    doctor_cmd.add_argument("--json", action="store_true", help="Output machine-readable JSON.")
    _add_common_args(doctor_cmd)
    doctor_cmd.set_defaults(func=_doctor)

    return parser


def _with_default_command(argv: List[str]) -> List[str]:
    if any(token in COMMANDS for token in argv):
        return argv
    if any(token in ("-h", "--help") for token in argv):
        return argv
    return ["top", *argv]


def main(argv: Optional[List[str]] = None) -> int:
    raw_args = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(_with_default_command(raw_args))
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
