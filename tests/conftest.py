from __future__ import annotations

import os
import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if src_path.exists():
        src_str = str(src_path)
        if src_str not in sys.path:
            sys.path.insert(0, src_str)


_ensure_src_on_path()

# Offline-safe defaults; tests that need other values override via monkeypatch.
os.environ.setdefault("HNBRIEF_API_BASE", "https://hn.invalid/v0")
os.environ.setdefault("HNBRIEF_LOG_LEVEL", "WARNING")
os.environ.pop("OPENAI_API_KEY", None)
