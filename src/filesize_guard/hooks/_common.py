"""Shared utilities for hook scripts."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def read_hook_input() -> dict[str, Any]:
    """Read JSON input from stdin. Returns empty dict on failure."""
    try:
        raw = sys.stdin.read()
        if not raw.strip():
            return {}
        data = json.loads(raw)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError, RecursionError):
        return {}
    return data if isinstance(data, dict) else {}


def resolve_file_path(file_path: str, cwd: Path | None = None) -> Path | None:
    """Absolute path for a tool's file_path argument; relative paths join cwd."""
    if not file_path:
        return None
    path = Path(file_path)
    if path.is_absolute():
        return path
    return (cwd if cwd is not None else Path.cwd()) / path
