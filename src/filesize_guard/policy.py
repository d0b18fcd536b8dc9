"""Exclusion, whitelist, override directive and threshold checks."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from filesize_guard.config import GuardConfig
from filesize_guard.models import Decision, FileOverride, Status, Verdict

logger = logging.getLogger(__name__)

GUARD_NAME = "file-size-guard"
OVERRIDE_WINDOW_BYTES = 1024

_OVERRIDE_RE = re.compile(
    r"(?://|#)\s*@" + re.escape(GUARD_NAME) + r":\s*(disabled|max-lines\s*=\s*(\d+))",
    re.IGNORECASE,
)


def normalize_path(file_path: str) -> str:
    return file_path.replace("\\", "/")


def is_excluded(file_path: str, patterns: list[re.Pattern[str]]) -> bool:
    normalized = normalize_path(file_path)
    return any(pattern.search(normalized) for pattern in patterns)


def is_whitelisted(file_path: str, whitelist: list[str]) -> bool:
    normalized = normalize_path(file_path)
    return any(entry and normalize_path(entry) in normalized for entry in whitelist)


def parse_override(text: str) -> FileOverride | None:
    """Find an override directive in ``text``. Only the first match counts."""
    match = _OVERRIDE_RE.search(text)
    if match is None:
        return None
    if match.group(2) is not None:
        return FileOverride(max_lines=int(match.group(2)))
    return FileOverride(disabled=True)


def read_override(file_path: str | Path) -> FileOverride | None:
    """Look for an override directive in the leading bytes of an existing file."""
    try:
        with Path(file_path).open("rb") as f:
            head = f.read(OVERRIDE_WINDOW_BYTES)
    except (OSError, ValueError):
        return None
    return parse_override(head.decode("utf-8", errors="replace"))


def classify(lines: int, warn_threshold: int, block_threshold: int) -> Status:
    if lines >= block_threshold:
        return Status.BLOCK
    if lines >= warn_threshold:
        return Status.WARN
    return Status.OK


def evaluate(
    file_path: str,
    current_lines: int,
    estimated_lines: int,
    config: GuardConfig,
    override: FileOverride | None = None,
) -> Verdict:
    """Apply exclusion, whitelist, override and thresholds, in that order."""
    if is_excluded(file_path, config.exclude_patterns):
        return Verdict.allow("excluded", file_path)

    if is_whitelisted(file_path, config.whitelist_paths):
        return Verdict.allow("whitelisted", file_path)

    block_threshold = config.block_threshold
    if override is not None:
        if override.disabled:
            return Verdict.allow("override-disabled", file_path)
        if override.max_lines is not None:
            logger.debug(f"{file_path}: max-lines override {override.max_lines}")
            block_threshold = override.max_lines

    status = classify(estimated_lines, config.warn_threshold, block_threshold)
    if status == Status.BLOCK:
        decision, threshold = Decision.BLOCK, block_threshold
    elif status == Status.WARN:
        decision, threshold = Decision.WARN, config.warn_threshold
    else:
        decision, threshold = Decision.ALLOW, config.warn_threshold

    return Verdict(
        decision=decision,
        reason="threshold",
        file_path=file_path,
        current_lines=current_lines,
        estimated_lines=estimated_lines,
        threshold=threshold,
    )
