"""PreToolUse file size guard hook.

Estimates the line count a Write/Edit would leave behind and compares it to
the configured thresholds. Warns (exit 0) at the warn threshold, blocks
(exit 2) at the block threshold. Fail-open: any internal error allows the
operation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from filesize_guard import line_counter, policy
from filesize_guard.config import GuardConfig, load_guard_config
from filesize_guard.hooks._common import read_hook_input, resolve_file_path
from filesize_guard.messages import format_block_message, format_warning_message
from filesize_guard.models import Decision, OperationKind, OperationRequest, Verdict

logger = logging.getLogger(__name__)


def evaluate_request(
    request: OperationRequest,
    config: GuardConfig,
    cwd: Path | None = None,
) -> Verdict:
    """Evaluate one request against an already loaded config. Pure apart from file reads."""
    if not config.enabled:
        return Verdict.allow("disabled")

    if request.kind == OperationKind.OTHER:
        return Verdict.allow("pass-through")

    path = resolve_file_path(request.target_path, cwd)
    if path is None:
        return Verdict.allow("pass-through")
    file_path = str(path)

    if request.kind == OperationKind.CREATE:
        current_lines = line_counter.snapshot(path).line_count
        estimated_lines = line_counter.estimate_for_create(request.content)
        # A new file can carry its own directive
        override = policy.parse_override(request.content[: policy.OVERRIDE_WINDOW_BYTES])
    else:
        estimate = line_counter.estimate_for_modify(
            path, request.old_string, request.new_string, request.replace_all
        )
        current_lines = estimate.current_lines
        estimated_lines = estimate.estimated_lines
        override = policy.read_override(path)

    return policy.evaluate(file_path, current_lines, estimated_lines, config, override)


def run_guard(
    hook_input: dict[str, Any],
    cwd: Path | None = None,
    home: Path | None = None,
) -> Verdict:
    """Config load + parse + evaluate behind a fail-open boundary."""
    try:
        config = load_guard_config(cwd, home)
        request = OperationRequest.from_hook_input(hook_input)
        return evaluate_request(request, config, cwd)
    except Exception as e:
        logger.debug("file-size-guard failure", exc_info=True)
        print(f"WARN: file-size-guard hook error, allowing operation - {e}", file=sys.stderr)
        return Verdict.allow("error")


def render_message(verdict: Verdict) -> str:
    if verdict.decision == Decision.BLOCK:
        return format_block_message(
            verdict.file_path, verdict.current_lines, verdict.estimated_lines, verdict.threshold
        )
    if verdict.decision == Decision.WARN:
        return format_warning_message(
            verdict.file_path, verdict.current_lines, verdict.estimated_lines, verdict.threshold
        )
    return ""


def main() -> None:
    """Entry point for PreToolUse hook."""
    hook_input = read_hook_input()
    if not hook_input:
        sys.exit(0)

    verdict = run_guard(hook_input)
    try:
        message = render_message(verdict)
    except Exception:
        sys.exit(0)  # Never block on a formatting error
    if message:
        print(message, file=sys.stderr)
    sys.exit(verdict.exit_code)


if __name__ == "__main__":
    main()
