"""CLI entry point for filesize-guard."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from filesize_guard import __version__, line_counter, policy
from filesize_guard.config import (
    ConfigWriteError,
    config_file_for_scope,
    load_guard_config,
    set_enabled,
)
from filesize_guard.models import Decision


def _cmd_hook(_args: argparse.Namespace) -> None:
    from filesize_guard.hooks.file_size_guard import main as hook_main

    hook_main()


def _cmd_status(_args: argparse.Namespace) -> None:
    config = load_guard_config()
    source = str(config.config_path) if config.config_path else "built-in defaults"
    print(f"file-size-guard: {'ENABLED' if config.enabled else 'DISABLED'}")
    print(f"warnThreshold:  {config.warn_threshold}")
    print(f"blockThreshold: {config.block_threshold}")
    print(f"excludePatterns: {len(config.exclude_patterns)}")
    print(f"whitelistPaths:  {len(config.whitelist_paths)}")
    print(f"config: {source}")


def _toggle(args: argparse.Namespace, enabled: bool) -> None:
    path = config_file_for_scope(cast(str, args.scope))
    try:
        set_enabled(path, enabled)
    except ConfigWriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"file-size-guard {'ENABLED' if enabled else 'DISABLED'} ({path})")


def _cmd_enable(args: argparse.Namespace) -> None:
    _toggle(args, True)


def _cmd_disable(args: argparse.Namespace) -> None:
    _toggle(args, False)


def _cmd_check(args: argparse.Namespace) -> None:
    config = load_guard_config()
    blocked = False
    for raw in cast(list[Path], args.paths):
        path = raw.resolve()
        snap = line_counter.snapshot(path)
        if not snap.exists:
            print(f"{raw}: not found", file=sys.stderr)
            continue
        verdict = policy.evaluate(
            str(path), snap.line_count, snap.line_count, config, policy.read_override(path)
        )
        label = verdict.decision.value.upper()
        if verdict.reason != "threshold":
            label = f"{label} ({verdict.reason})"
        print(f"{label:<24} {snap.line_count:>6} lines  {raw}")
        blocked = blocked or verdict.decision == Decision.BLOCK
    if blocked:
        sys.exit(2)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="filesize-guard",
        description="Warn about or block edits that grow files past a line budget",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"filesize-guard {__version__}"
    )
    _ = parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    _ = subparsers.add_parser("hook", help="Run the PreToolUse hook (JSON on stdin)")
    _ = subparsers.add_parser("status", help="Show enabled flag, thresholds and config source")

    for name, help_text in (("enable", "Enable the guard"), ("disable", "Disable the guard")):
        toggle_p = subparsers.add_parser(name, help=help_text)
        _ = toggle_p.add_argument(
            "--scope",
            choices=["local", "global"],
            default="global",
            help="local (.claude/.ck.json in cwd) or global (~/.claude/.ck.json)",
        )

    check_p = subparsers.add_parser("check", help="Check existing files against the thresholds")
    _ = check_p.add_argument("paths", nargs="+", type=Path, help="Files to check")

    args = parser.parse_args()
    if cast(bool, args.verbose):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    dispatch = {
        "hook": _cmd_hook,
        "status": _cmd_status,
        "enable": _cmd_enable,
        "disable": _cmd_disable,
        "check": _cmd_check,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
