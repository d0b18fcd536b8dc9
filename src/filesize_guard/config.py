"""GuardConfig dataclass, layered config file lookup, and environment overrides."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_SECTION = "fileSizeGuard"
CONFIG_FILE_NAME = ".ck.json"

DEFAULT_WARN_THRESHOLD = 120
DEFAULT_BLOCK_THRESHOLD = 200

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    # Lock files
    r"package-lock\.json$",
    r"pnpm-lock\.yaml$",
    r"yarn\.lock$",
    r"Cargo\.lock$",
    r"poetry\.lock$",
    # Minified / generated / declarations
    r"\.min\.(js|css)$",
    r"\.bundle\.(js|css)$",
    r"\.generated\.",
    r"\.d\.ts$",
    # Tool config
    r"\.config\.(js|ts|cjs|mjs)$",
    r"tsconfig.*\.json$",
    r"\.eslintrc",
    r"\.prettierrc",
    # Data and docs
    r"\.json$",
    r"\.yaml$",
    r"\.yml$",
    r"\.toml$",
    r"\.xml$",
    r"\.md$",
    r"\.mdx$",
    r"\.rst$",
    r"\.txt$",
    # Fixtures and snapshots
    r"__fixtures__/",
    r"__snapshots__/",
    r"\.snap$",
    # Tests
    r"(^|/)test_[^/]*\.py$",
    r"_test\.(py|go)$",
    r"(^|/)conftest\.py$",
    r"\.(test|spec)\.[^/]+$",
    r"__tests__/",
)


class ConfigWriteError(Exception):
    """Raised when the guard section cannot be written back to a config file."""


def compile_patterns(sources: list[Any] | tuple[Any, ...]) -> list[re.Pattern[str]]:
    """Compile regex sources one by one, dropping any that fail."""
    compiled: list[re.Pattern[str]] = []
    for source in sources:
        if not isinstance(source, str):
            logger.warning(f"Ignoring non-string exclude pattern: {source!r}")
            continue
        try:
            compiled.append(re.compile(source))
        except re.error as e:
            logger.warning(f"Ignoring invalid exclude pattern {source!r}: {e}")
    return compiled


@dataclass
class GuardConfig:
    enabled: bool = True
    warn_threshold: int = DEFAULT_WARN_THRESHOLD
    block_threshold: int = DEFAULT_BLOCK_THRESHOLD
    exclude_patterns: list[re.Pattern[str]] = field(
        default_factory=lambda: compile_patterns(DEFAULT_EXCLUDE_PATTERNS)
    )
    whitelist_paths: list[str] = field(default_factory=list)
    config_path: Path | None = None


def config_search_paths(cwd: Path | None = None, home: Path | None = None) -> list[Path]:
    """Candidate config files in priority order: explicit, project-local, global."""
    cwd = cwd if cwd is not None else Path.cwd()
    home = home if home is not None else Path.home()

    paths: list[Path] = []
    explicit = os.environ.get("FILE_SIZE_GUARD_CONFIG")
    if explicit:
        paths.append(Path(explicit))
    paths.extend([
        cwd / ".claude" / CONFIG_FILE_NAME,
        cwd / CONFIG_FILE_NAME,
        home / ".claude" / CONFIG_FILE_NAME,
    ])
    return paths


def _read_config_file(path: Path) -> dict[str, Any] | None:
    try:
        text = path.read_text()
        if not text.strip():
            return None
        data = json.loads(text)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to load guard config from {path}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"Ignoring guard config {path}: top level is not an object")
        return None
    return data


def load_guard_config(cwd: Path | None = None, home: Path | None = None) -> GuardConfig:
    """Load config from the first readable file in the search path, then env overrides."""
    config = GuardConfig()

    for path in config_search_paths(cwd, home):
        if not path.is_file():
            continue
        data = _read_config_file(path)
        if data is None:
            continue
        section = data.get(CONFIG_SECTION, {})
        if isinstance(section, dict):
            _apply(config, section)
        config.config_path = path
        break

    _apply_env(config)
    return config


def _positive_int(value: object) -> int | None:
    # bool is an int subclass; JSON true must not become a threshold of 1
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _apply(config: GuardConfig, data: dict[str, Any]) -> None:
    if "enabled" in data and isinstance(data["enabled"], bool):
        config.enabled = data["enabled"]
    if (warn := _positive_int(data.get("warnThreshold"))) is not None:
        config.warn_threshold = warn
    if (block := _positive_int(data.get("blockThreshold"))) is not None:
        config.block_threshold = block
    patterns = data.get("excludePatterns")
    if isinstance(patterns, list):
        config.exclude_patterns = compile_patterns(patterns)
    whitelist = data.get("whitelistPaths")
    if isinstance(whitelist, list):
        config.whitelist_paths = [p for p in whitelist if isinstance(p, str) and p]


def _safe_int(value: str) -> int | None:
    try:
        return _positive_int(int(value))
    except ValueError:
        return None


def _apply_env(config: GuardConfig) -> None:
    if env_enabled := os.environ.get("FILE_SIZE_GUARD_ENABLED"):
        config.enabled = env_enabled.lower() in ("true", "1", "yes")
    if env_warn := os.environ.get("FILE_SIZE_GUARD_WARN"):
        if (warn := _safe_int(env_warn)) is not None:
            config.warn_threshold = warn
    if env_block := os.environ.get("FILE_SIZE_GUARD_BLOCK"):
        if (block := _safe_int(env_block)) is not None:
            config.block_threshold = block


def config_file_for_scope(scope: str, cwd: Path | None = None, home: Path | None = None) -> Path:
    if scope == "local":
        return (cwd if cwd is not None else Path.cwd()) / ".claude" / CONFIG_FILE_NAME
    return (home if home is not None else Path.home()) / ".claude" / CONFIG_FILE_NAME


def set_enabled(path: Path, enabled: bool) -> None:
    """Persist fileSizeGuard.enabled into a config file, keeping every other key."""
    existing: dict[str, Any] = {}
    if path.exists():
        try:
            text = path.read_text()
            loaded = json.loads(text) if text.strip() else {}
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigWriteError(f"cannot read {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigWriteError(f"{path} does not contain a JSON object")
        existing = loaded

    section = existing.get(CONFIG_SECTION)
    if not isinstance(section, dict):
        section = {}
    section["enabled"] = enabled
    existing[CONFIG_SECTION] = section

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(existing, indent=2) + "\n")
    except OSError as e:
        raise ConfigWriteError(f"cannot write {path}: {e}") from e
