"""Shared fixtures for filesize_guard tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty project dir with an empty home, so no real
    ~/.claude/.ck.json or FILE_SIZE_GUARD_* variable leaks in."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "FILE_SIZE_GUARD_CONFIG",
        "FILE_SIZE_GUARD_ENABLED",
        "FILE_SIZE_GUARD_WARN",
        "FILE_SIZE_GUARD_BLOCK",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def project(isolated_env: Path) -> Path:
    return isolated_env


@pytest.fixture
def home(tmp_path: Path) -> Path:
    return tmp_path / "home"


def lines(n: int, text: str = "x") -> str:
    """Content whose newline-delimited segment count is exactly n."""
    return "\n".join([text] * n)


def write_lines(path: Path, n: int, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(lines(n, text))
    return path
