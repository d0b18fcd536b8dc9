"""filesize-guard: PreToolUse hook that keeps source files small."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("filesize-guard")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
