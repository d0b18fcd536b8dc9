"""Line counting and post-edit line estimation.

Counts are newline-delimited segments (``len(text.split("\\n"))``), so a
trailing newline adds one segment. Nothing here raises on filesystem
trouble: missing, unreadable, non-regular and binary files all produce a
zero-line snapshot.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from filesize_guard.models import EditEstimate, FileSnapshot

logger = logging.getLogger(__name__)

BINARY_EXTENSIONS: frozenset[str] = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".webp", ".svg",
    ".woff", ".woff2", ".ttf", ".eot", ".otf",
    ".pdf", ".zip", ".tar", ".gz", ".rar",
    ".mp3", ".mp4", ".avi", ".mov", ".webm",
    ".exe", ".dll", ".so", ".dylib",
    ".db", ".sqlite", ".lock",
})

STREAMING_THRESHOLD_BYTES = 1024 * 1024
_CHUNK_SIZE = 64 * 1024


def is_binary_path(file_path: str | Path) -> bool:
    return Path(file_path).suffix.lower() in BINARY_EXTENSIONS


def count_segments(text: str) -> int:
    return len(text.split("\n"))


def count_lines_streaming(path: Path, chunk_size: int = _CHUNK_SIZE) -> int:
    """Count lines without loading the file. Returns 0 on any read error."""
    newlines = 0
    size = 0
    try:
        with path.open("rb") as f:
            while chunk := f.read(chunk_size):
                size += len(chunk)
                newlines += chunk.count(b"\n")
    except OSError as e:
        logger.debug(f"Streaming count failed for {path}: {e}")
        return 0
    return newlines + 1 if size else 0


def _looks_binary(path: Path) -> bool:
    try:
        with path.open("rb") as f:
            return b"\0" in f.read(_CHUNK_SIZE)
    except OSError:
        return True


def snapshot(file_path: str | Path, with_content: bool = False) -> FileSnapshot:
    """Describe the file currently at ``file_path``.

    ``with_content`` keeps the decoded text on the snapshot; it is only
    needed for counting replace-all occurrences.
    """
    path = Path(file_path)
    try:
        st = path.lstat()
    except FileNotFoundError:
        return FileSnapshot(exists=False)
    except (OSError, ValueError) as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return FileSnapshot(exists=False, error=str(e))

    # Symlinks and directories are never counted
    if not stat.S_ISREG(st.st_mode):
        return FileSnapshot(exists=True, error="not-regular-file")

    if is_binary_path(path):
        return FileSnapshot(exists=True, is_binary=True)

    if not with_content and st.st_size > STREAMING_THRESHOLD_BYTES:
        if _looks_binary(path):
            return FileSnapshot(exists=True, is_binary=True, error="encoding-error")
        return FileSnapshot(line_count=count_lines_streaming(path), exists=True)

    try:
        # Decode the raw bytes so \r and \r\n survive; only \n delimits lines
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        return FileSnapshot(exists=True, is_binary=True, error="encoding-error")
    except OSError as e:
        logger.debug(f"Cannot read {path}: {e}")
        return FileSnapshot(exists=False, error=str(e))

    return FileSnapshot(
        line_count=count_segments(content),
        exists=True,
        content=content if with_content else None,
    )


def estimate_for_create(content: str | None) -> int:
    if not content:
        return 0
    return count_segments(content)


def estimate_for_modify(
    file_path: str | Path,
    old_string: str,
    new_string: str,
    replace_all: bool = False,
) -> EditEstimate:
    """Predict the line count after replacing ``old_string`` with ``new_string``.

    Without ``replace_all`` exactly one replacement is assumed, mirroring the
    Edit tool's single-match contract. With it, every non-overlapping
    occurrence in the current file contributes the per-occurrence delta; a
    search string that is not found still counts as one occurrence.
    """
    snap = snapshot(file_path, with_content=replace_all)
    current_lines = snap.line_count

    per_occurrence = count_segments(new_string or "") - count_segments(old_string or "")

    if replace_all and snap.content and old_string:
        occurrences = snap.content.count(old_string)
        delta = per_occurrence * max(occurrences, 1)
    else:
        occurrences = 1
        delta = per_occurrence

    return EditEstimate(
        current_lines=current_lines,
        estimated_lines=max(current_lines + delta, 0),
        delta=delta,
        occurrences=occurrences,
    )
