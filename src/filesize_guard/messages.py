"""Terminal messages for warn/block verdicts, with micro-extract suggestions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

_YELLOW = "\x1b[33m"
_RED = "\x1b[31m"
_CYAN = "\x1b[36m"
_DIM = "\x1b[2m"
_RESET = "\x1b[0m"

_JS_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx"})


@dataclass
class Suggestion:
    reason: str
    steps: list[str] = field(default_factory=list)
    new_files: list[str] = field(default_factory=list)
    example: str = ""


def extracted_file_name(file_path: str, suffix: str, separator: str = "-") -> str:
    path = Path(file_path)
    return str(path.with_name(f"{path.stem}{separator}{suffix}{path.suffix}"))


def generate_suggestion(file_path: str, current_lines: int, estimated_lines: int) -> Suggestion:
    """Pick micro-extract steps and candidate file names for the file's language."""
    path = Path(file_path)
    ext = path.suffix.lower()
    delta = estimated_lines - current_lines
    suggestion = Suggestion(reason=f"File will have {estimated_lines} lines (adding {delta} lines)")

    if ext in _JS_EXTENSIONS:
        suggestion.steps = [
            "Extract the NEW function/component to a separate file",
            "Keep existing code unchanged in original file",
            "Add import statement to original file",
            "Export from new file",
        ]
        suggestion.new_files = [
            extracted_file_name(file_path, s) for s in ("utils", "types", "helpers")
        ]
        suggestion.example = (
            f"// Instead of adding to {path.name}:\n"
            f"// export function newFunction() {{ ... }}\n\n"
            f"// Create {path.stem}-utils{path.suffix}:\n"
            f"export function newFunction() {{ ... }}\n\n"
            f"// Then import in {path.name}:\n"
            f"import {{ newFunction }} from './{path.stem}-utils';\n"
        )
    elif ext == ".py":
        suggestion.steps = [
            "Extract the NEW function/class to a separate module",
            "Keep existing code unchanged in original file",
            "Add import statement to original file",
        ]
        suggestion.new_files = [
            extracted_file_name(file_path, s, "_") for s in ("utils", "helpers")
        ]
        suggestion.example = (
            f"# Instead of adding to {path.name}:\n"
            f"# def new_function(): ...\n\n"
            f"# Create {path.stem}_utils.py:\n"
            f"def new_function():\n"
            f"    ...\n\n"
            f"# Then import in {path.name}:\n"
            f"from .{path.stem}_utils import new_function\n"
        )
    elif ext == ".rs":
        suggestion.steps = [
            "Extract the NEW function/struct to a separate module",
            "Add mod declaration to parent module",
            "Use pub use for re-exports if needed",
        ]
        suggestion.new_files = [extracted_file_name(file_path, s, "_") for s in ("utils", "types")]
    else:
        suggestion.steps = [
            "Extract new code to a separate file",
            "Import/include in original file",
            "Keep original file unchanged",
        ]

    return suggestion


def _steps_block(suggestion: Suggestion) -> str:
    return "\n".join(f"  {i}. {step}" for i, step in enumerate(suggestion.steps, 1))


def _files_block(suggestion: Suggestion) -> str:
    if not suggestion.new_files:
        return ""
    names = "\n".join(f"  - {Path(f).name}" for f in suggestion.new_files)
    return f"\n{_CYAN}Suggested new files:{_RESET}\n{names}\n"


def format_warning_message(
    file_path: str, current_lines: int, estimated_lines: int, threshold: int
) -> str:
    suggestion = generate_suggestion(file_path, current_lines, estimated_lines)
    return (
        f"\n{_YELLOW}FILE SIZE WARNING{_RESET}\n\n"
        f"{_CYAN}File:{_RESET}       {file_path}\n"
        f"{_CYAN}Current:{_RESET}    {current_lines} lines\n"
        f"{_CYAN}After edit:{_RESET} {estimated_lines} lines\n"
        f"{_CYAN}Threshold:{_RESET}  {threshold} lines\n\n"
        f"{_YELLOW}Recommendation: Use MICRO-EXTRACT pattern{_RESET}\n"
        f"{_steps_block(suggestion)}\n"
        f"{_files_block(suggestion)}\n"
        f"{_DIM}Operation will continue - extract new code to a separate file.{_RESET}\n"
    )


def format_block_message(
    file_path: str, current_lines: int, estimated_lines: int, threshold: int
) -> str:
    suggestion = generate_suggestion(file_path, current_lines, estimated_lines)
    example = f"\n{_CYAN}Example:{_RESET}\n{suggestion.example}" if suggestion.example else ""
    return (
        f"\n{_RED}FILE SIZE LIMIT EXCEEDED{_RESET}\n\n"
        f"{_CYAN}File:{_RESET}       {file_path}\n"
        f"{_CYAN}Current:{_RESET}    {current_lines} lines\n"
        f"{_CYAN}After edit:{_RESET} {estimated_lines} lines\n"
        f"{_CYAN}Limit:{_RESET}      {threshold} lines\n\n"
        f"{_RED}Operation BLOCKED - File too large{_RESET}\n\n"
        f"{_YELLOW}Required action: MICRO-EXTRACT before adding code{_RESET}\n"
        f"{_steps_block(suggestion)}\n"
        f"{_files_block(suggestion)}"
        f"{example}\n"
        f"{_DIM}Extract new code to a separate file, then retry.{_RESET}\n"
    )
