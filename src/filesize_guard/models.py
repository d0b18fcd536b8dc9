"""Pydantic models and enums for guard requests and verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

CREATE_TOOLS = frozenset({"Write"})
MODIFY_TOOLS = frozenset({"Edit"})


class OperationKind(StrEnum):
    CREATE = "create"
    MODIFY = "modify"
    OTHER = "other"


class Decision(StrEnum):
    ALLOW = "allow"
    WARN = "warn"
    BLOCK = "block"


class Status(StrEnum):
    OK = "ok"
    WARN = "warn"
    BLOCK = "block"


_STATUS_RANK = {Status.OK: 0, Status.WARN: 1, Status.BLOCK: 2}


def status_rank(status: Status) -> int:
    """Ordering Ok < Warn < Block as an integer."""
    return _STATUS_RANK[status]


class OperationRequest(BaseModel):
    """One tool call as seen by the guard. Built from untrusted hook input."""

    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    tool_name: str = ""
    target_path: str = ""
    content: str = ""
    old_string: str = ""
    new_string: str = ""
    replace_all: bool = False

    @field_validator(
        "tool_name", "target_path", "content", "old_string", "new_string", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("replace_all", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return value is True

    @classmethod
    def from_hook_input(cls, payload: dict[str, Any]) -> OperationRequest:
        tool_name = payload.get("tool_name", "")
        if not isinstance(tool_name, str):
            tool_name = ""
        tool_input = payload.get("tool_input") or {}
        if not isinstance(tool_input, dict):
            tool_input = {}

        if tool_name in CREATE_TOOLS:
            kind = OperationKind.CREATE
        elif tool_name in MODIFY_TOOLS:
            kind = OperationKind.MODIFY
        else:
            return cls(kind=OperationKind.OTHER, tool_name=tool_name)

        return cls(
            kind=kind,
            tool_name=tool_name,
            target_path=tool_input.get("file_path"),
            content=tool_input.get("content"),
            old_string=tool_input.get("old_string"),
            new_string=tool_input.get("new_string"),
            replace_all=tool_input.get("replace_all", False),
        )


@dataclass(frozen=True)
class FileSnapshot:
    line_count: int = 0
    exists: bool = False
    is_binary: bool = False
    content: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class EditEstimate:
    current_lines: int
    estimated_lines: int
    delta: int
    occurrences: int


@dataclass(frozen=True)
class FileOverride:
    disabled: bool = False
    max_lines: int | None = None


class Verdict(BaseModel):
    decision: Decision
    reason: str = ""
    file_path: str = ""
    current_lines: int = 0
    estimated_lines: int = 0
    threshold: int = 0

    @property
    def exit_code(self) -> int:
        return 2 if self.decision == Decision.BLOCK else 0

    @classmethod
    def allow(cls, reason: str, file_path: str = "") -> Verdict:
        return cls(decision=Decision.ALLOW, reason=reason, file_path=file_path)
