"""Tests for guard request/verdict models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from filesize_guard.models import (
    Decision,
    OperationKind,
    OperationRequest,
    Status,
    Verdict,
    status_rank,
)


class TestOperationRequest:
    def test_write_is_create(self):
        req = OperationRequest.from_hook_input(
            {"tool_name": "Write", "tool_input": {"file_path": "a.py", "content": "x"}}
        )
        assert req.kind == OperationKind.CREATE
        assert req.target_path == "a.py"
        assert req.content == "x"

    def test_edit_is_modify(self):
        req = OperationRequest.from_hook_input(
            {
                "tool_name": "Edit",
                "tool_input": {
                    "file_path": "a.py",
                    "old_string": "a",
                    "new_string": "b",
                    "replace_all": True,
                },
            }
        )
        assert req.kind == OperationKind.MODIFY
        assert (req.old_string, req.new_string, req.replace_all) == ("a", "b", True)

    def test_replace_all_defaults_false(self):
        req = OperationRequest.from_hook_input(
            {"tool_name": "Edit", "tool_input": {"file_path": "a.py"}}
        )
        assert req.replace_all is False

    def test_truthy_non_bool_replace_all_ignored(self):
        req = OperationRequest.from_hook_input(
            {"tool_name": "Edit", "tool_input": {"file_path": "a.py", "replace_all": "yes"}}
        )
        assert req.replace_all is False

    @pytest.mark.parametrize("tool", ["Read", "Bash", "NotebookEdit", "", None])
    def test_other_tools(self, tool):
        req = OperationRequest.from_hook_input({"tool_name": tool, "tool_input": {}})
        assert req.kind == OperationKind.OTHER

    def test_non_string_fields_coerced(self):
        req = OperationRequest.from_hook_input(
            {"tool_name": "Write", "tool_input": {"file_path": 7, "content": ["a"]}}
        )
        assert req.target_path == ""
        assert req.content == ""

    def test_missing_tool_input(self):
        req = OperationRequest.from_hook_input({"tool_name": "Write"})
        assert req.kind == OperationKind.CREATE
        assert req.target_path == ""

    def test_frozen(self):
        req = OperationRequest(kind=OperationKind.CREATE, target_path="a.py")
        with pytest.raises(ValidationError):
            req.target_path = "b.py"


class TestVerdict:
    def test_exit_codes(self):
        assert Verdict(decision=Decision.ALLOW).exit_code == 0
        assert Verdict(decision=Decision.WARN).exit_code == 0
        assert Verdict(decision=Decision.BLOCK).exit_code == 2

    def test_allow_helper(self):
        verdict = Verdict.allow("excluded", "/repo/a.json")
        assert verdict.decision == Decision.ALLOW
        assert verdict.reason == "excluded"
        assert verdict.file_path == "/repo/a.json"


class TestStatusRank:
    def test_order(self):
        assert status_rank(Status.OK) < status_rank(Status.WARN) < status_rank(Status.BLOCK)


class TestUntrustedToolName:
    def test_unhashable_tool_name(self):
        req = OperationRequest.from_hook_input({"tool_name": ["Write"], "tool_input": {}})
        assert req.kind == OperationKind.OTHER
        assert req.tool_name == ""
