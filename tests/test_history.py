"""Tests for the execution history."""

from __future__ import annotations

import json

from cliff.agents.actions import ReadFile, RunCommand
from cliff.orchestrator.state import ERROR_PREFIX, ExecutionHistory


def test_append_preserves_order() -> None:
    history = ExecutionHistory()
    first = RunCommand(action_idx=1, command="echo a")
    second = ReadFile(action_idx=2, path="a.txt")
    history.append(first, "a")
    history.append(second, None)

    assert len(history) == 2
    assert [e.action for e in history] == [first, second]
    assert history.entries[-1].output is None


def test_record_failure_prefixes_error() -> None:
    history = ExecutionHistory()
    action = RunCommand(action_idx=1, command="false")
    history.record_failure(action, "Command failed with status: 1")
    assert history.entries[-1].output == f"{ERROR_PREFIX}Command failed with status: 1"


def test_entries_is_a_snapshot() -> None:
    """Mutating a snapshot does not touch the history."""

    history = ExecutionHistory()
    history.append(RunCommand(action_idx=1, command="true"), "")
    snapshot = history.entries
    history.append(RunCommand(action_idx=2, command="true"), "")
    assert len(snapshot) == 1
    assert len(history) == 2


def test_prompt_json_pairs_actions_with_outputs() -> None:
    history = ExecutionHistory()
    history.append(RunCommand(action_idx=1, command="ls"), "a.txt")
    decoded = json.loads(history.to_prompt_json())
    assert decoded == [
        [{"action": "run_command", "action_idx": 1, "command": "ls"}, "a.txt"],
    ]


def test_empty_history_renders_empty_list() -> None:
    assert json.loads(ExecutionHistory().to_prompt_json()) == []
