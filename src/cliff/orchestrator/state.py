"""Execution history shared by every nested plan of a run."""

from __future__ import annotations

import json
from typing import Iterator, NamedTuple

from cliff.agents.actions import BaseAction

ERROR_PREFIX = "ERROR: "


class HistoryEntry(NamedTuple):
    action: BaseAction
    output: str | None


class ExecutionHistory:
    """Append-only log of executed actions and their outputs.

    One instance lives for a whole top-level run and is passed by reference into sub-plans and
    recovery plans. Entries are never removed or reordered; it is the planner's only memory of
    what already happened.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def append(self, action: BaseAction, output: str | None) -> None:
        self._entries.append(HistoryEntry(action, output))

    def record_failure(self, action: BaseAction, message: str) -> None:
        self.append(action, f"{ERROR_PREFIX}{message}")

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    def to_prompt_json(self) -> str:
        """Render as a JSON list of ``[action, output]`` pairs, oldest first."""

        return json.dumps(
            [[entry.action.to_wire(), entry.output] for entry in self._entries],
            indent=2,
            ensure_ascii=False,
        )
