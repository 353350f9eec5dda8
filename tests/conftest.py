"""Shared fakes for executor and dispatcher tests."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Sequence

import pytest
from rich.console import Console

from cliff.agents.actions import BaseAction, Plan
from cliff.config import Settings
from cliff.errors import PlannerError
from cliff.models.search import SearchResult
from cliff.orchestrator.state import ExecutionHistory


class ScriptedInput:
    """Input reader that replays fixed answers and records the prompts it was shown."""

    def __init__(self, answers: Sequence[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)


@dataclass
class FakePlanner:
    """Planner returning queued responses.

    A queued exception is raised instead of returned. Calls are recorded with a snapshot of the
    history length at call time.
    """

    plans: list[Plan | Exception] = field(default_factory=list)
    actions: list[BaseAction | Exception] = field(default_factory=list)
    answers: list[str] = field(default_factory=list)
    plan_calls: list[tuple[str, list[str], int]] = field(default_factory=list)
    action_calls: list[str] = field(default_factory=list)
    ask_calls: list[tuple[str, int]] = field(default_factory=list)

    def get_plan(
        self, instruction: str, context_sources: Sequence[str], history: ExecutionHistory
    ) -> Plan:
        self.plan_calls.append((instruction, list(context_sources), len(history)))
        if not self.plans:
            raise PlannerError("no plan queued")
        return _unwrap(self.plans.pop(0))

    def get_single_action(self, instruction: str, history: ExecutionHistory) -> BaseAction:
        self.action_calls.append(instruction)
        if not self.actions:
            raise PlannerError("no action queued")
        return _unwrap(self.actions.pop(0))

    def ask(self, prompt: str, history: ExecutionHistory) -> str:
        self.ask_calls.append((prompt, len(history)))
        return self.answers.pop(0)

    def ask_with_context(self, prompt: str, context_sources: Sequence[str]) -> str:
        self.ask_calls.append((prompt, len(context_sources)))
        return self.answers.pop(0)


def _unwrap(item):
    if isinstance(item, Exception):
        raise item
    return item


class FakeSearchProvider:
    def __init__(self, results: list[SearchResult] | None = None) -> None:
        self.results = results or []
        self.queries: list[str] = []

    def search(self, query: str, *, max_results: int) -> list[SearchResult]:
        self.queries.append(query)
        return self.results[:max_results]


class UnusedFetcher:
    def fetch(self, url: str):
        raise AssertionError(f"unexpected fetch of {url}")

    def close(self) -> None:
        pass


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for key in ("CLIFF_OPENAI_API_KEY", "CLIFF_SEARCH_PROVIDER", "CLIFF_ENV_FILE"):
        monkeypatch.delenv(key, raising=False)
    return Settings(shell="/bin/sh")


def console_text(console: Console) -> str:
    return console.file.getvalue()  # type: ignore[attr-defined]
