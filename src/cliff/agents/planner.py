"""Planner client.

Turns instructions and the execution history into plans, single actions or free-text answers
by prompting the LLM and validating its JSON against the action protocol.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from pydantic import ValidationError

from cliff.agents.actions import BaseAction, Plan, parse_action, parse_plan
from cliff.errors import ProtocolError
from cliff.llm.client import ChatMessage, LLMClient
from cliff.logging import get_logger
from cliff.orchestrator.state import ExecutionHistory
from cliff.prompts import (
    ASK_PROMPT_TEMPLATE,
    ASK_WITH_CONTEXT_TEMPLATE,
    PLAN_PROMPT_TEMPLATE,
    PLANNER_SYSTEM_PROMPT,
)
from cliff.prompts.planner import ACTION_CATALOG
from cliff.tools.context import NO_CONTEXT, combine_context, fetch_context
from cliff.tools.page_fetcher import PageFetcher
from cliff.utils.tags import strip_json_fence

logger = get_logger(__name__)


class Planner(Protocol):
    """What the executor and dispatcher need from a planner."""

    def get_plan(
        self, instruction: str, context_sources: Sequence[str], history: ExecutionHistory
    ) -> Plan: ...

    def get_single_action(self, instruction: str, history: ExecutionHistory) -> BaseAction: ...

    def ask(self, prompt: str, history: ExecutionHistory) -> str: ...


class PlannerClient:
    """LLM-backed :class:`Planner`."""

    def __init__(self, llm: LLMClient, fetcher: PageFetcher, *, temperature: float = 0.0) -> None:
        self._llm = llm
        self._fetcher = fetcher
        self._temperature = temperature

    def get_plan(
        self, instruction: str, context_sources: Sequence[str], history: ExecutionHistory
    ) -> Plan:
        """Request a full plan.

        Raises:
            PlannerError: If the LLM request fails.
            ProtocolError: If the response is not a valid plan.
            ActionError: If a context source cannot be loaded.
        """

        context = self._load_context(context_sources)
        prompt = PLAN_PROMPT_TEMPLATE.format(
            catalog=ACTION_CATALOG,
            history=history.to_prompt_json(),
            instruction=instruction,
            context=context or NO_CONTEXT,
        )
        raw = self._complete(prompt)
        extracted = strip_json_fence(raw)
        logger.debug("Plan response: %s", extracted)
        try:
            plan = parse_plan(extracted)
        except ValidationError as e:
            raise ProtocolError(
                f"Failed to parse extracted plan JSON string: {e}. Extracted string:\n{extracted}"
            ) from e
        logger.info("Plan received: steps=%d", len(plan.steps))
        return plan

    def get_single_action(self, instruction: str, history: ExecutionHistory) -> BaseAction:
        """Request exactly one action.

        Raises:
            PlannerError: If the LLM request fails.
            ProtocolError: If the response is not a valid action.
        """

        raw = self.ask(instruction, history)
        extracted = strip_json_fence(raw)
        try:
            return parse_action(extracted)
        except ValidationError as e:
            raise ProtocolError(
                f"Failed to parse LLM response as an action: {e}. Extracted string:\n{extracted}"
            ) from e

    def ask(self, prompt: str, history: ExecutionHistory) -> str:
        """Free-text answer with the execution history as context."""

        return self._complete(
            ASK_PROMPT_TEMPLATE.format(question=prompt, history=history.to_prompt_json())
        )

    def ask_with_context(self, prompt: str, context_sources: Sequence[str]) -> str:
        """Free-text answer with loaded context sources instead of history."""

        context = self._load_context(context_sources)
        return self._complete(
            ASK_WITH_CONTEXT_TEMPLATE.format(question=prompt, context=context or "")
        )

    def _load_context(self, context_sources: Sequence[str]) -> str | None:
        return combine_context(fetch_context(context_sources, self._fetcher))

    def _complete(self, prompt: str) -> str:
        messages = [
            ChatMessage(role="system", content=PLANNER_SYSTEM_PROMPT),
            ChatMessage(role="user", content=prompt),
        ]
        return self._llm.complete(messages, temperature=self._temperature)
