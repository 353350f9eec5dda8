"""OpenAI-compatible LLM client.

This wraps the `openai` Python SDK and provides a minimal interface for chat completions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from openai import OpenAI, OpenAIError

from cliff.config import Settings
from cliff.errors import PlannerError
from cliff.logging import get_logger

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A chat message."""

    role: Role
    content: str


class LLMClient:
    """LLM client using OpenAI-compatible Chat Completions API."""

    def __init__(self, settings: Settings, *, client: OpenAI | None = None) -> None:
        self._settings = settings
        if client is None:
            if not settings.openai_api_key:
                raise ValueError(
                    "Missing CLIFF_OPENAI_API_KEY. "
                    "Set it in environment variables or a .env file."
                )
            client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        self._client = client

    @property
    def model(self) -> str:
        return self._settings.openai_model

    def complete(self, messages: Sequence[ChatMessage], *, temperature: float = 0.2) -> str:
        """Generate a completion.

        Args:
            messages: Chat messages.
            temperature: Sampling temperature.

        Returns:
            Assistant message content.

        Raises:
            PlannerError: If the request fails or the response carries no content.
        """

        payload: list[dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]
        logger.debug(
            "LLM request: model=%s messages=%d chars=%d",
            self.model,
            len(payload),
            sum(len(m.content) for m in messages),
        )
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=temperature,
                timeout=self._settings.openai_timeout_s,
            )
        except OpenAIError as e:
            raise PlannerError(f"LLM API request failed for model '{self.model}': {e}") from e

        if not resp.choices:
            raise PlannerError(f"LLM API returned no choices for model '{self.model}'")
        choice = resp.choices[0]
        if not choice.message or choice.message.content is None:
            raise PlannerError(f"LLM API returned an empty message for model '{self.model}'")
        return choice.message.content
