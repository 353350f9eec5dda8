"""Interactive question-and-answer session."""

from __future__ import annotations

from typing import Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from cliff.logging import get_logger
from cliff.tools.user import InputReader

logger = get_logger(__name__)

EXIT_WORD = "exit"


class ContextAsker(Protocol):
    def ask_with_context(self, prompt: str, context_sources: Sequence[str]) -> str: ...


def build_session_prompt(question: str, transcript: Sequence[str]) -> str:
    return f"{question}\nConversation History:\n" + "\n".join(transcript)


def run_session(
    planner: ContextAsker,
    context_sources: Sequence[str],
    *,
    console: Console,
    read_input: InputReader | None = None,
) -> list[str]:
    """Answer questions until the user types ``exit`` or input ends.

    Every previous exchange is sent along with the next question. Returns the transcript.
    """

    reader = read_input or console.input
    transcript: list[str] = []
    console.print("Ask your questions (or type 'exit' to end):")
    while True:
        try:
            question = reader("> ").strip()
        except EOFError:
            break
        if question.lower() == EXIT_WORD:
            break
        if not question:
            continue

        prompt = build_session_prompt(question, transcript)
        answer = planner.ask_with_context(prompt, context_sources)
        console.print(escape(answer) + "\n", style="green")
        transcript.append(f"User: {question}\nLLM: {answer}")
        logger.debug("Session exchange recorded: turns=%d", len(transcript))

    console.print("Ending session.")
    return transcript
