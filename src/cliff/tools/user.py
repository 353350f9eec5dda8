"""Interactive console input."""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.markup import escape

from cliff.errors import ActionError

InputReader = Callable[[str], str]


def ask_user(question: str, *, console: Console, read_input: InputReader | None = None) -> str:
    """Show ``question`` and return the user's trimmed one-line answer."""

    console.print("Action: Ask user")
    reader = read_input or console.input
    try:
        answer = reader(f"[green]{escape(question)}[/green] ")
    except EOFError as e:
        raise ActionError(f"No answer to '{question}': standard input is closed") from e
    return answer.strip()
