"""Per-step interactive approval."""

from __future__ import annotations

from rich.console import Console

from cliff.logging import get_logger
from cliff.tools.user import InputReader

logger = get_logger(__name__)

CONFIRM_PROMPT = "Execute this step? (y/N/all): "

_YES = {"y", "yes"}
_ALL = {"a", "all"}


class ConfirmationGate:
    """Ask before each step, with a sticky "approve all remaining" answer.

    The gate holds no state of its own: the auto-confirm flag is passed in and handed back so
    nested executions can thread it explicitly.
    """

    def __init__(self, *, console: Console, read_input: InputReader | None = None) -> None:
        self._console = console
        self._read_input = read_input or console.input

    def confirm(self, current_auto_confirm: bool) -> tuple[bool, bool]:
        """Return ``(new_auto_confirm, approved)``.

        ``y``/``yes`` approves this step, ``a``/``all`` approves it and every later one;
        anything else (including end of input) skips the step.
        """

        if current_auto_confirm:
            return True, True

        try:
            choice = self._read_input(CONFIRM_PROMPT).strip().lower()
        except EOFError:
            logger.warning("Standard input closed while confirming; step not approved")
            choice = ""

        if choice in _YES:
            return current_auto_confirm, True
        if choice in _ALL:
            logger.info("Auto-confirm enabled for all remaining steps")
            return True, True
        return current_auto_confirm, False
