"""Plan executor and recovery controller.

Walks a plan step by step: confirm, dispatch, record. When a step fails the failure is recorded
in the history and the planner is asked for a replacement plan, which supersedes every step that
had not run yet.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from cliff.agents.actions import BaseAction, Plan
from cliff.agents.planner import Planner
from cliff.errors import CliffError, RecoveryError
from cliff.logging import get_logger, step_context
from cliff.orchestrator.confirmation import ConfirmationGate
from cliff.orchestrator.dispatcher import Dispatcher
from cliff.orchestrator.display import display_plan
from cliff.orchestrator.state import ExecutionHistory
from cliff.prompts import RECOVERY_INSTRUCTION_TEMPLATE

logger = get_logger(__name__)


class PlanExecutor:
    """Execute plans against a shared :class:`ExecutionHistory`."""

    def __init__(
        self,
        planner: Planner,
        dispatcher: Dispatcher,
        gate: ConfirmationGate,
        *,
        console: Console,
    ) -> None:
        self._planner = planner
        self._dispatcher = dispatcher
        self._gate = gate
        self._console = console
        dispatcher.bind(self)

    def execute_plan(self, plan: Plan, history: ExecutionHistory, auto_confirm: bool) -> bool:
        """Run every step of ``plan`` and return the final auto-confirm value.

        Sub-plans and recovery plans run as nested calls with the same ``history``. A promotion
        to auto-confirm inside any of them is returned to the caller.

        Raises:
            RecoveryError: If a step failed and no recovery plan could be obtained.
        """

        self._console.print("\n--- Executing Plan ---", style="bold")
        if not plan.steps:
            self._console.print("No actions to execute.")

        total = len(plan.steps)
        for position, action in enumerate(plan.steps, start=1):
            self._console.print(
                f"\n--- Step {position}/{total}: {action.describe()} ---",
                style="bold cyan",
                markup=False,
                highlight=False,
            )
            with step_context(f"{position}/{total}:{action.title}"):
                auto_confirm, approved = self._gate.confirm(auto_confirm)
                if not approved:
                    self._console.print(f"Skipping step {position}.", style="yellow")
                    logger.info("Step skipped: %s", action.title)
                    continue

                try:
                    outcome = self._dispatcher.dispatch(action, history, auto_confirm)
                except CliffError as e:
                    return self._recover(action, e, history, auto_confirm)

                auto_confirm = outcome.auto_confirm
                history.append(action, outcome.output)
                logger.info("Step finished: %s", action.title)

        self._console.print("\n--- Plan Execution Finished ---", style="bold")
        return auto_confirm

    def _recover(
        self, action: BaseAction, error: CliffError, history: ExecutionHistory, auto_confirm: bool
    ) -> bool:
        message = str(error)
        self._console.print(
            f"Error executing action {escape(action.title)}: {escape(message)}", style="bold red"
        )
        logger.warning("Step failed: action=%s error=%s", action.title, message)
        history.record_failure(action, message)

        instruction = RECOVERY_INSTRUCTION_TEMPLATE.format(action=action.to_json(), error=message)
        self._console.print("Attempting to recover...", style="yellow")
        try:
            recovery_plan = self._planner.get_plan(instruction, [], history)
        except CliffError as e:
            logger.error("Recovery plan request failed: %s", e)
            raise RecoveryError("Failed to get recovery plan from LLM after action failure") from e

        display_plan(recovery_plan, self._console)
        return self.execute_plan(recovery_plan, history, auto_confirm)
