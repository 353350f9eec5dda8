"""Console rendering of plans."""

from __future__ import annotations

from rich.console import Console

from cliff.agents.actions import Plan


def format_plan(plan: Plan) -> list[str]:
    """Lines shown to the user before a plan runs."""

    lines = ["", "--- Proposed Plan ---"]
    if plan.thought:
        lines.append(f"Thought: {plan.thought}")
    if not plan.steps:
        lines.append("No actions planned.")
        return lines
    for action in plan.steps:
        lines.append(f"{action.action_idx}. {action.describe()}")
    lines.append("--------------------")
    return lines


def display_plan(plan: Plan, console: Console) -> None:
    for line in format_plan(plan):
        console.print(line, markup=False, highlight=False)
