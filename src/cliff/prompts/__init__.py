from __future__ import annotations

from cliff.prompts.planner import (
    ASK_PROMPT_TEMPLATE,
    ASK_WITH_CONTEXT_TEMPLATE,
    CREATE_FILE_PROMPT,
    OVERWRITE_FILE_PROMPT,
    PLAN_PROMPT_TEMPLATE,
    PLANNER_SYSTEM_PROMPT,
    RECOVERY_INSTRUCTION_TEMPLATE,
    REPLACE_FILE_LINES_PROMPT,
)

__all__ = [
    "ASK_PROMPT_TEMPLATE",
    "ASK_WITH_CONTEXT_TEMPLATE",
    "CREATE_FILE_PROMPT",
    "OVERWRITE_FILE_PROMPT",
    "PLAN_PROMPT_TEMPLATE",
    "PLANNER_SYSTEM_PROMPT",
    "RECOVERY_INSTRUCTION_TEMPLATE",
    "REPLACE_FILE_LINES_PROMPT",
]
