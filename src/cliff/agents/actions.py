"""Agent action types.

Every action the planner can emit is a pydantic model tagged by its ``action`` field. On the
wire an action is a flat JSON object, e.g.::

    {"action": "run_command", "action_idx": 1, "command": "ls -la"}

A plan is ``{"thought": str | null, "steps": [action, ...]}``. Step order is execution order;
``action_idx`` is a label for humans and the planner, not a position.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

_SNIPPET_CHARS = 50


def _snippet(text: str) -> str:
    if len(text) > _SNIPPET_CHARS:
        return f"{text[:_SNIPPET_CHARS]}..."
    return text


class BaseAction(BaseModel):
    """Fields shared by every action."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Short human label used in messages, e.g. "CreateFile".
    title: ClassVar[str] = ""

    action_idx: int = Field(default=0, ge=0)

    def describe(self) -> str:
        """One-line description used when displaying a plan."""

        return self.title

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()


# Direct effects


class CreateFile(BaseAction):
    """Create a file; ``content`` is written literally."""

    title: ClassVar[str] = "CreateFile"
    action: Literal["create_file"] = "create_file"
    path: str
    content: str

    def describe(self) -> str:
        return f"Create file '{self.path}' with content:\n{self.content}"


class OverwriteFileContents(BaseAction):
    """Replace a file's contents; ``content`` is written literally."""

    title: ClassVar[str] = "OverwriteFileContents"
    action: Literal["overwrite_file_contents"] = "overwrite_file_contents"
    path: str
    content: str

    def describe(self) -> str:
        return f"Edit file '{self.path}' with content:\n{self.content}"


class DeleteFile(BaseAction):
    title: ClassVar[str] = "DeleteFile"
    action: Literal["delete_file"] = "delete_file"
    path: str

    def describe(self) -> str:
        return f"Delete file: '{self.path}'"


class AppendToFile(BaseAction):
    title: ClassVar[str] = "AppendToFile"
    action: Literal["append_to_file"] = "append_to_file"
    path: str
    content: str

    def describe(self) -> str:
        return f"Append to file '{self.path}' with content: '{_snippet(self.content)}'"


class MoveFile(BaseAction):
    title: ClassVar[str] = "MoveFile"
    action: Literal["move_file"] = "move_file"
    source: str
    destination: str

    def describe(self) -> str:
        return f"Move file from '{self.source}' to '{self.destination}'"


class CopyFile(BaseAction):
    title: ClassVar[str] = "CopyFile"
    action: Literal["copy_file"] = "copy_file"
    source: str
    destination: str

    def describe(self) -> str:
        return f"Copy file from '{self.source}' to '{self.destination}'"


class RunCommand(BaseAction):
    title: ClassVar[str] = "RunCommand"
    action: Literal["run_command"] = "run_command"
    command: str

    def describe(self) -> str:
        return f"Run command: `{self.command}`"


class ReadFile(BaseAction):
    title: ClassVar[str] = "ReadFile"
    action: Literal["read_file"] = "read_file"
    path: str

    def describe(self) -> str:
        return f"Read file: '{self.path}'"


class ListDirectory(BaseAction):
    title: ClassVar[str] = "ListDirectory"
    action: Literal["list_directory"] = "list_directory"
    path: str

    def describe(self) -> str:
        return f"List directory '{self.path}'"


class CheckPathExists(BaseAction):
    title: ClassVar[str] = "CheckPathExists"
    action: Literal["check_path_exists"] = "check_path_exists"
    path: str

    def describe(self) -> str:
        return f"Check if path exists '{self.path}'"


class FindFiles(BaseAction):
    title: ClassVar[str] = "FindFiles"
    action: Literal["find_files"] = "find_files"
    pattern: str

    def describe(self) -> str:
        return f"Find files matching pattern: '{self.pattern}'"


class SearchWeb(BaseAction):
    title: ClassVar[str] = "SearchWeb"
    action: Literal["search_web"] = "search_web"
    query: str

    def describe(self) -> str:
        return f"Search web for: '{self.query}'"


class ReadWebPage(BaseAction):
    title: ClassVar[str] = "ReadWebPage"
    action: Literal["read_web_page"] = "read_web_page"
    url: str

    def describe(self) -> str:
        return f"Read web page: '{self.url}'"


class AskUser(BaseAction):
    title: ClassVar[str] = "AskUser"
    action: Literal["ask_user"] = "ask_user"
    question: str

    def describe(self) -> str:
        return f"Ask user: '{self.question}'"


class ReplaceFileLines(BaseAction):
    """Replace lines ``from_line_idx..until_line_idx`` (inclusive, 0-based)."""

    title: ClassVar[str] = "ReplaceFileLines"
    action: Literal["replace_file_lines"] = "replace_file_lines"
    path: str
    from_line_idx: int = Field(ge=0)
    until_line_idx: int = Field(ge=0)
    replacement_lines: str

    def describe(self) -> str:
        return (
            f"Replace lines {self.from_line_idx} to {self.until_line_idx} in file "
            f"'{self.path}' with content: '{_snippet(self.replacement_lines)}'"
        )


# Planner-delegated single actions


class AskLlmToCreateFile(BaseAction):
    title: ClassVar[str] = "AskLlmToCreateFile"
    action: Literal["ask_llm_to_create_file"] = "ask_llm_to_create_file"
    path: str

    def describe(self) -> str:
        return f"Ask LLM to generate CreateFile action for path: '{self.path}'"


class AskLlmToOverwriteFileContents(BaseAction):
    title: ClassVar[str] = "AskLlmToOverwriteFileContents"
    action: Literal["ask_llm_to_overwrite_file_contents"] = "ask_llm_to_overwrite_file_contents"
    path: str

    def describe(self) -> str:
        return f"Ask LLM to generate OverwriteFileContents action for path: '{self.path}'"


class AskLlmToReplaceFileLines(BaseAction):
    title: ClassVar[str] = "AskLlmToReplaceFileLines"
    action: Literal["ask_llm_to_replace_file_lines"] = "ask_llm_to_replace_file_lines"
    path: str

    def describe(self) -> str:
        return f"Ask LLM to generate ReplaceFileLines action for path: '{self.path}'"


# Open planner queries


class AskLlm(BaseAction):
    """Free-text answer from the planner, with the execution history as context."""

    title: ClassVar[str] = "AskLlm"
    action: Literal["ask_llm"] = "ask_llm"
    prompt: str

    def describe(self) -> str:
        return f"Ask LLM with prompt: '{self.prompt}'"


class AskLlmForPlan(BaseAction):
    """Request a sub-plan and execute it in place."""

    title: ClassVar[str] = "AskLlmForPlan"
    action: Literal["ask_llm_for_plan"] = "ask_llm_for_plan"
    instruction: str
    context_sources: list[str] = Field(default_factory=list)

    def describe(self) -> str:
        return (
            "Ask LLM for sub-plan:\n"
            f"  Instruction: {self.instruction}\n"
            f"  Context Sources: {self.context_sources}"
        )


Action = Annotated[
    Union[
        CreateFile,
        OverwriteFileContents,
        DeleteFile,
        AppendToFile,
        MoveFile,
        CopyFile,
        RunCommand,
        ReadFile,
        ListDirectory,
        CheckPathExists,
        FindFiles,
        SearchWeb,
        ReadWebPage,
        AskUser,
        ReplaceFileLines,
        AskLlmToCreateFile,
        AskLlmToOverwriteFileContents,
        AskLlmToReplaceFileLines,
        AskLlm,
        AskLlmForPlan,
    ],
    Field(discriminator="action"),
]

ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)


class Plan(BaseModel):
    """An ordered, immutable list of actions plus the planner's rationale."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    thought: str | None = None
    steps: tuple[Action, ...] = ()


def parse_action(raw: str) -> BaseAction:
    """Parse one action from its JSON wire form.

    Raises:
        pydantic.ValidationError: If the JSON is invalid or matches no action variant.
    """

    return ACTION_ADAPTER.validate_json(raw)


def parse_plan(raw: str) -> Plan:
    """Parse a plan from its JSON wire form.

    Raises:
        pydantic.ValidationError: If the JSON is invalid or does not describe a plan.
    """

    return Plan.model_validate_json(raw)
