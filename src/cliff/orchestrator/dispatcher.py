"""Action dispatcher.

Maps each action variant to its leaf operation or meta-operation. Leaf operations report
failure by raising :class:`~cliff.errors.ActionError`; the dispatcher lets those propagate so the
executor can record them and recover.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from rich.console import Console
from rich.markup import escape

from cliff.agents.actions import (
    AppendToFile,
    AskLlm,
    AskLlmForPlan,
    AskLlmToCreateFile,
    AskLlmToOverwriteFileContents,
    AskLlmToReplaceFileLines,
    AskUser,
    BaseAction,
    CheckPathExists,
    CopyFile,
    CreateFile,
    DeleteFile,
    FindFiles,
    ListDirectory,
    MoveFile,
    OverwriteFileContents,
    Plan,
    ReadFile,
    ReadWebPage,
    ReplaceFileLines,
    RunCommand,
    SearchWeb,
)
from cliff.agents.planner import Planner
from cliff.config import Settings
from cliff.errors import ProtocolError
from cliff.logging import get_logger
from cliff.orchestrator.display import display_plan
from cliff.orchestrator.state import ExecutionHistory
from cliff.prompts import CREATE_FILE_PROMPT, OVERWRITE_FILE_PROMPT, REPLACE_FILE_LINES_PROMPT
from cliff.tools import files
from cliff.tools.page_fetcher import PageFetcher
from cliff.tools.page_parser import PageParser
from cliff.tools.shell import run_command
from cliff.tools.user import InputReader, ask_user
from cliff.tools.web_search import WebSearchProvider, search_web

logger = get_logger(__name__)

# Delegated variant -> (variant the planner must return, instruction template)
_DELEGATED: dict[type[BaseAction], tuple[type[BaseAction], str]] = {
    AskLlmToCreateFile: (CreateFile, CREATE_FILE_PROMPT),
    AskLlmToOverwriteFileContents: (OverwriteFileContents, OVERWRITE_FILE_PROMPT),
    AskLlmToReplaceFileLines: (ReplaceFileLines, REPLACE_FILE_LINES_PROMPT),
}


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of one dispatched action.

    ``auto_confirm`` is the value the caller must continue with; it differs from the value passed
    in only when a nested plan promoted it.
    """

    output: str | None
    auto_confirm: bool


class PlanRunner(Protocol):
    def execute_plan(self, plan: Plan, history: ExecutionHistory, auto_confirm: bool) -> bool: ...


class Dispatcher:
    """Execute single actions on behalf of a :class:`~cliff.orchestrator.executor.PlanExecutor`."""

    def __init__(
        self,
        settings: Settings,
        planner: Planner,
        *,
        console: Console,
        search_provider: WebSearchProvider,
        fetcher: PageFetcher,
        parser: PageParser | None = None,
        read_input: InputReader | None = None,
    ) -> None:
        self._settings = settings
        self._planner = planner
        self._console = console
        self._search_provider = search_provider
        self._fetcher = fetcher
        self._parser = parser or PageParser(max_chars=settings.max_page_chars)
        self._read_input = read_input
        self._runner: PlanRunner | None = None

        self._leaf_ops: dict[type[BaseAction], Callable[[Any], str | None]] = {
            CreateFile: lambda a: files.create_file(a.path, a.content),
            OverwriteFileContents: lambda a: files.overwrite_file(a.path, a.content),
            DeleteFile: lambda a: files.delete_file(a.path),
            AppendToFile: lambda a: files.append_to_file(a.path, a.content),
            MoveFile: lambda a: files.move_file(a.source, a.destination),
            CopyFile: lambda a: files.copy_file(a.source, a.destination),
            RunCommand: self._run_command,
            ReadFile: lambda a: files.read_file(a.path),
            ListDirectory: lambda a: files.list_directory(a.path),
            CheckPathExists: lambda a: files.check_path_exists(a.path),
            FindFiles: lambda a: files.find_files(a.pattern),
            SearchWeb: self._search_web,
            ReadWebPage: self._read_web_page,
            AskUser: self._ask_user,
            ReplaceFileLines: lambda a: files.replace_file_lines(
                a.path, a.from_line_idx, a.until_line_idx, a.replacement_lines
            ),
        }

    def bind(self, runner: PlanRunner) -> None:
        """Attach the executor used for ``ask_llm_for_plan`` sub-plans."""

        self._runner = runner

    def dispatch(
        self, action: BaseAction, history: ExecutionHistory, auto_confirm: bool
    ) -> DispatchOutcome:
        """Execute ``action`` and return its output.

        Raises:
            CliffError: Any failure of the action itself. Nothing is recorded in ``history``
                here except by nested sub-plans.
        """

        logger.info("Dispatching %s (action_idx=%d)", action.title, action.action_idx)

        leaf = self._leaf_ops.get(type(action))
        if leaf is not None:
            return DispatchOutcome(leaf(action), auto_confirm)
        if type(action) in _DELEGATED:
            return self._delegate(action, history, auto_confirm)  # type: ignore[arg-type]
        if isinstance(action, AskLlm):
            return DispatchOutcome(self._ask_llm(action, history), auto_confirm)
        if isinstance(action, AskLlmForPlan):
            return self._run_sub_plan(action, history, auto_confirm)
        raise ProtocolError(f"Unsupported action: {action.title or type(action).__name__}")

    def _run_command(self, action: RunCommand) -> str:
        return run_command(action.command, shell=self._settings.shell, console=self._console)

    def _search_web(self, action: SearchWeb) -> str:
        return search_web(
            self._search_provider, action.query, max_results=self._settings.search_max_results
        )

    def _read_web_page(self, action: ReadWebPage) -> str:
        page = self._fetcher.fetch(action.url)
        return self._parser.parse_page(page).render()

    def _ask_user(self, action: AskUser) -> str:
        return ask_user(action.question, console=self._console, read_input=self._read_input)

    def _delegate(
        self,
        action: AskLlmToCreateFile | AskLlmToOverwriteFileContents | AskLlmToReplaceFileLines,
        history: ExecutionHistory,
        auto_confirm: bool,
    ) -> DispatchOutcome:
        expected, template = _DELEGATED[type(action)]
        instruction = template.format(path=action.path)
        returned = self._planner.get_single_action(instruction, history)
        if type(returned) is not expected:
            raise ProtocolError(
                f"LLM did not return a {expected.title} action, but instead: {returned.title}"
            )
        logger.debug("Delegated %s produced %s", action.title, returned.title)
        return self.dispatch(returned, history, auto_confirm)

    def _ask_llm(self, action: AskLlm, history: ExecutionHistory) -> str:
        answer = self._planner.ask(action.prompt, history)
        self._console.print(escape(answer), style="green")
        return answer

    def _run_sub_plan(
        self, action: AskLlmForPlan, history: ExecutionHistory, auto_confirm: bool
    ) -> DispatchOutcome:
        if self._runner is None:
            raise RuntimeError("Dispatcher is not bound to a plan executor")

        plan = self._planner.get_plan(action.instruction, action.context_sources, history)
        display_plan(plan, self._console)
        self._console.print("--- Starting Sub-Plan Execution ---", style="bold")
        auto_confirm = self._runner.execute_plan(plan, history, auto_confirm)
        self._console.print("--- Sub-Plan Execution Finished ---", style="bold")
        return DispatchOutcome(None, auto_confirm)
