"""CLI entrypoints for CLIFF."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

import typer
from rich.console import Console
from rich.markup import escape

from cliff.agents.planner import PlannerClient
from cliff.config import Settings, load_settings, resolve_env_file
from cliff.errors import CliffError, RecoveryError
from cliff.llm.client import LLMClient
from cliff.logging import configure_logging, get_logger, run_context
from cliff.orchestrator.confirmation import ConfirmationGate
from cliff.orchestrator.dispatcher import Dispatcher
from cliff.orchestrator.display import display_plan
from cliff.orchestrator.executor import PlanExecutor
from cliff.orchestrator.state import ExecutionHistory
from cliff.session import run_session
from cliff.tools.page_fetcher import PageFetcher
from cliff.tools.page_parser import PageParser
from cliff.tools.web_search import get_search_provider

app = typer.Typer(
    add_completion=False, help="CLIFF: Command Line Interface Friendly & Facilitator"
)
logger = get_logger(__name__)


@dataclass
class CliOptions:
    model: str | None = None
    context: list[str] = field(default_factory=list)


def split_sources(values: list[str]) -> list[str]:
    """Flatten repeated and comma-separated ``--context`` values."""

    sources: list[str] = []
    for value in values:
        sources.extend(part.strip() for part in value.split(",") if part.strip())
    return sources


def _settings(options: CliOptions) -> Settings:
    settings = load_settings()
    if options.model:
        settings.openai_model = options.model
    configure_logging(settings.log_level)
    return settings


def _options(ctx: typer.Context) -> CliOptions:
    return ctx.obj if isinstance(ctx.obj, CliOptions) else CliOptions()


def _fail(console: Console, message: str) -> typer.Exit:
    console.print(f"Error: {escape(message)}", style="bold red")
    return typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    model: str | None = typer.Option(
        None, "--model", "-m", help="Model to use (overrides CLIFF_OPENAI_MODEL)"
    ),
    context: list[str] | None = typer.Option(
        None,
        "--context",
        "-c",
        help="Files or URLs to provide as context (repeatable or comma-separated)",
    ),
) -> None:
    ctx.obj = CliOptions(model=model, context=split_sources(context or []))


@app.command()
def act(
    ctx: typer.Context,
    instruction: str = typer.Argument(..., help="The instruction or goal for the LLM"),
    auto_confirm: bool = typer.Option(
        False, "--auto-confirm", help="Execute every step without asking for confirmation"
    ),
) -> None:
    """Ask the LLM for a plan and execute it."""

    options = _options(ctx)
    settings = _settings(options)
    console = Console()
    fetcher = PageFetcher(settings)
    try:
        planner = PlannerClient(
            LLMClient(settings), fetcher, temperature=settings.planner_temperature
        )
        dispatcher = Dispatcher(
            settings,
            planner,
            console=console,
            search_provider=get_search_provider(settings),
            fetcher=fetcher,
            parser=PageParser(max_chars=settings.max_page_chars),
        )
        gate = ConfirmationGate(console=console)
        executor = PlanExecutor(planner, dispatcher, gate, console=console)

        history = ExecutionHistory()
        with run_context(run_id=uuid.uuid4().hex[:12]):
            logger.info("CLI act requested: context_sources=%d", len(options.context))
            plan = planner.get_plan(instruction, options.context, history)
            display_plan(plan, console)
            executor.execute_plan(plan, history, auto_confirm)
    except ValueError as e:
        raise _fail(console, str(e)) from e
    except RecoveryError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        raise _fail(console, f"{e}{cause}") from e
    except CliffError as e:
        raise _fail(console, str(e)) from e
    finally:
        fetcher.close()


@app.command()
def ask(
    ctx: typer.Context,
    prompt: str = typer.Argument(..., help="The prompt/question to ask the LLM"),
) -> None:
    """Ask a question to the configured LLM."""

    options = _options(ctx)
    settings = _settings(options)
    console = Console()
    fetcher = PageFetcher(settings)
    try:
        planner = PlannerClient(
            LLMClient(settings), fetcher, temperature=settings.planner_temperature
        )
        answer = planner.ask_with_context(prompt, options.context)
    except (ValueError, CliffError) as e:
        raise _fail(console, str(e)) from e
    finally:
        fetcher.close()
    console.print(escape(answer) + "\n", style="green")


@app.command()
def session(ctx: typer.Context) -> None:
    """Start an interactive question session."""

    options = _options(ctx)
    settings = _settings(options)
    console = Console()
    fetcher = PageFetcher(settings)
    try:
        planner = PlannerClient(
            LLMClient(settings), fetcher, temperature=settings.planner_temperature
        )
        run_session(planner, options.context, console=console)
    except (ValueError, CliffError) as e:
        raise _fail(console, str(e)) from e
    finally:
        fetcher.close()


@app.command()
def config(ctx: typer.Context) -> None:
    """Show the effective configuration (API keys masked)."""

    settings = _settings(_options(ctx))
    env_file = resolve_env_file()
    typer.echo(f"Env file: {env_file if env_file is not None else 'None'}")
    for key, value in settings.masked().items():
        typer.echo(f"  {key} = {value}")


if __name__ == "__main__":
    app()
