"""Logging setup with per-run context.

Every record carries ``run_id`` and ``step`` attributes taken from context variables, so log lines
from nested sub-plans and recovery plans can be traced back to the ``act`` invocation and the step
that produced them.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Iterator

from rich.console import Console
from rich.logging import RichHandler

_run_id: contextvars.ContextVar[str] = contextvars.ContextVar("cliff_run_id", default="-")
_step: contextvars.ContextVar[str] = contextvars.ContextVar("cliff_step", default="-")

_FORMAT = "run=%(run_id)s step=%(step)s %(name)s: %(message)s"
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


class RunContextFilter(logging.Filter):
    """Copy the bound run id and step label onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_id.get()  # type: ignore[attr-defined]
        record.step = _step.get()  # type: ignore[attr-defined]
        return True


class _CliffHandler(RichHandler):
    """Rich handler writing to stderr; plan output owns stdout."""

    def __init__(self) -> None:
        super().__init__(
            console=Console(stderr=True), rich_tracebacks=True, show_time=True, show_level=True
        )
        self.addFilter(RunContextFilter())
        self.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))


@contextlib.contextmanager
def run_context(*, run_id: str) -> Iterator[None]:
    """Bind ``run_id`` for the duration of the block and reset the step marker."""

    run_token = _run_id.set(run_id)
    step_token = _step.set("-")
    try:
        yield
    finally:
        _step.reset(step_token)
        _run_id.reset(run_token)


@contextlib.contextmanager
def step_context(step: str) -> Iterator[None]:
    """Bind a step label for the block.

    Inside an enclosing step (a sub-plan or recovery plan) the label is appended to the outer one
    with ``>``. The outer label is restored on exit.
    """

    outer = _step.get()
    token = _step.set(step if outer == "-" else f"{outer}>{step}")
    try:
        yield
    finally:
        _step.reset(token)


def configure_logging(level: str = "WARNING") -> None:
    """Install the rich stderr handler on the root logger.

    Calling this again only changes the level.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(isinstance(h, _CliffHandler) for h in root.handlers):
        root.addHandler(_CliffHandler())

    # request-level INFO noise from the HTTP stack
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
