"""Shell command execution."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass

from rich.console import Console

from cliff.errors import ActionError
from cliff.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of one shell command."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_shell(command: str, *, shell: str) -> CommandResult:
    """Run ``command`` through ``shell -c`` and wait for it to finish.

    Standard input is inherited so interactive commands can still prompt the user.
    """

    try:
        process = subprocess.run(
            [shell, "-c", command],
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except (OSError, ValueError) as e:
        raise ActionError(f"Failed to execute command: {command}: {e}") from e
    return CommandResult(
        command=command,
        returncode=process.returncode,
        stdout=process.stdout or "",
        stderr=process.stderr or "",
    )


def run_command(command: str, *, shell: str, console: Console) -> str:
    """Run a command, echo its output and return the trimmed stdout.

    Raises:
        ActionError: If the command exits with a non-zero status. Output is shown first.
    """

    console.print(f"Action: Run command `{command}`", markup=False, highlight=False)
    result = run_shell(command, shell=shell)
    logger.info("Command finished: returncode=%d command=%s", result.returncode, command)

    if result.stdout:
        console.print("--- Command Output ---", style="green")
        for line in result.stdout.splitlines():
            console.print(line, style="green", markup=False, highlight=False)
        console.print("----------------------", style="green")
    if result.stderr:
        console.print("--- Command Error Output ---", style="red")
        for line in result.stderr.splitlines():
            console.print(line, style="red", markup=False, highlight=False)
        console.print("--------------------------", style="red")

    if not result.ok:
        raise ActionError(f"Command failed with status: {result.returncode}")

    console.print("Success: Command executed successfully.")
    return result.stdout.strip()
