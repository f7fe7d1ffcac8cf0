"""Command abstraction over external tools.

Stages describe what they want to run as a Command and receive a
CommandResult; the CommandRunner decides how it is executed. Tests
substitute a runner that never spawns processes.
"""

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """An external invocation: executable, arguments, working directory."""

    verb: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    env: Mapping[str, str] | None = None

    @property
    def argv(self) -> list[str]:
        return [self.verb, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass
class CommandResult:
    """Structured result of running a Command."""

    command: Command
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        """Best available failure detail (stderr, else stdout)."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"exit code {self.returncode}"


class CommandRunner(Protocol):
    """Executes commands and returns structured results."""

    def run(self, command: Command) -> CommandResult: ...


@dataclass
class SubprocessRunner:
    """Runs commands as blocking child processes.

    There is no timeout: the pipeline relies on each tool's own
    blocking behaviour. A missing executable is reported as exit code
    127, the same as a shell would.
    """

    capture: bool = True
    history: list[Command] = field(default_factory=list)

    def run(self, command: Command) -> CommandResult:
        self.history.append(command)
        logger.debug("$ %s", command)
        try:
            result = subprocess.run(
                command.argv,
                cwd=command.cwd,
                env=dict(command.env) if command.env is not None else None,
                capture_output=self.capture,
                text=True,
            )
        except FileNotFoundError:
            return CommandResult(
                command=command,
                returncode=127,
                stderr=f"Command not found: {command.verb}",
            )
        stdout = result.stdout or ""
        stderr = result.stderr or ""
        if stdout.strip():
            logger.debug(stdout.rstrip())
        return CommandResult(
            command=command,
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr,
        )
