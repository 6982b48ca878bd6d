"""Blocking execution of external commands."""

import subprocess
from dataclasses import dataclass
from typing import Sequence

from shipctl.core.exceptions import CommandFailure
from shipctl.core.logging import StructuredLogger
from shipctl.core.utils import format_command, quote_command

logger = StructuredLogger(__name__)

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Fully captured result of a finished command."""

    stdout: str
    stderr: str
    exit_code: int


class ProcessRunner:
    """Runs external programs and captures their output.

    A call either returns the complete output of a successful run or raises
    CommandFailure; there is no partial result.
    """

    def run(self, command: str, args: Sequence[str]) -> CommandResult:
        """Run ``command`` with ``args`` and wait for it to exit.

        Args:
            command: Executable name, resolved via PATH
            args: Argument vector, passed without a shell

        Returns:
            The captured stdout, stderr and exit code

        Raises:
            CommandFailure: If the command exits non-zero or cannot be started
        """
        argv = [command, *args]
        command_line = format_command(command, args)
        log = logger.bind(command=quote_command(command, args))
        log.debug("Running command")

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise CommandFailure(
                command_line,
                f"{command}: executable not found on PATH",
                EXIT_NOT_FOUND,
            )
        except OSError as e:
            raise CommandFailure(command_line, str(e), EXIT_NOT_FOUND)

        if proc.returncode != 0:
            log.debug("Command failed", exit_code=proc.returncode)
            raise CommandFailure(command_line, proc.stderr, proc.returncode)

        return CommandResult(
            stdout=proc.stdout,
            stderr=proc.stderr,
            exit_code=proc.returncode,
        )
