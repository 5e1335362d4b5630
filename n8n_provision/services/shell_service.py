"""Shell service for executing commands on the local host."""

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from rich.live import Live
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from n8n_provision.exceptions import CommandError
from n8n_provision.logger import ProvisionLogger
from n8n_provision.models.results import ExecutionResult


class ShellService:
    """
    Runs external programs and records them in the run log.

    Every command and its output goes to the log file. When a description
    is given and the console is interactive, a spinner is shown while the
    command runs.
    """

    def __init__(self, logger: ProvisionLogger):
        self.logger = logger

    def run(
        self,
        args: Sequence[str],
        description: Optional[str] = None,
        cwd: Optional[Path] = None,
        input: Optional[str] = None,
        timeout: Optional[int] = None,
        check: bool = False,
    ) -> ExecutionResult:
        """
        Execute a command.

        Args:
            args: Program and arguments
            description: Spinner label (no spinner if None)
            cwd: Working directory
            input: Text piped to stdin
            timeout: Timeout in seconds
            check: Raise CommandError on non-zero exit

        Returns:
            ExecutionResult with captured output
        """
        command = shlex.join(args)
        self.logger.log_command(command)

        console = self.logger.console
        if description and not self.logger.verbose and console.is_terminal:
            spinner = Padding(Spinner("dots", text=f"[cyan]{description}...[/cyan]"), (0, 0, 0, 2))
            with Live(spinner, console=console, refresh_per_second=10) as live:
                result = self._execute(list(args), cwd=cwd, input=input, timeout=timeout)
                mark = Text("  ✓ ", style="dim") if result.is_success else Text("  ✗ ", style="red")
                mark.append(description, style="dim")
                live.update(mark)
        else:
            result = self._execute(list(args), cwd=cwd, input=input, timeout=timeout)

        self.logger.log_output(result.stdout, "stdout")
        self.logger.log_output(result.stderr, "stderr")
        if result.is_failure:
            self.logger.log(f"Exit code {result.returncode}: {command}", "WARNING")

        if check and result.is_failure:
            raise CommandError(command, result.returncode, result.stderr)
        return result

    def succeeds(self, args: Sequence[str], **kwargs) -> bool:
        """Run a command and report whether it exited 0."""
        return self.run(args, **kwargs).is_success

    def which(self, program: str) -> Optional[str]:
        """Locate a program on PATH."""
        return shutil.which(program)

    def _execute(
        self,
        args: list[str],
        cwd: Optional[Path] = None,
        input: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> ExecutionResult:
        command = shlex.join(args)
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                input=input,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            return ExecutionResult(returncode=127, stderr=str(e), command=command)
        except subprocess.TimeoutExpired:
            return ExecutionResult(
                returncode=124,
                stderr=f"Timed out after {timeout}s",
                command=command,
            )

        return ExecutionResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            command=command,
        )
