"""
Base Command Class

Abstract base for all n8n-provision CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm

from n8n_provision.core.config_loader import load_settings
from n8n_provision.exceptions import InstallationCancelled, ProvisionError
from n8n_provision.logger import ProvisionLogger
from n8n_provision.models.config import InstallerSettings
from n8n_provision.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Settings loading
    - Logger initialization
    - Header display
    - Confirmation prompts
    - Error handling with exit codes
    """

    def __init__(
        self,
        verbose: bool = False,
        settings_path: Optional[Path] = None,
        assume_yes: bool = False,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.settings_path = settings_path
        self.assume_yes = assume_yes
        self.console = console or Console()
        self.logger: Optional[ProvisionLogger] = None
        self._settings: Optional[InstallerSettings] = None

    @property
    def settings(self) -> InstallerSettings:
        if self._settings is None:
            self._settings = load_settings(self.settings_path)
        return self._settings

    def init_logger(self, operation: str) -> ProvisionLogger:
        """
        Initialize the run log.

        Args:
            operation: Operation name used in the log file name
        """
        self.logger = ProvisionLogger(
            operation, self.settings.log_dir, verbose=self.verbose, output=self.console
        )
        return self.logger

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(title=title, subtitle=subtitle, details=details, console=self.console)

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def print_info(self, message: str) -> None:
        self.console.print(f"[yellow]ℹ {message}[/yellow]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask for a yes/no answer (always yes with --yes).

        Args:
            question: Question to ask
            default: Answer used on empty input
        """
        if self.assume_yes:
            self.print_dim(f"{question} yes (--yes)")
            return True
        return Confirm.ask(question, default=default, console=self.console)

    def require_confirmation(self, question: str) -> None:
        """
        Raises:
            InstallationCancelled: If the operator answers no
        """
        if not self.confirm(question):
            raise InstallationCancelled("Installation cancelled")

    def _print_log_path(self) -> None:
        if self.logger:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Exit codes: 0 success, 1 error, 130 interrupted.
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._print_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except ProvisionError as e:
            self.console.print()
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            else:
                self.print_error(e.message)
                if e.context:
                    self.print_dim(e.context)
            self._print_log_path()
            raise SystemExit(1)
        except PermissionError as e:
            self.console.print(f"\n[bold red]✗ Permission denied:[/bold red] {e}\n")
            self.console.print("[dim]Try running with sudo[/dim]\n")
            if self.logger:
                self.logger.log_error(f"Permission error: {e}")
            self._print_log_path()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._print_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
