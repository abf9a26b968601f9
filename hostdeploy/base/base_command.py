"""
Base Command Class

Abstract base for all hostdeploy CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

from hostdeploy.exceptions import HostDeployError
from hostdeploy.logger import DeployLogger
from hostdeploy.operations import DeploymentOperations
from hostdeploy.process import ProcessRunner
from hostdeploy.settings import Settings, load_settings
from hostdeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Settings loading
    - Logger initialization
    - Header display
    - Error handling
    """

    def __init__(self, verbose: bool = False, settings: Optional[Settings] = None):
        self.verbose = verbose
        self.console = Console()
        self.settings = settings or load_settings()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, deployment_name: str, command_name: str) -> DeployLogger:
        """
        Initialize command logger.

        Args:
            deployment_name: Deployment name (use "mobile" for mobile builds)
            command_name: Command name

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            deployment_name, command_name, self.settings.log_dir, verbose=self.verbose
        )
        return self.logger

    def operations(self) -> DeploymentOperations:
        """Build the operations object bound to this command's logger."""
        runner = ProcessRunner(self.logger, verbose=self.verbose)
        return DeploymentOperations(self.settings, runner, self.logger)

    def show_header(
        self,
        title: str,
        deployment: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in verbose mode)."""
        if not self.verbose:
            show_header(
                title=title,
                deployment=deployment,
                details=details,
                console=self.console,
            )

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def print_dim(self, message: str) -> None:
        self.console.print(f"[dim]{message}[/dim]")

    def exit_with_error(self, message: str, code: int = 1) -> None:
        """
        Print error and exit.

        Args:
            message: Error message
            code: Exit code
        """
        self.print_error(message)
        raise SystemExit(code)

    def _show_log_path(self) -> None:
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

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log("Operation cancelled by user", "ERROR")
                self.logger.has_errors = True
            self._show_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except HostDeployError as e:
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            else:
                self.print_error(e.message)
                if e.context:
                    self.print_dim(f"Context: {e.context}")
            self._show_log_path()
            raise SystemExit(1)
        except PermissionError as e:
            self.console.print(f"\n[bold red]✗ Permission denied:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"Permission error: {e}")
            self._show_log_path()
            raise SystemExit(1)
        except OSError as e:
            error_type = type(e).__name__
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {e}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._show_log_path()
            raise SystemExit(1)
        finally:
            if self.logger:
                self.logger.close()
