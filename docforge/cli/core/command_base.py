"""Base class for all CLI commands.

Commands implement execute() and return an exit code; the typer wrapper
turns a non-zero code into ``typer.Exit``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from rich.console import Console
from rich.markup import escape

from docforge.cli.console import ErrorRenderer, get_console
from docforge.core.exceptions import (
    ConfigurationError,
    OutputError,
    SourceNotFoundError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_UNDOCUMENTED = 2
EXIT_CONFIG_ERROR = 3
EXIT_OUTPUT_ERROR = 4
EXIT_NOT_FOUND = 5

ERROR_EXIT_CODES: Dict[Type[BaseException], int] = {
    ConfigurationError: EXIT_CONFIG_ERROR,
    OutputError: EXIT_OUTPUT_ERROR,
    SourceNotFoundError: EXIT_NOT_FOUND,
    FileNotFoundError: EXIT_NOT_FOUND,
}


def exit_code_for(error: BaseException) -> int:
    """Exit code for an exception (1 when it has no dedicated code)."""
    for error_type, code in ERROR_EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return EXIT_ERROR


class DocForgeCommand(ABC):
    """Abstract base class for all DocForge CLI commands.

    Provides console output helpers and error handling. Subclasses must
    implement execute().

    Example:
        class MyCommand(DocForgeCommand):
            def execute(self, path: Path) -> int:
                ...
                return 0
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize command.

        Args:
            console: Rich console (inject one in tests)
        """
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the command.

        Returns:
            Exit code (0 = success, non-zero = error)
        """

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}", highlight=False)

    def print_info(self, message: str) -> None:
        self.console.print(f"[cyan]i[/cyan] {escape(message)}", highlight=False)

    # === Error Handling ===

    def handle_error(self, error: Exception, context: str = "") -> int:
        """Render an error panel and return the matching exit code.

        Does not exit; the caller decides.
        """
        ErrorRenderer.render(error, context=context, console=self.console)
        return exit_code_for(error)
