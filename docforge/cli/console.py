"""Console output helpers.

Provides the shared rich console and the error panel shown for failed
commands, with "Why it happened" and "How to fix" sections taken from the
exception hierarchy.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from docforge.core.exceptions import get_error_info, get_root_cause

_console: Console | None = None

# Set by the --verbose flag
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared console instance (lazy-loaded)."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable tracebacks in error panels."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


class ErrorRenderer:
    """Renders exceptions as error panels.

    Example
    -------
        try:
            write_result(run, path)
        except Exception as e:
            ErrorRenderer.render(e, context="While writing Service.cs")
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
        console: Optional[Console] = None,
    ) -> None:
        """Render an exception as a helpful error panel.

        Args:
            exc: Exception to render
            context: Optional context message
            show_traceback: Override for verbose mode (None = use global setting)
            console: Console to print to (defaults to the shared console)
        """
        console = console or get_console()

        error_info = get_error_info(exc)
        root_cause = get_root_cause(exc)
        root_message = str(root_cause) if root_cause is not exc else None

        content = ErrorRenderer._build_error_content(
            message=str(exc),
            context=context,
            why=error_info["why_it_happened"],
            how_to_fix=error_info["how_to_fix"],
            root_message=root_message,
        )
        console.print(
            Panel(
                content,
                title=f"[bold red]Error: {error_info['error_code']}[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            tb_text = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
            console.print("[dim]--- Traceback (--verbose mode) ---[/dim]")
            console.print(tb_text, markup=False, style="dim")

    @staticmethod
    def _build_error_content(
        message: str,
        context: str,
        why: str,
        how_to_fix: List[str],
        root_message: Optional[str],
    ) -> Text:
        text = Text()

        if context:
            text.append(f"{context}\n\n", style="dim")

        text.append(message, style="bold red")
        text.append("\n\n")

        if root_message and root_message != message:
            text.append("Root cause: ", style="bold yellow")
            text.append(root_message, style="yellow")
            text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n\n", style="cyan")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text
