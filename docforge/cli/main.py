"""DocForge CLI - Main application entry point.

This is the main CLI application that registers all commands.
"""

from __future__ import annotations

import typer

from docforge.cli import apply as apply_cmd
from docforge.cli import config as config_cmd

# Create main Typer application
app = typer.Typer(
    name="docforge",
    help="Generate XML documentation comments for C# sources",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """DocForge - documentation synthesis for C#."""
    if version:
        from docforge import __version__

        typer.echo(f"DocForge {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("apply", rich_help_panel="Core")(apply_cmd.command)
app.command("config", rich_help_panel="System")(config_cmd.command)


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
