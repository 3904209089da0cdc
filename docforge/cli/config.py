"""Config command - Display the effective configuration.

Prints YAML that can be saved as ``docforge.yaml``:

    docforge config --default > docforge.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from docforge.cli.core.command_base import EXIT_SUCCESS, DocForgeCommand
from docforge.core.config import Config, default_config_yaml, load_config


class ConfigCommand(DocForgeCommand):
    """Display the effective or default configuration."""

    def execute(
        self,
        config_path: Optional[Path] = None,
        default: bool = False,
        base_path: Optional[Path] = None,
    ) -> int:
        """Print configuration as YAML.

        Args:
            config_path: Explicit configuration file
            default: Ignore files and print the built-in defaults
            base_path: Directory searched for docforge.yaml

        Returns:
            0 on success, 3 when the configuration is invalid
        """
        try:
            config = Config() if default else load_config(config_path, base_path)
            self.console.print(
                default_config_yaml(config).rstrip(),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return EXIT_SUCCESS
        except Exception as e:
            return self.handle_error(e, "Failed to load configuration")


# Typer command wrapper
def command(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: docforge.yaml)"
    ),
    default: bool = typer.Option(
        False, "--default", help="Show the built-in defaults"
    ),
) -> None:
    """Show the configuration as YAML.

    Examples:
        # Effective configuration of the current directory
        docforge config

        # Start a new configuration file from the defaults
        docforge config --default > docforge.yaml
    """
    cmd = ConfigCommand()
    exit_code = cmd.execute(config_path, default)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
