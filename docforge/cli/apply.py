"""Apply command - Document undocumented C# constructs.

Documents one ``.cs`` file, or every ``.cs`` file below a directory, in
place. With ``--dry-run`` nothing is written: undocumented constructs are
listed and the command exits with code 2 when any are found, which makes it
usable as a CI check.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from docforge.cli.console import set_verbose_mode
from docforge.cli.core.command_base import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_UNDOCUMENTED,
    DocForgeCommand,
)
from docforge.core.config import Config, load_config
from docforge.core.exceptions import SourceNotFoundError
from docforge.core.logging import configure_logging
from docforge.engine import DocumentationEngine, DocumentationRun, write_result

SOURCE_SUFFIX = ".cs"

# Build output folders never hold hand-written sources
SKIPPED_DIRECTORIES = frozenset({"bin", "obj", ".git", ".vs"})


def collect_sources(path: Path) -> List[Path]:
    """Return the C# files to process, sorted for a stable order."""
    if path.is_file():
        return [path]
    return sorted(
        p
        for p in path.rglob(f"*{SOURCE_SUFFIX}")
        if p.is_file()
        and not SKIPPED_DIRECTORIES.intersection(p.relative_to(path).parts[:-1])
    )


class ApplyCommand(DocForgeCommand):
    """Document source files."""

    def execute(
        self,
        path: Path,
        config_path: Optional[Path] = None,
        dry_run: bool = False,
        output: Optional[Path] = None,
        verbose: bool = False,
    ) -> int:
        """Document one file or a directory tree.

        Args:
            path: File or directory to document
            config_path: Explicit configuration file
            dry_run: Report undocumented constructs without writing
            output: Destination for a single input file
            verbose: Debug logging and tracebacks

        Returns:
            0 on success, 2 when a dry run finds undocumented constructs,
            other non-zero codes on errors
        """
        set_verbose_mode(verbose)
        try:
            if not path.exists():
                raise SourceNotFoundError(f"Path not found: {path}")
            if output is not None and not path.is_file():
                self.print_error("--output can only be used with a single file")
                return EXIT_ERROR

            config = self._load_config(path, config_path, verbose)
            sources = collect_sources(path)
            if not sources:
                self.print_warning(f"No {SOURCE_SUFFIX} files found in {path}")
                return EXIT_SUCCESS

            engine = DocumentationEngine.from_config(config)
            if dry_run:
                return self._dry_run(engine, sources)
            return self._apply(engine, sources, output)

        except Exception as e:
            return self.handle_error(e, f"While documenting {path}")

    def _load_config(
        self, path: Path, config_path: Optional[Path], verbose: bool
    ) -> Config:
        base_path = path if path.is_dir() else path.parent
        config = load_config(config_path, base_path=base_path)
        configure_logging(
            level="DEBUG" if verbose else config.logging.level,
            log_file=Path(config.logging.file) if config.logging.file else None,
        )
        return config

    def _apply(
        self,
        engine: DocumentationEngine,
        sources: List[Path],
        output: Optional[Path],
    ) -> int:
        documented = 0
        changed_files = 0
        for source in sources:
            run = engine.document_file(source)
            self._report_warnings(source, run)
            if run.changed:
                write_result(run, output or source)
                documented += run.documented_count
                changed_files += 1
            elif output is not None:
                write_result(run, output)

        self.print_success(
            f"Documented {documented} construct(s) in {changed_files} "
            f"of {len(sources)} file(s)"
        )
        return EXIT_SUCCESS

    def _dry_run(self, engine: DocumentationEngine, sources: List[Path]) -> int:
        table = Table(title="Undocumented constructs")
        table.add_column("File", style="cyan")
        table.add_column("Line", justify="right")
        table.add_column("Kind", style="magenta")
        table.add_column("Name", style="bold")

        total = 0
        for source in sources:
            run = engine.document_file(source)
            for construct in run.walk.undocumented:
                table.add_row(
                    str(source),
                    str(construct.span.start_line + 1),
                    construct.kind.value,
                    construct.identifier,
                )
                total += 1

        self.print_info(f"Checked {len(sources)} file(s)")
        if total == 0:
            self.print_success(f"All constructs documented in {len(sources)} file(s)")
            return EXIT_SUCCESS

        self.console.print(table)
        self.print_warning(f"{total} undocumented construct(s) found")
        return EXIT_UNDOCUMENTED

    def _report_warnings(self, source: Path, run: DocumentationRun) -> None:
        for warning in run.warnings:
            self.print_warning(f"{source}: {warning}")


# Typer command wrapper
def command(
    path: Path = typer.Argument(..., help="C# file or directory to document"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: docforge.yaml)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List undocumented constructs, write nothing"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the result here (single file only)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Debug logging and full tracebacks"
    ),
) -> None:
    """Add XML documentation comments to undocumented constructs.

    Examples:
        # Document a file in place
        docforge apply src/Service.cs

        # Document a whole project
        docforge apply src/

        # Check without writing (exit code 2 if anything is undocumented)
        docforge apply src/ --dry-run
    """
    cmd = ApplyCommand()
    exit_code = cmd.execute(path, config_path, dry_run, output, verbose)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
