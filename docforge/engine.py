"""
Documentation Engine.

Orchestrates one source file through the documentation stages:

    parse → classify → apply → rewrite → write

    ┌──────────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌────────┐
    │ CSharpParser │ → │  Walker  │ → │ Registry │ → │ Rewriter │ → │ write  │
    │  SourceTree  │   │ snapshot │   │ per kind │   │ one pass │   │ atomic │
    └──────────────┘   └──────────┘   └──────────┘   └──────────┘   └────────┘

The undocumented set is computed once, before any rewriting. Strategies run
sequentially, or on a thread pool when ``documentation.max_workers`` is
greater than one; results are merged in traversal order either way, so the
output does not depend on scheduling. A construct that cannot be documented
is recorded as a warning and left unchanged.

Usage
-----
    engine = DocumentationEngine.from_config(load_config())
    run = engine.document_file(Path("src/Service.cs"))
    write_result(run, Path("src/Service.cs"))
"""

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from docforge.core.config import Config
from docforge.core.exceptions import (
    DocumentationError,
    OutputError,
    ParseError,
    SourceNotFoundError,
)
from docforge.core.logging import RunLogger, StructuredLogger, get_logger
from docforge.documentation.models import StructuredComment
from docforge.format.formatter import Formatter
from docforge.strategies.base import StrategyResult
from docforge.strategies.registry import StrategyRegistry, build_default_registry
from docforge.syntax.constructs import Construct, SourceTree
from docforge.syntax.rewriter import Rewriter
from docforge.syntax.walker import DocumentationWalker, WalkResult


@dataclass(frozen=True)
class DocumentationRun:
    """Outcome of documenting one source tree.

    Attributes:
        tree: Rewritten tree (the input tree when nothing was documented).
        walk: Documented/undocumented snapshot taken before rewriting.
        results: Applied strategy results keyed by the original node_id.
        warnings: Human-readable notes about skipped constructs.
        original_text: Source text before rewriting.
    """

    tree: SourceTree
    walk: WalkResult
    results: Dict[int, StrategyResult] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()
    original_text: str = ""

    @property
    def comments(self) -> Dict[int, StructuredComment]:
        return {node_id: r.comment for node_id, r in self.results.items()}

    @property
    def changed(self) -> bool:
        return self.tree.text != self.original_text

    @property
    def documented_count(self) -> int:
        return len(self.results)


class DocumentationEngine:
    """Documents every undocumented construct of a source tree."""

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[StrategyRegistry] = None,
        walker: Optional[DocumentationWalker] = None,
        rewriter: Optional[Rewriter] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.config = config or Config()
        self.logger = logger or get_logger(__name__)
        documentation = self.config.documentation
        self.registry = registry or build_default_registry(
            documentation, Formatter(), self.logger
        )
        self.walker = walker or DocumentationWalker(
            documentation.excluded_kinds(), self.logger
        )
        self.rewriter = rewriter or Rewriter(logger=self.logger)
        self._parser = None

    @classmethod
    def from_config(cls, config: Config) -> "DocumentationEngine":
        return cls(config=config)

    @property
    def parser(self):
        """C# parser, created on first use."""
        if self._parser is None:
            from docforge.syntax.parser import CSharpParser

            self._parser = CSharpParser(logger=self.logger)
        return self._parser

    def document(self, tree: SourceTree) -> DocumentationRun:
        """
        Document all undocumented constructs of a tree.

        Args:
            tree: Parsed source tree.

        Returns:
            DocumentationRun holding the rewritten tree and diagnostics.
        """
        run_logger = RunLogger(tree.path or "<memory>", self.logger)

        run_logger.start_stage("classify")
        walk = self.walker.visit(tree)

        run_logger.start_stage("apply")
        results, warnings = self._apply_all(walk.undocumented)

        run_logger.start_stage("rewrite")
        for construct in self.rewriter.unplaceable(tree, list(results)):
            self.logger.warning(
                "Construct does not start its line; documentation skipped",
                identifier=construct.identifier,
                line=construct.span.start_line + 1,
            )
            warnings.append(
                f"{construct.kind.value} '{construct.identifier}' does not start "
                f"its line (line {construct.span.start_line + 1}); skipped"
            )
            results.pop(construct.node_id)
        rewritten = self.rewriter.rewrite(tree, results)

        run_logger.finish(success=True, documented=len(results))
        return DocumentationRun(
            tree=rewritten,
            walk=walk,
            results=results,
            warnings=tuple(warnings),
            original_text=tree.text,
        )

    def _apply_all(
        self, constructs: Tuple[Construct, ...]
    ) -> Tuple[Dict[int, StrategyResult], List[str]]:
        workers = self.config.documentation.max_workers
        if workers > 1 and len(constructs) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                outcomes = list(executor.map(self._apply_one, constructs))
        else:
            outcomes = [self._apply_one(c) for c in constructs]

        results: Dict[int, StrategyResult] = {}
        warnings: List[str] = []
        for construct, (result, warning) in zip(constructs, outcomes):
            if result is not None:
                results[construct.node_id] = result
            if warning:
                warnings.append(warning)
        return results, warnings

    def _apply_one(
        self, construct: Construct
    ) -> Tuple[Optional[StrategyResult], Optional[str]]:
        strategy = self.registry.resolve(construct.kind)
        if strategy is None:
            return None, (
                f"No strategy for {construct.kind.value} '{construct.identifier}'"
            )
        try:
            return strategy.apply(construct), None
        except DocumentationError as e:
            self.logger.warning(
                "Could not document construct",
                identifier=construct.identifier,
                kind=construct.kind.value,
                error=str(e),
            )
            return None, f"{construct.kind.value} '{construct.identifier}': {e}"
        except Exception as e:
            self.logger.exception(
                "Strategy failed",
                identifier=construct.identifier,
                kind=construct.kind.value,
                strategy=strategy.get_strategy_name(),
            )
            return None, (
                f"{construct.kind.value} '{construct.identifier}': "
                f"{type(e).__name__}: {e}"
            )

    def document_text(self, text: str, path: Optional[str] = None) -> DocumentationRun:
        """Parse and document source text."""
        return self.document(self.parser.parse(text, path))

    def document_file(self, path: Path) -> DocumentationRun:
        """
        Read, parse and document one file.

        Raises:
            SourceNotFoundError: If the file does not exist.
            ParseError: If the file cannot be decoded or parsed.
        """
        if not path.is_file():
            raise SourceNotFoundError(f"Source file not found: {path}")
        try:
            text = read_source(path)
        except UnicodeDecodeError as e:
            raise ParseError(f"{path} is not valid UTF-8: {e}") from e
        return self.document_text(text, str(path))


def read_source(path: Path) -> str:
    """Read a source file keeping its newline style and byte order mark."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_result(run: DocumentationRun, destination: Path) -> None:
    """
    Write the rewritten text atomically.

    The text goes to a temporary file in the destination directory, which
    then replaces the destination. On any failure the destination keeps its
    previous content.

    Raises:
        OutputError: If the file cannot be written or replaced.
    """
    directory = destination.parent if str(destination.parent) else Path(".")
    tmp_name = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=directory
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(run.tree.text)
        os.replace(tmp_name, destination)
        tmp_name = None
    except OSError as e:
        raise OutputError(f"Could not write {destination}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
