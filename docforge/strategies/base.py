"""
Base Interface for Documentation Strategies.

A strategy knows how to document one or more construct kinds. It extracts
the relevant features from a Construct, turns them into sentences with the
Formatter and the configured templates, and assembles a StructuredComment
through a fresh DocumentationBuilder.

Architecture Context
--------------------
    ┌───────────┐      ┌──────────────────┐      ┌────────────────┐
    │ Construct │ ───→ │ Strategy.apply() │ ───→ │ StrategyResult │
    └───────────┘      │  (per kind)      │      │  + comment     │
                       └──────────────────┘      │  + construct   │
                                                 └────────────────┘

Interface Contract
------------------
Implementors must provide:

    supported_kinds  - Construct kinds this strategy handles
    document(c)      - Build the StructuredComment for a construct

The base class provides:

    apply(c)                 - document() plus the replacement construct
    get_strategy_name()      - Class name for logging
    describe_names(...)      - Template-rendered NamedDescription tuples

Strategies hold only the frozen configuration snapshot and a Formatter.
Nothing is remembered between constructs, so one instance may document
constructs from several threads.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Optional, Tuple

from docforge.documentation.builder import DocumentationBuilder
from docforge.documentation.models import (
    ExceptionDescription,
    NamedDescription,
    StructuredComment,
)
from docforge.format.formatter import Formatter
from docforge.syntax.constructs import Construct, ConstructKind, FunctionBody


@dataclass(frozen=True)
class StrategyResult:
    """The comment produced for a construct and its replacement record."""

    comment: StructuredComment
    construct: Construct


class DocumentationStrategy(ABC):
    """Interface for per-kind documentation strategies."""

    def __init__(self, formatter: Formatter) -> None:
        self.formatter = formatter

    @property
    @abstractmethod
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        """Construct kinds this strategy documents."""

    @abstractmethod
    def document(self, construct: Construct) -> StructuredComment:
        """Build the documentation block for a construct.

        Raises:
            DocumentationError: If no summary can be produced.
        """

    def apply(self, construct: Construct) -> StrategyResult:
        """Document a construct and return it with its replacement."""
        comment = self.document(construct)
        documented = replace(construct, documentation=comment.render())
        return StrategyResult(comment=comment, construct=documented)

    def get_strategy_name(self) -> str:
        return self.__class__.__name__

    def builder_for(self, construct: Construct) -> DocumentationBuilder:
        return DocumentationBuilder().for_construct(construct)

    def describe_names(
        self, template: str, names: Iterable[str]
    ) -> Tuple[NamedDescription, ...]:
        """Render one templated sentence per name, keeping order."""
        return tuple(
            NamedDescription(name, self.formatter.format_name(template, name=name))
            for name in names
        )

    def describe_exceptions(
        self, body: Optional[FunctionBody]
    ) -> Tuple[ExceptionDescription, ...]:
        """Thrown exceptions of a block body; expression bodies yield none."""
        if body is None or not body.is_block:
            return ()
        return tuple(ExceptionDescription(t.type, t.message) for t in body.throws)
