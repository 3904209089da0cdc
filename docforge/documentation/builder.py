"""
Documentation Builder.

Accumulates the sections of one documentation block and produces an
immutable StructuredComment. A builder serves exactly one construct:

    FRESH ──with_*()──→ POPULATED ──build()──→ BUILT

Any with_*() or build() call on a BUILT builder raises BuilderStateError.
Empty content is ignored, so a strategy can pass whatever it extracted and
the corresponding section is simply omitted.

Usage
-----
    comment = (
        DocumentationBuilder()
        .for_construct(construct)
        .with_summary("Gets the supported kinds")
        .with_returns("the supported kinds")
        .build()
    )
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from docforge.core.exceptions import BuilderStateError, EmptySummaryError
from docforge.documentation.models import (
    ExceptionDescription,
    ExtractedFeatures,
    NamedDescription,
    StructuredComment,
)
from docforge.syntax.constructs import Construct


class BuilderState(str, Enum):
    FRESH = "fresh"
    POPULATED = "populated"
    BUILT = "built"


class DocumentationBuilder:
    """Fluent builder for StructuredComment."""

    def __init__(self) -> None:
        self.state = BuilderState.FRESH
        self.construct: Optional[Construct] = None
        self._summary: List[str] = []
        self._type_params: List[NamedDescription] = []
        self._params: List[NamedDescription] = []
        self._returns: Optional[str] = None
        self._exceptions: List[ExceptionDescription] = []
        self._value: Optional[str] = None

    def _touch(self) -> None:
        if self.state is BuilderState.BUILT:
            raise BuilderStateError(
                "Documentation builder cannot be modified after build()"
            )
        self.state = BuilderState.POPULATED

    def for_construct(self, construct: Construct) -> "DocumentationBuilder":
        """Bind the builder to the construct being documented."""
        self._touch()
        self.construct = construct
        return self

    def with_summary(self, *lines: str) -> "DocumentationBuilder":
        self._touch()
        self._summary.extend(line.strip() for line in lines if line and line.strip())
        return self

    def with_type_params(
        self, type_params: Iterable[NamedDescription]
    ) -> "DocumentationBuilder":
        self._touch()
        self._type_params.extend(p for p in type_params if p.name)
        return self

    def with_params(self, params: Iterable[NamedDescription]) -> "DocumentationBuilder":
        self._touch()
        self._params.extend(p for p in params if p.name)
        return self

    def with_returns(self, returns: Optional[str]) -> "DocumentationBuilder":
        self._touch()
        if returns and returns.strip():
            self._returns = returns.strip()
        return self

    def with_exceptions(
        self, exceptions: Iterable[ExceptionDescription]
    ) -> "DocumentationBuilder":
        self._touch()
        self._exceptions.extend(e for e in exceptions if e.type)
        return self

    def with_value(self, value: Optional[str]) -> "DocumentationBuilder":
        self._touch()
        if value and value.strip():
            self._value = value.strip()
        return self

    def build(self) -> StructuredComment:
        """
        Produce the StructuredComment.

        Exceptions are deduplicated and sorted by message, then type.

        Raises:
            BuilderStateError: If build() was already called.
            EmptySummaryError: If no summary text was supplied.
        """
        if self.state is BuilderState.BUILT:
            raise BuilderStateError("Documentation builder was already built")
        if not self._summary:
            name = self.construct.identifier if self.construct else "<unbound>"
            raise EmptySummaryError(f"No summary generated for '{name}'")

        self.state = BuilderState.BUILT
        features = ExtractedFeatures(
            summary=tuple(self._summary),
            type_params=tuple(self._type_params),
            params=tuple(self._params),
            returns=self._returns,
            exceptions=_sorted_unique(self._exceptions),
            value=self._value,
        )
        return StructuredComment(features)


def _sorted_unique(exceptions: Iterable[ExceptionDescription]):
    unique: Dict[ExceptionDescription, None] = dict.fromkeys(exceptions)
    return tuple(sorted(unique, key=lambda e: e.sort_key))
