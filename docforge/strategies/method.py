"""
Method documentation.

The summary is derived from the method name (``GetSupportedKinds`` →
``Gets the supported kinds``). The Returns section is chosen by a cascade,
first match wins:

1. Boolean predicate named ``Is...`` →
   ``true if this instance is [ready]; otherwise, false.``
2. Block body → the last ``return <identifier>;`` rendered through the
   returns template.
3. The declared return type in words (``a mapping of key and value``).

``void``, ``Task`` and ``ValueTask`` produce no Returns section.
"""

import re
from typing import FrozenSet, Optional

from docforge.core.config.documentation import MethodDocumentationOptions
from docforge.documentation.models import StructuredComment
from docforge.format.formatter import Formatter, ReturnKind, classify_return_type
from docforge.strategies.base import DocumentationStrategy
from docforge.syntax.constructs import Construct, ConstructKind

COMMENT_MARKER = re.compile(r"^\s*//+\s?")


class MethodDocumentationStrategy(DocumentationStrategy):
    """Documents methods: summary, type params, params, returns, exceptions."""

    def __init__(
        self, options: MethodDocumentationOptions, formatter: Formatter
    ) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.ROUTINE})

    def document(self, construct: Construct) -> StructuredComment:
        builder = self.builder_for(construct)
        builder.with_summary(*self._summary_lines(construct))
        builder.with_type_params(
            self.describe_names(
                self.options.type_parameters.template, construct.type_parameters
            )
        )
        builder.with_params(
            self.describe_names(
                self.options.parameters.template,
                (p.name for p in construct.parameters),
            )
        )
        builder.with_returns(self.describe_returns(construct))
        if self.options.exceptions.enabled:
            builder.with_exceptions(self.describe_exceptions(construct.body))
        return builder.build()

    def _summary_lines(self, construct: Construct) -> list:
        lines = [
            self.formatter.format_method(
                construct.identifier,
                [p.name for p in construct.parameters],
                construct.attributes,
            )
        ]
        body = construct.body
        if self.options.summary.include_comments and body is not None and body.is_block:
            for comment in body.comments:
                text = COMMENT_MARKER.sub("", comment).strip()
                if text:
                    lines.append(self.formatter.finish_sentence(text))
        return lines

    def describe_returns(self, construct: Construct) -> Optional[str]:
        """Returns sentence for a method, or None when it returns nothing."""
        return_type = (construct.return_type or "").strip()
        if not return_type:
            return None

        kind = classify_return_type(return_type)
        if kind in (ReturnKind.NO_VALUE, ReturnKind.ASYNC_NO_VALUE):
            return None

        if self.formatter.is_boolean_predicate(return_type, construct.identifier):
            return self.formatter.format_boolean_returns(construct.identifier)

        body = construct.body
        if kind is ReturnKind.VALUE and body is not None and body.is_block:
            identifiers = [r.expression for r in body.returns if r.is_identifier]
            if identifiers:
                return self.formatter.format_name(
                    self.options.returns.template, name=identifiers[-1]
                )

        return self.formatter.humanize_returns_type(return_type)
