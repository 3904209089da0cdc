"""Property documentation: ``Gets or sets the value of the name``."""

from typing import FrozenSet, Optional

from docforge.core.config.documentation import PropertyDocumentationOptions
from docforge.documentation.models import StructuredComment
from docforge.format.formatter import Formatter
from docforge.strategies.base import DocumentationStrategy
from docforge.syntax.constructs import Construct, ConstructKind


class PropertyDocumentationStrategy(DocumentationStrategy):
    """Documents properties from their accessors and declared type."""

    def __init__(
        self, options: PropertyDocumentationOptions, formatter: Formatter
    ) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.PROPERTY})

    def describe_accessors(self, construct: Construct) -> str:
        """``gets``, ``sets``, ``gets or sets``...; ``gets`` without a list."""
        if not construct.accessors:
            return "gets"
        verbs = []
        for accessor in construct.accessors:
            verb = self.formatter.conjugate_third_person_singular(accessor.lower())
            if verb not in verbs:
                verbs.append(verb)
        return " or ".join(verbs)

    def document(self, construct: Construct) -> StructuredComment:
        accessors = self.describe_accessors(construct)
        name = self.formatter.humanize_identifier(construct.identifier)

        summary = self.formatter.render_template(
            self.options.summary.template, accessors=accessors, name=name
        )
        builder = self.builder_for(construct).with_summary(
            self.formatter.finish_sentence(summary)
        )

        if self.options.value.enabled:
            builder.with_value(self._value(construct, accessors, name))

        return builder.build()

    def _value(self, construct: Construct, accessors: str, name: str) -> Optional[str]:
        qualified = self.formatter.qualified_type_name(construct.return_type)
        if qualified:
            return qualified
        return self.formatter.render_template(
            self.options.value.template, accessors=accessors, name=name
        )
