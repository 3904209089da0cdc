"""Constructor documentation."""

from typing import FrozenSet

from docforge.core.config.documentation import ConstructorDocumentationOptions
from docforge.documentation.models import StructuredComment
from docforge.format.formatter import Formatter
from docforge.strategies.base import DocumentationStrategy
from docforge.syntax.constructs import Construct, ConstructKind


class ConstructorDocumentationStrategy(DocumentationStrategy):
    """``Initializes a new instance of the user class using the specified name``."""

    def __init__(
        self, options: ConstructorDocumentationOptions, formatter: Formatter
    ) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.CONSTRUCTOR})

    def document(self, construct: Construct) -> StructuredComment:
        names = [p.name for p in construct.parameters]
        template = (
            self.options.summary_with_parameters
            if names
            else self.options.summary
        ).template

        summary = self.formatter.render_template(
            template,
            name=self.formatter.humanize_identifier(construct.identifier),
            parameters=self.formatter.humanize_list(names),
        )
        builder = self.builder_for(construct).with_summary(
            self.formatter.finish_sentence(summary)
        )
        builder.with_params(
            self.describe_names(self.options.parameters.template, names)
        )
        if self.options.exceptions.enabled:
            builder.with_exceptions(self.describe_exceptions(construct.body))
        return builder.build()
