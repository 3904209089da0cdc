"""
Strategies for type-level declarations.

Types, interfaces, enumerations and enumeration members are documented with
a summary rendered from a kind-specific template. Types and interfaces also
document their generic type parameters.
"""

import re
from typing import FrozenSet

from docforge.core.config.documentation import (
    EnumDocumentationOptions,
    EnumMemberDocumentationOptions,
    InterfaceDocumentationOptions,
    TypeDocumentationOptions,
)
from docforge.documentation.models import StructuredComment
from docforge.format.formatter import Formatter
from docforge.strategies.base import DocumentationStrategy
from docforge.syntax.constructs import Construct, ConstructKind

# IRepository -> Repository; Item stays Item
INTERFACE_PREFIX = re.compile(r"^I(?=[A-Z])")


class TypeDocumentationStrategy(DocumentationStrategy):
    """Classes, structs and records."""

    def __init__(self, options: TypeDocumentationOptions, formatter: Formatter) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.TYPE})

    def document(self, construct: Construct) -> StructuredComment:
        summary = self.formatter.format_name(
            self.options.summary.template, name=construct.identifier
        )
        return (
            self.builder_for(construct)
            .with_summary(self.formatter.finish_sentence(summary))
            .with_type_params(
                self.describe_names(
                    self.options.type_parameters.template, construct.type_parameters
                )
            )
            .build()
        )


class InterfaceDocumentationStrategy(DocumentationStrategy):
    """Interfaces; the conventional leading ``I`` is not spelled out."""

    def __init__(
        self, options: InterfaceDocumentationOptions, formatter: Formatter
    ) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.INTERFACE})

    def document(self, construct: Construct) -> StructuredComment:
        name = INTERFACE_PREFIX.sub("", construct.identifier)
        summary = self.formatter.format_name(self.options.summary.template, name=name)
        return (
            self.builder_for(construct)
            .with_summary(self.formatter.finish_sentence(summary))
            .with_type_params(
                self.describe_names(
                    self.options.type_parameters.template, construct.type_parameters
                )
            )
            .build()
        )


class EnumDocumentationStrategy(DocumentationStrategy):
    def __init__(self, options: EnumDocumentationOptions, formatter: Formatter) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.ENUMERATION})

    def document(self, construct: Construct) -> StructuredComment:
        summary = self.formatter.format_name(
            self.options.summary.template, name=construct.identifier
        )
        return (
            self.builder_for(construct)
            .with_summary(self.formatter.finish_sentence(summary))
            .build()
        )


class EnumMemberDocumentationStrategy(DocumentationStrategy):
    """Enum members: ``The red color`` for ``Color.Red``."""

    def __init__(
        self, options: EnumMemberDocumentationOptions, formatter: Formatter
    ) -> None:
        super().__init__(formatter)
        self.options = options

    @property
    def supported_kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset({ConstructKind.ENUMERATION_MEMBER})

    def document(self, construct: Construct) -> StructuredComment:
        summary = self.formatter.format_name(
            self.options.summary.template,
            name=construct.identifier,
            enum_name=construct.parent_identifier or "",
        )
        return (
            self.builder_for(construct)
            .with_summary(self.formatter.finish_sentence(summary))
            .build()
        )
