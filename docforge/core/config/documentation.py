"""
Documentation template configuration.

Provides one options dataclass per construct kind. Every section holds a
template string with named placeholders (``{name}``, ``{accessors}``...) or a
feature toggle. All options are frozen: the snapshot taken when strategies
are built is never mutated during a run.

Templates are validated when the dataclass is created, so a template that
references an unknown placeholder, or an empty required template, fails
before any construct is processed.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Mapping

from docforge.core.exceptions import ConfigValidationError

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

NAME_ONLY: FrozenSet[str] = frozenset({"name"})


def template_placeholders(template: str) -> FrozenSet[str]:
    """Return the placeholder names referenced by a template."""
    return frozenset(PLACEHOLDER_PATTERN.findall(template))


def validate_template(path: str, template: object, allowed: FrozenSet[str]) -> None:
    """
    Check that a template is a non-empty string using only allowed placeholders.

    Args:
        path: Dotted configuration path used in error messages.
        template: Template value read from configuration.
        allowed: Placeholder names this template may use.

    Raises:
        ConfigValidationError: If the template is missing, empty or
            references an unknown placeholder.
    """
    if not isinstance(template, str) or not template.strip():
        raise ConfigValidationError(
            f"Template '{path}' is missing or empty", field=path, value=template
        )

    unknown = template_placeholders(template) - allowed
    if unknown:
        names = ", ".join(sorted(f"{{{u}}}" for u in unknown))
        valid = ", ".join(sorted(f"{{{a}}}" for a in allowed))
        raise ConfigValidationError(
            f"Template '{path}' uses unknown placeholder(s) {names}; "
            f"valid placeholders: {valid}",
            field=path,
            value=template,
        )


@dataclass(frozen=True)
class TemplateOptions:
    """A single templated section."""

    template: str = "The {name}"


@dataclass(frozen=True)
class ToggleOptions:
    """A section that can be switched off."""

    enabled: bool = True


@dataclass(frozen=True)
class ValueOptions:
    """Property value section: toggle plus fallback template."""

    enabled: bool = True
    template: str = "The {name}"


@dataclass(frozen=True)
class MethodSummaryOptions:
    """Method summaries are generated from the name; comments are optional."""

    include_comments: bool = False


class _KindOptions:
    """Shared validation for per-kind options.

    Subclasses list the templated sections and the placeholders each accepts.
    """

    SECTION: ClassVar[str] = ""
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {}

    def __post_init__(self) -> None:
        for attr, allowed in self.PLACEHOLDERS.items():
            value = getattr(self, attr)
            template = value if isinstance(value, str) else value.template
            validate_template(f"{self.SECTION}.{attr}", template, allowed)


@dataclass(frozen=True)
class TypeDocumentationOptions(_KindOptions):
    """Classes, structs and records."""

    SECTION: ClassVar[str] = "type"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "summary": NAME_ONLY,
        "type_parameters": NAME_ONLY,
    }

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions("The {name} class")
    )
    type_parameters: TemplateOptions = field(default_factory=TemplateOptions)


@dataclass(frozen=True)
class InterfaceDocumentationOptions(_KindOptions):
    """Interfaces."""

    SECTION: ClassVar[str] = "interface"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "summary": NAME_ONLY,
        "type_parameters": NAME_ONLY,
    }

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions("The {name} interface")
    )
    type_parameters: TemplateOptions = field(default_factory=TemplateOptions)


@dataclass(frozen=True)
class EnumDocumentationOptions(_KindOptions):
    """Enumerations."""

    SECTION: ClassVar[str] = "enum"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {"summary": NAME_ONLY}

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions("The {name} enum")
    )


@dataclass(frozen=True)
class EnumMemberDocumentationOptions(_KindOptions):
    """Enumeration members."""

    SECTION: ClassVar[str] = "enum_member"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "summary": frozenset({"name", "enum_name"}),
    }

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions("The {name} {enum_name}")
    )


@dataclass(frozen=True)
class ConstructorDocumentationOptions(_KindOptions):
    """Constructors."""

    SECTION: ClassVar[str] = "constructor"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "summary": frozenset({"name", "parameters"}),
        "summary_with_parameters": frozenset({"name", "parameters"}),
        "parameters": NAME_ONLY,
    }

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions(
            "Initializes a new instance of the {name} class"
        )
    )
    summary_with_parameters: TemplateOptions = field(
        default_factory=lambda: TemplateOptions(
            "Initializes a new instance of the {name} class "
            "using the specified {parameters}"
        )
    )
    parameters: TemplateOptions = field(default_factory=TemplateOptions)
    exceptions: ToggleOptions = field(default_factory=ToggleOptions)


@dataclass(frozen=True)
class MethodDocumentationOptions(_KindOptions):
    """Methods."""

    SECTION: ClassVar[str] = "method"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "parameters": NAME_ONLY,
        "type_parameters": NAME_ONLY,
        "returns": NAME_ONLY,
    }

    summary: MethodSummaryOptions = field(default_factory=MethodSummaryOptions)
    parameters: TemplateOptions = field(default_factory=TemplateOptions)
    type_parameters: TemplateOptions = field(default_factory=TemplateOptions)
    returns: TemplateOptions = field(default_factory=TemplateOptions)
    exceptions: ToggleOptions = field(default_factory=ToggleOptions)


@dataclass(frozen=True)
class PropertyDocumentationOptions(_KindOptions):
    """Properties."""

    SECTION: ClassVar[str] = "property"
    PLACEHOLDERS: ClassVar[Mapping[str, FrozenSet[str]]] = {
        "summary": frozenset({"accessors", "name"}),
        "value": frozenset({"accessors", "name"}),
    }

    summary: TemplateOptions = field(
        default_factory=lambda: TemplateOptions("{accessors} the value of the {name}")
    )
    value: ValueOptions = field(default_factory=ValueOptions)
