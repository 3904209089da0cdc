"""
Construct model for parsed source files.

A Construct is an immutable handle onto one documentable declaration of the
parsed tree. It exposes only the capability set the documentation engine
needs: kind, identifier, modifiers, attributes, parameters, type parameters,
declared return type, body facts, accessor list and existing documentation.

The parser builds these records once per file. Nothing in the engine mutates
them; the rewriter produces new records through dataclasses.replace().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple

# Kept in SourceTree.text; line 0 columns count it as one character
BYTE_ORDER_MARK = "\ufeff"


class ConstructKind(str, Enum):
    """Closed set of documentable construct kinds."""

    TYPE = "type"
    INTERFACE = "interface"
    ENUMERATION = "enum"
    ENUMERATION_MEMBER = "enum_member"
    CONSTRUCTOR = "constructor"
    ROUTINE = "method"
    PROPERTY = "property"

    @classmethod
    def from_name(cls, name: str) -> "ConstructKind":
        """Look up a kind by its configuration name (e.g. ``enum_member``)."""
        key = name.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == key or kind.name.lower() == key:
                return kind
        valid = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown construct kind '{name}' (valid: {valid})")


@dataclass(frozen=True)
class SourceSpan:
    """Position of a construct in the source text (0-based lines and columns)."""

    start_line: int
    start_column: int
    end_line: int

    def shifted(self, lines: int) -> "SourceSpan":
        """Return the span moved down by ``lines`` lines."""
        if lines == 0:
            return self
        return SourceSpan(self.start_line + lines, self.start_column, self.end_line + lines)


@dataclass(frozen=True)
class Parameter:
    """A declared parameter."""

    name: str
    type: str = ""


@dataclass(frozen=True)
class ReturnSite:
    """A return statement found in a block body."""

    expression: str
    is_identifier: bool = False


@dataclass(frozen=True)
class ThrowSite:
    """A ``throw new T(...)`` found in a block body."""

    type: str
    message: str = ""


@dataclass(frozen=True)
class FunctionBody:
    """Facts collected from a routine body.

    Expression bodies (``=> expr``) carry no scanned facts: only block bodies
    are searched for returns, throws and comments.
    """

    is_block: bool = True
    returns: Tuple[ReturnSite, ...] = ()
    throws: Tuple[ThrowSite, ...] = ()
    comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Construct:
    """A documentable declaration.

    Attributes:
        node_id: Pre-order identity of the construct within its tree.
        kind: Construct kind.
        identifier: Declared name.
        span: Source position of the declaration (attributes included).
        modifiers: Modifier keywords in source order.
        attributes: Attribute names without brackets.
        parameters: Parameters in declaration order.
        type_parameters: Generic type parameter names in declaration order.
        return_type: Declared return type (methods) or property type.
        body: Body facts, or None for declarations without a body.
        accessors: Accessor keywords, or None when there is no accessor list.
        parent_identifier: Name of the enclosing declaration, if any.
        documentation: Existing documentation comment text, if any.
        children: Nested constructs in source order.
    """

    node_id: int
    kind: ConstructKind
    identifier: str
    span: SourceSpan
    modifiers: Tuple[str, ...] = ()
    attributes: Tuple[str, ...] = ()
    parameters: Tuple[Parameter, ...] = ()
    type_parameters: Tuple[str, ...] = ()
    return_type: Optional[str] = None
    body: Optional[FunctionBody] = None
    accessors: Optional[Tuple[str, ...]] = None
    parent_identifier: Optional[str] = None
    documentation: Optional[str] = None
    children: Tuple["Construct", ...] = field(default=(), repr=False)

    @property
    def has_documentation(self) -> bool:
        """True iff the construct carries a non-empty documentation block."""
        return bool(self.documentation and documentation_content(self.documentation))

    def walk(self) -> Iterator["Construct"]:
        """Yield this construct and all nested constructs in pre-order."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))


@dataclass(frozen=True)
class SourceTree:
    """A parsed source file: its text and its top-level constructs."""

    text: str
    constructs: Tuple[Construct, ...] = ()
    language: str = "c_sharp"
    path: Optional[str] = None

    def walk(self) -> Iterator[Construct]:
        """Yield every construct in pre-order."""
        for construct in self.constructs:
            yield from construct.walk()

    def find(self, node_id: int) -> Optional[Construct]:
        """Return the construct with the given identity, if present."""
        for construct in self.walk():
            if construct.node_id == node_id:
                return construct
        return None


def documentation_content(documentation: str) -> str:
    """Strip comment markers from a documentation block, keeping the text."""
    lines = []
    for line in documentation.splitlines():
        text = line.strip()
        if text.startswith("///"):
            text = text[3:]
        elif text.startswith("/**"):
            text = text[3:]
        if text.endswith("*/"):
            text = text[:-2]
        text = text.strip().lstrip("*").strip()
        if text:
            lines.append(text)
    return "\n".join(lines)
