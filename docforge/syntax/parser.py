"""
C# parser adapter built on Tree-sitter.

Turns C# source text into a SourceTree of Construct records. Only the facts
the documentation engine needs are extracted: names, modifiers, attributes,
parameters, type parameters, declared types, accessors, existing ``///``
documentation and, for block bodies, return statements, thrown exceptions
and single-line comments.

    parser = CSharpParser()
    tree = parser.parse(Path("Service.cs").read_text(), path="Service.cs")
    for construct in tree.walk():
        print(construct.kind.value, construct.identifier)

Tree-sitter recovers from syntax errors, so a partially broken file still
yields its well-formed declarations. Pass ``strict=True`` to refuse such
files instead.
"""

import itertools
from typing import Any, Iterator, List, Optional, Tuple

import tree_sitter

from docforge.core.exceptions import ParseError
from docforge.core.logging import StructuredLogger, get_logger
from docforge.syntax.constructs import (
    BYTE_ORDER_MARK,
    Construct,
    ConstructKind,
    FunctionBody,
    Parameter,
    ReturnSite,
    SourceSpan,
    SourceTree,
    ThrowSite,
)

DECLARATION_KINDS = {
    "class_declaration": ConstructKind.TYPE,
    "struct_declaration": ConstructKind.TYPE,
    "record_declaration": ConstructKind.TYPE,
    "record_struct_declaration": ConstructKind.TYPE,
    "interface_declaration": ConstructKind.INTERFACE,
    "enum_declaration": ConstructKind.ENUMERATION,
    "enum_member_declaration": ConstructKind.ENUMERATION_MEMBER,
    "constructor_declaration": ConstructKind.CONSTRUCTOR,
    "method_declaration": ConstructKind.ROUTINE,
    "property_declaration": ConstructKind.PROPERTY,
}

CONTAINER_KINDS = frozenset(
    {ConstructKind.TYPE, ConstructKind.INTERFACE, ConstructKind.ENUMERATION}
)

# Nodes whose children may hold declarations
CONTAINER_NODES = frozenset(
    {
        "namespace_declaration",
        "file_scoped_namespace_declaration",
        "declaration_list",
        "enum_member_declaration_list",
        "preproc_if",
        "preproc_elif",
        "preproc_else",
    }
)

# Directives (#if/#elif/#else) that wrap code rather than stand on one line
CONDITIONAL_DIRECTIVES = frozenset({"preproc_if", "preproc_elif", "preproc_else"})

# Nested code whose returns and throws belong to another function
NESTED_FUNCTIONS = frozenset(
    {"local_function_statement", "lambda_expression", "anonymous_method_expression"}
)

ACCESSOR_KEYWORDS = frozenset({"get", "set", "init", "add", "remove"})

STRING_LITERALS = frozenset(
    {"string_literal", "verbatim_string_literal", "raw_string_literal"}
)


def _text(node: Any) -> str:
    return node.text.decode("utf-8") if node is not None and node.text else ""


def _field(node: Any, *names: str) -> Any:
    for name in names:
        child = node.child_by_field_name(name)
        if child is not None:
            return child
    return None


def _child_of_type(node: Any, *types: str) -> Any:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _is_leading_trivia(node: Any) -> bool:
    """Comments and one-line directives that may sit between docs and a member."""
    if node.type == "comment":
        return True
    return node.type.startswith("preproc_") and node.type not in CONDITIONAL_DIRECTIVES


def _is_doc_comment(node: Any) -> bool:
    text = _text(node).lstrip()
    return node.type == "comment" and (
        (text.startswith("///") and not text.startswith("////"))
        or (text.startswith("/**") and not text.startswith("/**/"))
    )


def _string_value(node: Any) -> str:
    text = _text(node).lstrip("@$")
    quote = '"""' if text.startswith('"""') else '"'
    if text.startswith(quote) and text.endswith(quote) and len(text) >= 2 * len(quote):
        return text[len(quote) : -len(quote)]
    return text.strip('"')


class _TreeBuilder:
    """Builds constructs for one parse, assigning pre-order identities."""

    def __init__(
        self, source: bytes, logger: StructuredLogger, first_line_offset: int = 0
    ) -> None:
        self.source = source
        self.first_line_offset = first_line_offset
        self.lines = source.split(b"\n")
        self.logger = logger
        self._ids = itertools.count()

    def collect(self, node: Any, parent: Optional[str] = None) -> Tuple[Construct, ...]:
        constructs: List[Construct] = []
        for child in node.named_children:
            if child.type in DECLARATION_KINDS:
                construct = self.build(child, parent)
                if construct is not None:
                    constructs.append(construct)
            elif child.type in CONTAINER_NODES:
                constructs.extend(self.collect(child, parent))
        return tuple(constructs)

    def build(self, node: Any, parent: Optional[str]) -> Optional[Construct]:
        kind = DECLARATION_KINDS[node.type]
        identifier = _text(_field(node, "name"))
        if not identifier:
            self.logger.debug("Skipping declaration without a name", node=node.type)
            return None

        node_id = next(self._ids)
        children: Tuple[Construct, ...] = ()
        body: Optional[FunctionBody] = None
        if kind in CONTAINER_KINDS:
            members = _field(node, "body") or _child_of_type(
                node, "declaration_list", "enum_member_declaration_list"
            )
            if members is not None:
                children = self.collect(members, identifier)
        elif kind in (ConstructKind.ROUTINE, ConstructKind.CONSTRUCTOR):
            body = self.body(node)

        return Construct(
            node_id=node_id,
            kind=kind,
            identifier=identifier,
            span=self.span(node),
            modifiers=tuple(
                _text(c) for c in node.children if c.type == "modifier"
            ),
            attributes=self.attributes(node),
            parameters=self.parameters(node),
            type_parameters=self.type_parameters(node),
            return_type=self.declared_type(node, kind),
            body=body,
            accessors=self.accessors(node) if kind is ConstructKind.PROPERTY else None,
            parent_identifier=parent,
            documentation=self.documentation(node),
            children=children,
        )

    def span(self, node: Any) -> SourceSpan:
        row, byte_column = node.start_point
        line = self.lines[row] if row < len(self.lines) else b""
        column = len(line[:byte_column].decode("utf-8", errors="replace"))
        if row == 0:
            column += self.first_line_offset
        return SourceSpan(row, column, node.end_point[0])

    def documentation(self, node: Any) -> Optional[str]:
        comments = []
        sibling = node.prev_sibling
        while sibling is not None and _is_leading_trivia(sibling):
            if _is_doc_comment(sibling):
                comments.append(_text(sibling))
            sibling = sibling.prev_sibling
        if not comments:
            return None
        return "\n".join(reversed(comments))

    def attributes(self, node: Any) -> Tuple[str, ...]:
        names = []
        for attribute_list in node.children:
            if attribute_list.type != "attribute_list":
                continue
            for attribute in attribute_list.named_children:
                if attribute.type == "attribute":
                    names.append(_text(_field(attribute, "name")))
        return tuple(n for n in names if n)

    def parameters(self, node: Any) -> Tuple[Parameter, ...]:
        parameter_list = _field(node, "parameters") or _child_of_type(
            node, "parameter_list"
        )
        if parameter_list is None:
            return ()
        parameters = []
        for child in parameter_list.named_children:
            if child.type not in ("parameter", "parameter_array"):
                continue
            name = _text(_field(child, "name"))
            if not name:
                identifiers = [c for c in child.named_children if c.type == "identifier"]
                name = _text(identifiers[-1]) if identifiers else ""
            if name:
                parameters.append(Parameter(name, _text(_field(child, "type"))))
        return tuple(parameters)

    def type_parameters(self, node: Any) -> Tuple[str, ...]:
        type_parameter_list = _field(node, "type_parameters") or _child_of_type(
            node, "type_parameter_list"
        )
        if type_parameter_list is None:
            return ()
        names = []
        for child in type_parameter_list.named_children:
            if child.type != "type_parameter":
                continue
            name = _field(child, "name") or _child_of_type(child, "identifier")
            names.append(_text(name))
        return tuple(n for n in names if n)

    def declared_type(self, node: Any, kind: ConstructKind) -> Optional[str]:
        if kind is ConstructKind.ROUTINE:
            return _text(_field(node, "returns", "type")) or None
        if kind is ConstructKind.PROPERTY:
            return _text(_field(node, "type")) or None
        return None

    def accessors(self, node: Any) -> Optional[Tuple[str, ...]]:
        accessor_list = _field(node, "accessors") or _child_of_type(node, "accessor_list")
        if accessor_list is None:
            return None
        keywords = []
        for accessor in accessor_list.named_children:
            if accessor.type != "accessor_declaration":
                continue
            keyword = _text(_field(accessor, "name"))
            if not keyword:
                keyword = _text(_child_of_type(accessor, *ACCESSOR_KEYWORDS))
            if keyword:
                keywords.append(keyword)
        return tuple(keywords)

    def body(self, node: Any) -> Optional[FunctionBody]:
        body = _field(node, "body") or _child_of_type(
            node, "block", "arrow_expression_clause"
        )
        if body is None:
            return None
        if body.type != "block":
            return FunctionBody(is_block=False)

        returns: List[ReturnSite] = []
        throws: List[ThrowSite] = []
        comments: List[str] = []
        for descendant in _descendants(body):
            if descendant.type == "return_statement":
                expressions = [c for c in descendant.named_children if c.type != "comment"]
                if expressions:
                    returns.append(
                        ReturnSite(
                            _text(expressions[0]),
                            is_identifier=expressions[0].type == "identifier",
                        )
                    )
            elif descendant.type in ("throw_statement", "throw_expression"):
                site = _throw_site(descendant)
                if site is not None:
                    throws.append(site)
            elif descendant.type == "comment":
                text = _text(descendant)
                if text.startswith("//") and not text.startswith("///"):
                    comments.append(text)
        return FunctionBody(
            is_block=True,
            returns=tuple(returns),
            throws=tuple(throws),
            comments=tuple(comments),
        )


def _descendants(node: Any) -> Iterator[Any]:
    """Pre-order descendants, not entering nested functions."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        if current.type not in NESTED_FUNCTIONS:
            stack.extend(reversed(current.children))


def _throw_site(node: Any) -> Optional[ThrowSite]:
    creation = _child_of_type(node, "object_creation_expression")
    if creation is None:
        return None
    type_name = _text(_field(creation, "type"))
    if not type_name:
        return None

    message = ""
    arguments = _field(creation, "arguments") or _child_of_type(
        creation, "argument_list"
    )
    if arguments is not None:
        for argument in arguments.named_children:
            if argument.type != "argument":
                continue
            literal = next(
                (c for c in argument.named_children if c.type in STRING_LITERALS), None
            )
            if literal is not None:
                message = _string_value(literal)
                break
    return ThrowSite(type_name, message)


class CSharpParser:
    """Parses C# source into a SourceTree.

    Args:
        strict: Raise ParseError when the source contains syntax errors.
        logger: Logger for parse diagnostics.
    """

    language_name = "c_sharp"

    def __init__(
        self, strict: bool = False, logger: Optional[StructuredLogger] = None
    ) -> None:
        self.strict = strict
        self.logger = logger or get_logger(__name__)
        self._parser = tree_sitter.Parser(self._load_language())

    @staticmethod
    def _load_language() -> Any:
        try:
            import tree_sitter_c_sharp
        except ImportError as e:
            raise ParseError(
                "The C# grammar package 'tree-sitter-c-sharp' is not installed",
                how_to_fix=["Install the grammar: pip install tree-sitter-c-sharp"],
            ) from e
        return tree_sitter.Language(tree_sitter_c_sharp.language())

    def parse(self, text: str, path: Optional[str] = None) -> SourceTree:
        """
        Parse source text.

        Args:
            text: C# source.
            path: Where the text came from, for messages only.

        Returns:
            SourceTree with constructs in source order.

        Raises:
            ParseError: If parsing fails, or the source has syntax errors
                in strict mode.
        """
        # Tree-sitter sees the text without a byte order mark
        offset = 1 if text.startswith(BYTE_ORDER_MARK) else 0
        source = text[offset:].encode("utf-8")
        tree = self._parser.parse(source)
        if tree is None:
            raise ParseError(f"Tree-sitter returned no tree for {path or '<memory>'}")

        root = tree.root_node
        if root.has_error:
            if self.strict:
                raise ParseError(f"Syntax errors in {path or '<memory>'}")
            self.logger.warning(
                "Source has syntax errors; documenting recoverable declarations",
                path=path or "<memory>",
            )

        constructs = _TreeBuilder(source, self.logger, offset).collect(root)
        return SourceTree(
            text=text, constructs=constructs, language=self.language_name, path=path
        )
