"""
Source tree abstraction: constructs, the walker and the rewriter.

The Tree-sitter adapter lives in docforge.syntax.parser and is imported
explicitly where source text has to be parsed.
"""

from docforge.syntax.constructs import (
    Construct,
    ConstructKind,
    FunctionBody,
    Parameter,
    ReturnSite,
    SourceSpan,
    SourceTree,
    ThrowSite,
    documentation_content,
)
from docforge.syntax.rewriter import Rewriter, detect_newline
from docforge.syntax.walker import DocumentationWalker, WalkResult

__all__ = [
    "Construct",
    "ConstructKind",
    "FunctionBody",
    "Parameter",
    "ReturnSite",
    "SourceSpan",
    "SourceTree",
    "ThrowSite",
    "documentation_content",
    "Rewriter",
    "detect_newline",
    "DocumentationWalker",
    "WalkResult",
]
