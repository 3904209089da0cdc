"""Documentation records and the builder that assembles them."""

from docforge.documentation.builder import BuilderState, DocumentationBuilder
from docforge.documentation.models import (
    CommentSection,
    ExceptionDescription,
    ExtractedFeatures,
    NamedDescription,
    StructuredComment,
    escape_text,
)

__all__ = [
    "BuilderState",
    "DocumentationBuilder",
    "CommentSection",
    "ExceptionDescription",
    "ExtractedFeatures",
    "NamedDescription",
    "StructuredComment",
    "escape_text",
]
