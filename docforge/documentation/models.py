"""
Documentation records.

ExtractedFeatures is the immutable result of feature extraction for one
construct. StructuredComment wraps it with the rendering into XML
documentation sections:

    Summary → TypeParams → Params → Returns → Exceptions → Value

Empty sections are omitted. Rendering escapes XML special characters in
generated text while keeping the inline reference tags (``<see cref=.../>``,
``<paramref name=.../>``, ``<typeparamref name=.../>``, ``<c>...</c>``)
that templates may use.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape, quoteattr

INLINE_TAG_PATTERN = re.compile(
    r"(<(?:see|seealso|paramref|typeparamref)\s+[^<>]*/>|</?c>)"
)


class CommentSection(str, Enum):
    """Sections of a documentation block, in render order."""

    SUMMARY = "summary"
    TYPE_PARAMS = "typeparam"
    PARAMS = "param"
    RETURNS = "returns"
    EXCEPTIONS = "exception"
    VALUE = "value"


@dataclass(frozen=True)
class NamedDescription:
    """A parameter or type parameter and its sentence."""

    name: str
    description: str


@dataclass(frozen=True)
class ExceptionDescription:
    """An exception a routine may throw, with its message."""

    type: str
    message: str = ""

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.message, self.type)


@dataclass(frozen=True)
class ExtractedFeatures:
    """Information gathered for one construct.

    Attributes:
        summary: Summary sentences, never empty.
        type_params: Type parameters in declaration order.
        params: Parameters in declaration order.
        returns: Returns sentence, if any.
        exceptions: Thrown exceptions, deduplicated and sorted by
            (message, type).
        value: Value sentence (properties), if any.
    """

    summary: Tuple[str, ...]
    type_params: Tuple[NamedDescription, ...] = ()
    params: Tuple[NamedDescription, ...] = ()
    returns: Optional[str] = None
    exceptions: Tuple[ExceptionDescription, ...] = ()
    value: Optional[str] = None


def escape_text(text: str) -> str:
    """Escape XML text, leaving inline reference tags intact."""
    parts = INLINE_TAG_PATTERN.split(text)
    # Odd indices are captured inline tags
    return "".join(p if i % 2 else escape(p) for i, p in enumerate(parts))


@dataclass(frozen=True)
class StructuredComment:
    """A rendered-ready documentation block for one construct."""

    features: ExtractedFeatures

    def sections(self) -> List[Tuple[CommentSection, List[str]]]:
        """Return the XML lines of each non-empty section in order."""
        f = self.features
        result: List[Tuple[CommentSection, List[str]]] = []

        summary_lines = [escape_text(line) for line in f.summary if line.strip()]
        if summary_lines:
            result.append(
                (CommentSection.SUMMARY, ["<summary>", *summary_lines, "</summary>"])
            )

        if f.type_params:
            result.append(
                (
                    CommentSection.TYPE_PARAMS,
                    [
                        f"<typeparam name={quoteattr(p.name)}>"
                        f"{escape_text(p.description)}</typeparam>"
                        for p in f.type_params
                    ],
                )
            )

        if f.params:
            result.append(
                (
                    CommentSection.PARAMS,
                    [
                        f"<param name={quoteattr(p.name)}>"
                        f"{escape_text(p.description)}</param>"
                        for p in f.params
                    ],
                )
            )

        if f.returns:
            result.append(
                (
                    CommentSection.RETURNS,
                    [f"<returns>{escape_text(f.returns)}</returns>"],
                )
            )

        if f.exceptions:
            result.append(
                (
                    CommentSection.EXCEPTIONS,
                    [
                        f"<exception cref={quoteattr(e.type)}>"
                        f"{escape_text(e.message)}</exception>"
                        for e in f.exceptions
                    ],
                )
            )

        if f.value:
            result.append(
                (CommentSection.VALUE, [f"<value>{escape_text(f.value)}</value>"])
            )

        return result

    def lines(self) -> List[str]:
        """All XML lines without comment markers."""
        return [line for _, body in self.sections() for line in body]

    def render(self, indent: str = "", newline: str = "\n") -> str:
        """
        Render the block as ``///`` comment lines.

        Args:
            indent: Leading whitespace of the documented construct.
            newline: Line terminator; every line, the last included, ends
                with it.

        Returns:
            The comment block ready to be placed above the construct.
        """
        return "".join(f"{indent}/// {line}{newline}" for line in self.lines())
