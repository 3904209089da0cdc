"""
Rewriter.

Applies every strategy result of a run in one reconstruction:

1. The new text is built in a single pass over the original lines; each
   rendered ``///`` block is inserted above the line its construct starts
   on, indented like the construct.
2. The construct tree is rebuilt bottom-up. Each documented construct is
   replaced by the strategy's copy, which now carries the indented block.
   Every span is moved down by the number of lines inserted above it.

All other text is preserved byte for byte, including the file's newline
style. Identity is the construct's ``node_id`` in the tree that was walked,
so no lookup depends on positions that earlier insertions have moved.

A construct that shares its first line with other code (``A, B`` enum
members on one line) cannot receive a ``///`` block; it is skipped with a
warning.
"""

from bisect import bisect_right
from dataclasses import replace
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Tuple

from docforge.core.logging import StructuredLogger, get_logger
from docforge.syntax.constructs import (
    BYTE_ORDER_MARK,
    Construct,
    SourceSpan,
    SourceTree,
)

if TYPE_CHECKING:
    from docforge.strategies.base import StrategyResult


def detect_newline(text: str) -> str:
    """Newline style of a text: ``\\r\\n`` when present, else ``\\n``."""
    return "\r\n" if "\r\n" in text else "\n"


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping line ends (rows as Tree-sitter counts them)."""
    lines = text.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def line_prefix(lines: Sequence[str], construct: Construct) -> str:
    """Text before the construct on its first line, without a byte order mark."""
    line = construct.span.start_line
    prefix = lines[line][: construct.span.start_column]
    if line == 0 and prefix.startswith(BYTE_ORDER_MARK):
        return prefix[1:]
    return prefix


def starts_line(lines: Sequence[str], construct: Construct) -> bool:
    """True when only whitespace precedes the construct on its first line."""
    if construct.span.start_line >= len(lines):
        return False
    return not line_prefix(lines, construct).strip()


class Rewriter:
    """Inserts rendered documentation blocks into a source tree."""

    def __init__(
        self,
        newline: Optional[str] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.newline = newline
        self.logger = logger or get_logger(__name__)

    def unplaceable(
        self, tree: SourceTree, node_ids: Sequence[int]
    ) -> List[Construct]:
        """Constructs among ``node_ids`` that do not start their line."""
        lines = split_lines(tree.text)
        wanted = set(node_ids)
        return [
            c for c in tree.walk() if c.node_id in wanted and not starts_line(lines, c)
        ]

    def rewrite(
        self, tree: SourceTree, results: Mapping[int, "StrategyResult"]
    ) -> SourceTree:
        """
        Produce a new tree with every strategy result applied.

        Args:
            tree: Tree the results were computed for.
            results: Strategy results keyed by construct node_id.

        Returns:
            A new SourceTree; ``tree`` is not modified.
        """
        if not results:
            return tree

        newline = self.newline or detect_newline(tree.text)
        lines = split_lines(tree.text)

        blocks: Dict[int, str] = {}
        inserted: Dict[int, int] = {}
        documentation: Dict[int, str] = {}

        for construct in tree.walk():
            result = results.get(construct.node_id)
            if result is None:
                continue
            if not starts_line(lines, construct):
                self.logger.warning(
                    "Construct does not start its line; documentation skipped",
                    identifier=construct.identifier,
                    line=construct.span.start_line + 1,
                )
                continue

            line = construct.span.start_line
            indent = line_prefix(lines, construct)
            block = result.comment.render(indent, newline)
            blocks[line] = blocks.get(line, "") + block
            inserted[line] = inserted.get(line, 0) + block.count(newline)
            documentation[construct.node_id] = block.rstrip("\r\n")

        bom_moved = 0 in blocks and lines[0].startswith(BYTE_ORDER_MARK)
        if bom_moved:
            # The mark stays the first character of the file
            lines[0] = lines[0][1:]
            blocks[0] = BYTE_ORDER_MARK + blocks[0]
        text = "".join(blocks.get(i, "") + line for i, line in enumerate(lines))

        positions = sorted(inserted)
        offsets: List[int] = []
        total = 0
        for position in positions:
            total += inserted[position]
            offsets.append(total)

        def shift(line: int) -> int:
            index = bisect_right(positions, line)
            return offsets[index - 1] if index else 0

        def rebuild(construct: Construct) -> Construct:
            children = tuple(rebuild(child) for child in construct.children)
            span = construct.span
            changes = {
                "children": children,
                "span": SourceSpan(
                    span.start_line + shift(span.start_line),
                    span.start_column - (1 if bom_moved and span.start_line == 0 else 0),
                    span.end_line + shift(span.end_line),
                ),
            }
            if construct.node_id in documentation:
                changes["documentation"] = documentation[construct.node_id]
                construct = results[construct.node_id].construct
            return replace(construct, **changes)

        constructs: Tuple[Construct, ...] = tuple(rebuild(c) for c in tree.constructs)
        self.logger.debug(
            "Rewrote source",
            path=tree.path or "<memory>",
            documented=len(documentation),
            lines_added=total,
        )
        return replace(tree, text=text, constructs=constructs)
