"""
Tree Walker.

Visits every construct of a SourceTree in pre-order and partitions the
documentable ones into documented and undocumented lists. The walk is pure:
the tree is not modified and the result is an immutable snapshot, taken
before any rewriting starts.

Kinds excluded by configuration are not classified at all, but their nested
members are still visited (excluding ``type`` still documents the methods
inside a class).
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from docforge.core.logging import StructuredLogger, get_logger
from docforge.syntax.constructs import Construct, ConstructKind, SourceTree


@dataclass(frozen=True)
class WalkResult:
    """Constructs found by the walker, in traversal order."""

    documented: Tuple[Construct, ...] = ()
    undocumented: Tuple[Construct, ...] = ()

    @property
    def total(self) -> int:
        return len(self.documented) + len(self.undocumented)


class DocumentationWalker:
    """Partitions constructs by documentation presence."""

    def __init__(
        self,
        excluded_kinds: Iterable[ConstructKind] = (),
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.excluded_kinds = frozenset(excluded_kinds)
        self.logger = logger or get_logger(__name__)

    def visit(self, tree: SourceTree) -> WalkResult:
        documented = []
        undocumented = []
        for construct in tree.walk():
            if construct.kind in self.excluded_kinds:
                continue
            if construct.has_documentation:
                documented.append(construct)
            else:
                undocumented.append(construct)

        self.logger.debug(
            "Classified constructs",
            path=tree.path or "<memory>",
            documented=len(documented),
            undocumented=len(undocumented),
        )
        return WalkResult(tuple(documented), tuple(undocumented))
