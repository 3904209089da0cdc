"""
Strategy Registry.

Maps each construct kind to the single strategy that documents it. The
registry is assembled once from an explicit list and never changes during a
run:

    registry = build_default_registry(config.documentation, Formatter(), logger)
    strategy = registry.resolve(ConstructKind.PROPERTY)

A kind with no strategy resolves to None and a warning is logged; the
construct is left unchanged and the run continues.
"""

from typing import Dict, FrozenSet, Iterable, Optional

from docforge.core.config.config import DocumentationConfig
from docforge.core.exceptions import StrategyRegistrationError
from docforge.core.logging import StructuredLogger, get_logger
from docforge.format.formatter import Formatter
from docforge.strategies.base import DocumentationStrategy
from docforge.strategies.constructor import ConstructorDocumentationStrategy
from docforge.strategies.method import MethodDocumentationStrategy
from docforge.strategies.property import PropertyDocumentationStrategy
from docforge.strategies.type_strategies import (
    EnumDocumentationStrategy,
    EnumMemberDocumentationStrategy,
    InterfaceDocumentationStrategy,
    TypeDocumentationStrategy,
)
from docforge.syntax.constructs import ConstructKind


class StrategyRegistry:
    """Registry of documentation strategies keyed by construct kind.

    Args:
        strategies: Strategies to register. Each kind may be claimed once.
        logger: Logger used for resolution warnings.

    Raises:
        StrategyRegistrationError: If two strategies support the same kind.
    """

    def __init__(
        self,
        strategies: Iterable[DocumentationStrategy],
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.logger = logger or get_logger(__name__)
        self._strategies: Dict[ConstructKind, DocumentationStrategy] = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: DocumentationStrategy) -> None:
        """Register a strategy for each of its supported kinds."""
        for kind in strategy.supported_kinds:
            existing = self._strategies.get(kind)
            if existing is not None:
                raise StrategyRegistrationError(
                    f"Construct kind '{kind.value}' is claimed by both "
                    f"{existing.get_strategy_name()} and {strategy.get_strategy_name()}"
                )
            self._strategies[kind] = strategy

    def resolve(self, kind: ConstructKind) -> Optional[DocumentationStrategy]:
        """Return the strategy for a kind, or None (with a warning)."""
        strategy = self._strategies.get(kind)
        if strategy is None:
            self.logger.warning("No documentation strategy registered", kind=kind.value)
        return strategy

    @property
    def kinds(self) -> FrozenSet[ConstructKind]:
        return frozenset(self._strategies)

    def __len__(self) -> int:
        return len(set(map(id, self._strategies.values())))


def build_default_registry(
    config: Optional[DocumentationConfig] = None,
    formatter: Optional[Formatter] = None,
    logger: Optional[StructuredLogger] = None,
) -> StrategyRegistry:
    """Assemble the registry with one strategy per construct kind."""
    config = config or DocumentationConfig()
    formatter = formatter or Formatter()
    return StrategyRegistry(
        [
            TypeDocumentationStrategy(config.type, formatter),
            InterfaceDocumentationStrategy(config.interface, formatter),
            EnumDocumentationStrategy(config.enum, formatter),
            EnumMemberDocumentationStrategy(config.enum_member, formatter),
            ConstructorDocumentationStrategy(config.constructor, formatter),
            MethodDocumentationStrategy(config.method, formatter),
            PropertyDocumentationStrategy(config.property, formatter),
        ],
        logger=logger,
    )
