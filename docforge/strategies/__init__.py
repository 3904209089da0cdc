"""
Per-kind documentation strategies and their registry.

    from docforge.strategies import build_default_registry

    registry = build_default_registry(config.documentation)
    result = registry.resolve(construct.kind).apply(construct)
"""

from docforge.strategies.base import DocumentationStrategy, StrategyResult
from docforge.strategies.constructor import ConstructorDocumentationStrategy
from docforge.strategies.method import MethodDocumentationStrategy
from docforge.strategies.property import PropertyDocumentationStrategy
from docforge.strategies.registry import StrategyRegistry, build_default_registry
from docforge.strategies.type_strategies import (
    EnumDocumentationStrategy,
    EnumMemberDocumentationStrategy,
    InterfaceDocumentationStrategy,
    TypeDocumentationStrategy,
)

__all__ = [
    "DocumentationStrategy",
    "StrategyResult",
    "StrategyRegistry",
    "build_default_registry",
    "ConstructorDocumentationStrategy",
    "MethodDocumentationStrategy",
    "PropertyDocumentationStrategy",
    "TypeDocumentationStrategy",
    "InterfaceDocumentationStrategy",
    "EnumDocumentationStrategy",
    "EnumMemberDocumentationStrategy",
]
