"""
Shared pytest fixtures and configuration for DocForge tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **formatter**: Formatter instance
- **make_construct**: Construct factory with sensible defaults
- **make_tree**: SourceTree factory that numbers constructs in pre-order
- **sample_source**: Small C# file covering every construct kind

Construct factories never need the Tree-sitter grammar, so most unit tests
run without it. Tests that parse real source use ``csharp_parser``, which
skips when the grammar is not installed.
"""

import itertools
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Generator, Iterable, List

import pytest

from docforge.format.formatter import Formatter
from docforge.syntax.constructs import (
    Construct,
    ConstructKind,
    Parameter,
    SourceSpan,
    SourceTree,
)


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Construct Fixtures
# ============================================================================


@pytest.fixture
def formatter() -> Formatter:
    return Formatter()


def build_construct(
    kind: ConstructKind,
    identifier: str,
    line: int = 0,
    column: int = 0,
    parameters: Iterable[Any] = (),
    **kwargs: Any,
) -> Construct:
    """Create a Construct with defaults suitable for tests.

    Parameters may be given as names or as (name, type) pairs.
    """
    params = tuple(
        p if isinstance(p, Parameter)
        else Parameter(*p) if isinstance(p, tuple)
        else Parameter(p)
        for p in parameters
    )
    end_line = kwargs.pop("end_line", line)
    return Construct(
        node_id=kwargs.pop("node_id", 0),
        kind=kind,
        identifier=identifier,
        span=SourceSpan(line, column, end_line),
        parameters=params,
        **kwargs,
    )


@pytest.fixture
def make_construct() -> Callable[..., Construct]:
    """Factory fixture for Construct records.

    Example:
        def test_method(make_construct):
            method = make_construct(ConstructKind.ROUTINE, "GetName", return_type="string")
    """
    return build_construct


def number_constructs(constructs: Iterable[Construct]) -> List[Construct]:
    """Return copies of the constructs with pre-order node ids."""
    counter = itertools.count()

    def renumber(construct: Construct) -> Construct:
        node_id = next(counter)
        children = tuple(renumber(child) for child in construct.children)
        return replace(construct, node_id=node_id, children=children)

    return [renumber(c) for c in constructs]


@pytest.fixture
def make_tree() -> Callable[..., SourceTree]:
    """Factory fixture for SourceTree records with pre-order node ids."""

    def _make(text: str, *constructs: Construct, path: str = "Sample.cs") -> SourceTree:
        return SourceTree(text=text, constructs=tuple(number_constructs(constructs)), path=path)

    return _make


# ============================================================================
# Parser Fixtures
# ============================================================================


SAMPLE_SOURCE = """\
using System;

namespace Shop.Orders
{
    public class OrderService
    {
        public OrderService(IRepository repository, ILogger logger)
        {
            _repository = repository;
        }

        public string Name { get; set; }

        public bool IsReady(int timeout)
        {
            return _ready;
        }

        /// <summary>Already documented.</summary>
        public void Cancel()
        {
        }
    }

    public enum OrderState
    {
        Open,
        Closed
    }
}
"""


@pytest.fixture
def sample_source() -> str:
    return SAMPLE_SOURCE


@pytest.fixture
def csharp_parser():
    """CSharpParser instance; skips when the grammar is not installed."""
    pytest.importorskip("tree_sitter_c_sharp")
    from docforge.syntax.parser import CSharpParser

    return CSharpParser()
