"""
Tests for the construct model.

Organization
------------
- TestConstructKind: configuration names
- TestSourceSpan: shifting
- TestDocumentationPresence: has_documentation and documentation_content
- TestTraversal: pre-order walk and lookup
"""

import pytest

from docforge.syntax.constructs import (
    ConstructKind,
    SourceSpan,
    documentation_content,
)


# ============================================================================
# Test Classes
# ============================================================================


class TestConstructKind:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("type", ConstructKind.TYPE),
            ("enum_member", ConstructKind.ENUMERATION_MEMBER),
            ("enum-member", ConstructKind.ENUMERATION_MEMBER),
            ("METHOD", ConstructKind.ROUTINE),
            ("routine", ConstructKind.ROUTINE),
        ],
    )
    def test_from_name(self, name, expected):
        assert ConstructKind.from_name(name) is expected

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="valid: type"):
            ConstructKind.from_name("field")


class TestSourceSpan:
    def test_shifted(self):
        assert SourceSpan(3, 4, 9).shifted(2) == SourceSpan(5, 4, 11)

    def test_zero_shift_is_identity(self):
        span = SourceSpan(1, 0, 1)
        assert span.shifted(0) is span


class TestDocumentationPresence:
    def test_no_documentation(self, make_construct):
        assert not make_construct(ConstructKind.TYPE, "A").has_documentation

    @pytest.mark.parametrize("text", ["///", "///   \n///", "/** */"])
    def test_empty_block_is_not_documentation(self, make_construct, text):
        construct = make_construct(ConstructKind.TYPE, "A", documentation=text)
        assert not construct.has_documentation

    def test_slash_block(self, make_construct):
        construct = make_construct(
            ConstructKind.TYPE, "A", documentation="/// <summary>The a.</summary>"
        )
        assert construct.has_documentation

    def test_content_strips_markers(self):
        text = "/// <summary>\n///   The a.\n/// </summary>"
        assert documentation_content(text) == "<summary>\nThe a.\n</summary>"

    def test_content_of_star_block(self):
        text = "/**\n * <summary>The a.</summary>\n */"
        assert documentation_content(text) == "<summary>The a.</summary>"


class TestTraversal:
    @pytest.fixture
    def tree(self, make_construct, make_tree):
        inner = make_construct(
            ConstructKind.TYPE,
            "Inner",
            children=(make_construct(ConstructKind.ROUTINE, "Deep"),),
        )
        outer = make_construct(
            ConstructKind.TYPE,
            "Outer",
            children=(
                make_construct(ConstructKind.ROUTINE, "First"),
                inner,
                make_construct(ConstructKind.PROPERTY, "Last"),
            ),
        )
        return make_tree("", outer, make_construct(ConstructKind.ENUMERATION, "Tail"))

    def test_pre_order(self, tree):
        assert [c.identifier for c in tree.walk()] == [
            "Outer", "First", "Inner", "Deep", "Last", "Tail",
        ]

    def test_node_ids_follow_walk(self, tree):
        assert [c.node_id for c in tree.walk()] == list(range(6))

    def test_find(self, tree):
        assert tree.find(3).identifier == "Deep"
        assert tree.find(42) is None
