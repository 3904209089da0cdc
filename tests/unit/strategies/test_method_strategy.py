"""
Tests for MethodDocumentationStrategy.

Test Strategy
-------------
- Build Construct records directly (no parser needed)
- Check the generated features, not the rendering details
- Cover each branch of the Returns cascade

Organization
------------
- TestMethodSummary: summary sentence and body comments
- TestMethodReturns: the Returns cascade
- TestMethodParameters: params and type params
- TestMethodExceptions: exception extraction
"""

import pytest

from docforge.core.config.documentation import (
    MethodDocumentationOptions,
    MethodSummaryOptions,
    TemplateOptions,
    ToggleOptions,
)
from docforge.format.formatter import Formatter
from docforge.strategies.method import MethodDocumentationStrategy
from docforge.syntax.constructs import (
    ConstructKind,
    FunctionBody,
    ReturnSite,
    ThrowSite,
)


@pytest.fixture
def strategy() -> MethodDocumentationStrategy:
    return MethodDocumentationStrategy(MethodDocumentationOptions(), Formatter())


@pytest.fixture
def method(make_construct):
    def _method(name="GetName", return_type="string", **kwargs):
        return make_construct(
            ConstructKind.ROUTINE, name, return_type=return_type, **kwargs
        )

    return _method


# ============================================================================
# Test Classes
# ============================================================================


class TestMethodSummary:
    def test_supported_kinds(self, strategy):
        assert strategy.supported_kinds == frozenset({ConstructKind.ROUTINE})

    def test_summary_from_name(self, strategy, method):
        features = strategy.document(method()).features
        assert features.summary == ("Gets the name",)

    def test_summary_names_first_parameter(self, strategy, method):
        construct = method("ExtractAttributes", parameters=["node", "depth"])
        assert strategy.document(construct).features.summary == (
            "Extracts the attributes using the specified node",
        )

    def test_non_latin_name_still_summarized(self, strategy, method):
        construct = method("Получить", return_type="void")
        assert strategy.document(construct).features.summary == ("Получить",)

    def test_plural_name_not_conjugated(self, strategy, method):
        construct = method("Values", return_type="void")
        assert strategy.document(construct).features.summary == ("Values",)

    def test_body_comments_ignored_by_default(self, strategy, method):
        body = FunctionBody(comments=("// reads the cache",))
        features = strategy.document(method(body=body)).features
        assert features.summary == ("Gets the name",)

    def test_body_comments_included_when_enabled(self, method):
        options = MethodDocumentationOptions(
            summary=MethodSummaryOptions(include_comments=True)
        )
        strategy = MethodDocumentationStrategy(options, Formatter())
        body = FunctionBody(comments=("// reads the cache", "//", "//  falls back"))
        features = strategy.document(method(body=body)).features
        assert features.summary == ("Gets the name", "Reads the cache", "Falls back")

    def test_apply_returns_documented_copy(self, strategy, method):
        construct = method()
        result = strategy.apply(construct)
        assert construct.documentation is None
        assert result.construct.has_documentation
        assert result.construct.node_id == construct.node_id
        assert "/// <summary>" in result.construct.documentation


class TestMethodReturns:
    def test_boolean_is_prefix(self, strategy, method):
        body = FunctionBody(returns=(ReturnSite("_ready", is_identifier=True),))
        construct = method("IsReady", "bool", parameters=[("timeout", "int")], body=body)
        assert (
            strategy.document(construct).features.returns
            == "true if this instance is [ready]; otherwise, false."
        )

    def test_last_returned_identifier(self, strategy, method):
        body = FunctionBody(
            returns=(
                ReturnSite("count", is_identifier=True),
                ReturnSite("totalAmount", is_identifier=True),
                ReturnSite("0"),
            )
        )
        construct = method("Compute", "int", body=body)
        assert strategy.document(construct).features.returns == "The total amount"

    def test_returns_template_applied(self, method):
        options = MethodDocumentationOptions(returns=TemplateOptions("Returns the {name}"))
        strategy = MethodDocumentationStrategy(options, Formatter())
        body = FunctionBody(returns=(ReturnSite("result", is_identifier=True),))
        construct = method("Compute", "int", body=body)
        assert strategy.document(construct).features.returns == "Returns the result"

    def test_falls_back_to_declared_type(self, strategy, method):
        body = FunctionBody(returns=(ReturnSite("new Mapping<Key, Value>()"),))
        construct = method("Find", "Mapping<Key, Value>", body=body)
        assert strategy.document(construct).features.returns == "a mapping of key and value"

    def test_expression_body_uses_declared_type(self, strategy, method):
        construct = method("GetName", "string", body=FunctionBody(is_block=False))
        assert strategy.document(construct).features.returns == "the string"

    @pytest.mark.parametrize("return_type", ["void", "Task", "ValueTask"])
    def test_no_returns(self, strategy, method, return_type):
        body = FunctionBody(returns=(ReturnSite("result", is_identifier=True),))
        construct = method("Save", return_type, body=body)
        comment = strategy.document(construct)
        assert comment.features.returns is None
        assert "<returns>" not in comment.render()

    def test_async_value(self, strategy, method):
        body = FunctionBody(returns=(ReturnSite("count", is_identifier=True),))
        construct = method("CountAsync", "Task<int>", body=body)
        assert (
            strategy.document(construct).features.returns
            == "a Task<int> representing the asynchronous operation."
        )


class TestMethodParameters:
    def test_params_in_declaration_order(self, strategy, method):
        construct = method(
            "Save", "void", parameters=[("firstName", "string"), ("age", "int"), "id"]
        )
        params = strategy.document(construct).features.params
        assert [(p.name, p.description) for p in params] == [
            ("firstName", "The first name"),
            ("age", "The age"),
            ("id", "The id"),
        ]

    def test_type_params(self, strategy, method):
        construct = method("Convert", "TResult", type_parameters=("TSource", "TResult"))
        type_params = strategy.document(construct).features.type_params
        assert [(p.name, p.description) for p in type_params] == [
            ("TSource", "The T source"),
            ("TResult", "The T result"),
        ]


class TestMethodExceptions:
    def test_block_body_exceptions_sorted(self, strategy, method):
        body = FunctionBody(
            throws=(
                ThrowSite("ArgumentNullException", "value"),
                ThrowSite("InvalidOperationException", "closed"),
                ThrowSite("ArgumentException", "closed"),
            )
        )
        exceptions = strategy.document(method(body=body)).features.exceptions
        assert [(e.message, e.type) for e in exceptions] == [
            ("closed", "ArgumentException"),
            ("closed", "InvalidOperationException"),
            ("value", "ArgumentNullException"),
        ]

    def test_expression_body_not_scanned(self, strategy, method):
        body = FunctionBody(
            is_block=False, throws=(ThrowSite("InvalidOperationException", "x"),)
        )
        assert strategy.document(method(body=body)).features.exceptions == ()

    def test_exceptions_disabled(self, method):
        options = MethodDocumentationOptions(exceptions=ToggleOptions(enabled=False))
        strategy = MethodDocumentationStrategy(options, Formatter())
        body = FunctionBody(throws=(ThrowSite("ArgumentException", "bad"),))
        assert strategy.document(method(body=body)).features.exceptions == ()
