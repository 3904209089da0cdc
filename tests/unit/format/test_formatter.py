"""
Tests for the Formatter.

Test Strategy
-------------
- Each humanization rule is tested through the public Formatter methods
- Expected strings are exact: generated documentation is compared verbatim
- Quirks of the spelling-based rules are pinned down, not corrected

Organization
------------
- TestHumanize: word splitting, acronyms, single-char removal
- TestConjugation: third-person singular verbs
- TestArticlesAndSentences: article_for, finish_sentence, templates
- TestFormatMethod: method summary sentences
- TestReturnsType: return type descriptions
- TestQualifiedTypeName: property value type names
"""

import pytest

from docforge.format.formatter import Formatter, ReturnKind, classify_return_type


# ============================================================================
# Test Classes
# ============================================================================


class TestHumanize:
    """Tests for split_words(), humanize() and remove_single_chars()."""

    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("HTTPClientFactory", "HTTP client factory"),
            ("user_id", "user id"),
            ("GetHTTPResponse", "get HTTP response"),
            ("Item2", "item 2"),
            ("IEnumerable", "I enumerable"),
            ("camelCaseName", "camel case name"),
            ("snake-and.dots", "snake and dots"),
        ],
    )
    def test_humanize(self, formatter: Formatter, identifier, expected):
        assert formatter.humanize(identifier) == expected

    def test_custom_separator(self, formatter: Formatter):
        assert formatter.humanize("ReturnsType", separator="_") == "returns_type"

    def test_empty_identifier(self, formatter: Formatter):
        assert formatter.humanize("") == ""

    def test_split_words_keeps_casing(self, formatter: Formatter):
        assert formatter.split_words("parseXMLDocument") == ["parse", "XML", "Document"]

    def test_remove_single_chars(self, formatter: Formatter):
        assert formatter.remove_single_chars("I enumerable") == "enumerable"
        assert formatter.remove_single_chars("a b cd") == "cd"

    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("Größe", "größe"),
            ("ÉtatInitial", "état initial"),
            ("Получить", "получить"),
            ("GetЗначение", "get значение"),
            ("注文", "注文"),
        ],
    )
    def test_non_ascii_letters_kept(self, formatter: Formatter, identifier, expected):
        assert formatter.humanize(identifier) == expected

    def test_split_words_non_ascii_acronym(self, formatter: Formatter):
        assert formatter.split_words("ÜBERGrenze") == ["ÜBER", "Grenze"]

    def test_identifier_without_words_kept(self, formatter: Formatter):
        assert formatter.humanize("_") == ""
        assert formatter.humanize_identifier("_") == "_"
        assert formatter.humanize_identifier("OrderId") == "order id"


class TestConjugation:
    """Tests for conjugate_third_person_singular()."""

    @pytest.mark.parametrize(
        "verb,expected",
        [
            ("get", "gets"),
            ("set", "sets"),
            ("apply", "applies"),
            ("process", "processes"),
            ("fix", "fixes"),
            ("push", "pushes"),
            ("match", "matches"),
            ("echo", "echoes"),
            ("play", "plays"),
            ("go", "goes"),
            ("have", "has"),
            ("be", "is"),
            ("do", "does"),
        ],
    )
    def test_conjugation(self, formatter: Formatter, verb, expected):
        assert formatter.conjugate_third_person_singular(verb) == expected

    def test_preserves_leading_capital(self, formatter: Formatter):
        assert formatter.conjugate_third_person_singular("Get") == "Gets"
        assert formatter.conjugate_third_person_singular("Apply") == "Applies"

    def test_empty_verb(self, formatter: Formatter):
        assert formatter.conjugate_third_person_singular("") == ""

    @pytest.mark.parametrize("word", ["values", "Items", "gets", "does"])
    def test_words_ending_in_s_unchanged(self, formatter: Formatter, word):
        assert formatter.conjugate_third_person_singular(word) == word

    @pytest.mark.parametrize(
        "verb,expected", [("focus", "focuses"), ("pass", "passes")]
    )
    def test_sibilant_s_endings_conjugated(self, formatter: Formatter, verb, expected):
        assert formatter.conjugate_third_person_singular(verb) == expected

    def test_non_english_word_unchanged(self, formatter: Formatter):
        assert formatter.conjugate_third_person_singular("получить") == "получить"


class TestArticlesAndSentences:
    """Tests for article_for(), finish_sentence() and template helpers."""

    @pytest.mark.parametrize(
        "phrase,expected",
        [
            ("item", "an"),
            ("enumerable", "an"),
            ("list", "a"),
            ("mapping", "a"),
            # Spelling, not pronunciation
            ("user", "an"),
            ("hour", "a"),
        ],
    )
    def test_article_for(self, formatter: Formatter, phrase, expected):
        assert formatter.article_for(phrase) == expected

    def test_finish_sentence(self, formatter: Formatter):
        assert formatter.finish_sentence("  gets the name ") == "Gets the name"
        assert formatter.finish_sentence("") == ""

    def test_format_name_humanizes_values(self, formatter: Formatter):
        assert formatter.format_name("The {name}", name="returnsType") == "The returns type"

    def test_render_template_is_verbatim(self, formatter: Formatter):
        result = formatter.render_template(
            "{accessors} the value of the {name}", accessors="gets", name="user name"
        )
        assert result == "gets the value of the user name"

    def test_render_template_collapses_blank_placeholders(self, formatter: Formatter):
        assert formatter.render_template("The {name} {enum_name}", name="red", enum_name="") == "The red"

    @pytest.mark.parametrize(
        "names,expected",
        [
            ([], ""),
            (["repository"], "repository"),
            (["repository", "logger"], "repository and logger"),
            (["first", "secondValue", "third"], "first, second value and third"),
        ],
    )
    def test_humanize_list(self, formatter: Formatter, names, expected):
        assert formatter.humanize_list(names) == expected


class TestFormatMethod:
    """Tests for format_method()."""

    def test_verb_and_object(self, formatter: Formatter):
        assert formatter.format_method("GetSupportedKinds") == "Gets the supported kinds"

    def test_first_parameter_is_named(self, formatter: Formatter):
        result = formatter.format_method("ExtractAttributes", ["node", "options"])
        assert result == "Extracts the attributes using the specified node"

    def test_verb_only_with_parameter(self, formatter: Formatter):
        assert formatter.format_method("Apply", ["node"]) == "Applies the node"

    def test_verb_only(self, formatter: Formatter):
        assert formatter.format_method("Run") == "Runs"

    def test_async_suffix_dropped(self, formatter: Formatter):
        assert formatter.format_method("LoadOrdersAsync") == "Loads the orders"

    def test_acronym_kept(self, formatter: Formatter):
        result = formatter.format_method("GetHTTPResponse", ["requestId"])
        assert result == "Gets the HTTP response using the specified request id"

    def test_predicate_prefix(self, formatter: Formatter):
        result = formatter.format_method("IsBoolStartingWithIs")
        assert result == "Describes whether is bool starting with is"

    @pytest.mark.parametrize("prefix", ["Has", "Can", "Should"])
    def test_other_predicate_prefixes(self, formatter: Formatter, prefix):
        assert formatter.format_method(f"{prefix}Items").startswith("Describes whether")

    @pytest.mark.parametrize(
        "attribute", ["Fact", "Theory", "Test", "TestMethod", "Xunit.FactAttribute"]
    )
    def test_test_attributes(self, formatter: Formatter, attribute):
        result = formatter.format_method("Apply_WithNull_Throws", attributes=[attribute])
        assert result == "Tests that apply with null throws"

    def test_unrelated_attribute_ignored(self, formatter: Formatter):
        result = formatter.format_method("GetName", attributes=["Obsolete"])
        assert result == "Gets the name"

    def test_plural_first_word_not_doubled(self, formatter: Formatter):
        assert formatter.format_method("Values") == "Values"
        assert formatter.format_method("ItemsCount") == "Items the count"

    def test_non_latin_name(self, formatter: Formatter):
        assert formatter.format_method("Получить") == "Получить"
        assert formatter.format_method("ЗагрузитьДанные", ["путь"]) == (
            "Загрузить the данные using the specified путь"
        )

    def test_name_without_words(self, formatter: Formatter):
        assert formatter.format_method("_") == "_"


class TestReturnsType:
    """Tests for humanize_returns_type() and classify_return_type()."""

    @pytest.mark.parametrize(
        "return_type,expected",
        [
            ("Mapping<Key, Value>", "a mapping of key and value"),
            ("IEnumerable<string>", "an enumerable of string"),
            ("List<int>", "a list of int"),
            ("System.Collections.Generic.List<int>", "a list of int"),
            ("int", "the int"),
            ("UserAccount", "the user account"),
            ("int[]", "the int array"),
            ("List<int>[]", "a list of int array"),
            ("T", "the T"),
        ],
    )
    def test_humanized(self, formatter: Formatter, return_type, expected):
        assert formatter.humanize_returns_type(return_type) == expected

    @pytest.mark.parametrize("return_type", ["void", "Task", "ValueTask", " void "])
    def test_no_value(self, formatter: Formatter, return_type):
        assert formatter.humanize_returns_type(return_type) is None

    def test_async_value(self, formatter: Formatter):
        assert (
            formatter.humanize_returns_type("Task<int>")
            == "a Task<int> representing the asynchronous operation."
        )

    @pytest.mark.parametrize(
        "return_type,kind",
        [
            ("void", ReturnKind.NO_VALUE),
            ("Task", ReturnKind.ASYNC_NO_VALUE),
            ("System.Threading.Tasks.Task", ReturnKind.ASYNC_NO_VALUE),
            ("ValueTask<bool>", ReturnKind.ASYNC_VALUE),
            ("TaskResult", ReturnKind.VALUE),
            ("string", ReturnKind.VALUE),
        ],
    )
    def test_classify(self, return_type, kind):
        assert classify_return_type(return_type) is kind

    def test_boolean_predicate(self, formatter: Formatter):
        assert formatter.is_boolean_predicate("bool", "IsReady")
        assert formatter.is_boolean_predicate("System.Boolean", "isReady")
        assert not formatter.is_boolean_predicate("bool", "Is")
        assert not formatter.is_boolean_predicate("int", "IsReady")
        assert not formatter.is_boolean_predicate("bool", "HasItems")

    def test_boolean_returns_phrase(self, formatter: Formatter):
        assert (
            formatter.format_boolean_returns("IsReady")
            == "true if this instance is [ready]; otherwise, false."
        )


class TestQualifiedTypeName:
    """Tests for qualified_type_name()."""

    @pytest.mark.parametrize(
        "type_name,expected",
        [
            ("int", "System.Int32"),
            ("string", "System.String"),
            ("bool?", "System.Boolean"),
            ("float", "System.Single"),
            ("System.IO.Stream", "System.IO.Stream"),
            ("User", None),
            ("List<int>", None),
            ("int[]", None),
            (None, None),
            ("", None),
        ],
    )
    def test_qualified(self, formatter: Formatter, type_name, expected):
        assert formatter.qualified_type_name(type_name) == expected
