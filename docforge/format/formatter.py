"""
Text humanization primitives.

Every generated sentence goes through the Formatter: identifiers and type
names are split into words, verbs are conjugated, articles chosen and
sentences finished. All functions are deterministic: identical input always
yields identical output, and the Formatter holds no state between calls.

Examples
--------
    >>> f = Formatter()
    >>> f.humanize("HTTPClientFactory")
    'HTTP client factory'
    >>> f.conjugate_third_person_singular("apply")
    'applies'
    >>> f.humanize_returns_type("Mapping<Key, Value>")
    'a mapping of key and value'
    >>> f.format_method("ExtractAttributes", ["node"])
    'Extracts the attributes using the specified node'

Rules that look odd are deliberate: the article heuristic looks at spelling
only ("user" gets "an", "hour" gets "a"), and single-letter tokens left over
from splitting generic names are dropped.
"""

import re
from enum import Enum
from typing import Iterable, Optional, Sequence

# Runs of letters and digits; underscores and punctuation separate words
TOKEN_PATTERN = re.compile(r"[^\W_]+")
NAMESPACE_PATTERN = re.compile(r"\b[^\W\d]\w*\.(?=[^\W\d])")

VOWELS = frozenset("aeiou")

IRREGULAR_VERBS = {
    "be": "is",
    "have": "has",
    "do": "does",
    "go": "goes",
}

# Leading words that read as a question rather than an action
PREDICATE_PREFIXES = frozenset({"is", "has", "can", "should", "are", "was", "were"})

TEST_ATTRIBUTES = frozenset({"fact", "theory", "test", "testmethod", "testcase"})

BOOLEAN_TYPES = frozenset({"bool", "boolean", "system.boolean"})

CSHARP_TYPE_ALIASES = {
    "bool": "System.Boolean",
    "byte": "System.Byte",
    "sbyte": "System.SByte",
    "char": "System.Char",
    "decimal": "System.Decimal",
    "double": "System.Double",
    "float": "System.Single",
    "int": "System.Int32",
    "uint": "System.UInt32",
    "nint": "System.IntPtr",
    "nuint": "System.UIntPtr",
    "long": "System.Int64",
    "ulong": "System.UInt64",
    "short": "System.Int16",
    "ushort": "System.UInt16",
    "object": "System.Object",
    "dynamic": "System.Object",
    "string": "System.String",
}


class ReturnKind(str, Enum):
    """Classification of a declared return type."""

    NO_VALUE = "no_value"
    ASYNC_NO_VALUE = "async_no_value"
    ASYNC_VALUE = "async_value"
    VALUE = "value"


def classify_return_type(return_type: str) -> ReturnKind:
    """Classify a return type as void, Task, Task<T> or a plain value."""
    text = return_type.strip()
    bare = NAMESPACE_PATTERN.sub("", text)
    lowered = bare.lower()

    if lowered == "void":
        return ReturnKind.NO_VALUE
    if lowered in ("task", "valuetask"):
        return ReturnKind.ASYNC_NO_VALUE
    if bare.startswith(("Task<", "ValueTask<")) and bare.endswith(">"):
        return ReturnKind.ASYNC_VALUE
    return ReturnKind.VALUE


class Formatter:
    """Deterministic natural-language helpers shared by all strategies."""

    def split_words(self, text: str) -> list[str]:
        """Split an identifier on casing and separator boundaries.

        Letters of any script count: ``ÉtatInitial`` -> ``['État', 'Initial']``.
        """
        words: list[str] = []
        for token in TOKEN_PATTERN.findall(text):
            words.extend(_split_token(token))
        return words

    def humanize(self, text: str, separator: str = " ") -> str:
        """
        Turn an identifier or type token into lower-case words.

        Acronyms (all-caps words) keep their casing.

        Args:
            text: Identifier such as ``GetHTTPResponse`` or ``user_id``.
            separator: String placed between words.

        Returns:
            Humanized words, e.g. ``get HTTP response``.
        """
        words = [w if w.isupper() else w.lower() for w in self.split_words(text)]
        return separator.join(words)

    def humanize_identifier(self, name: str) -> str:
        """Humanize a declared name; names without words are kept as written."""
        return self.humanize(name) or name.strip()

    def remove_single_chars(self, text: str) -> str:
        """Drop one-character tokens (``I enumerable`` -> ``enumerable``)."""
        return " ".join(t for t in text.split(" ") if len(t) > 1)

    def conjugate_third_person_singular(self, verb: str) -> str:
        """Map a bare verb root to its third-person singular form.

        The case of the first letter is preserved: ``Get`` -> ``Gets``.
        Words outside English spelling and words already ending in ``s``
        (``Values``, but not ``Process`` or ``Focus``) are returned unchanged.
        """
        if not verb or not verb.isascii():
            return verb

        lowered = verb.lower()
        if re.search(r"[^su]s$", lowered) and not lowered.endswith("is"):
            return verb
        if lowered in IRREGULAR_VERBS:
            result = IRREGULAR_VERBS[lowered]
        elif re.search(r"(?:s|x|z|ch|sh|o)$", lowered):
            result = lowered + "es"
        elif re.search(r"[^aeiou]y$", lowered):
            result = lowered[:-1] + "ies"
        else:
            result = lowered + "s"

        if verb[0].isupper():
            return result[0].upper() + result[1:]
        return result

    def article_for(self, phrase: str) -> str:
        """``an`` iff the phrase starts with a vowel letter, else ``a``."""
        first = phrase.strip()[:1].lower()
        return "an" if first in VOWELS else "a"

    def finish_sentence(self, text: str) -> str:
        """Capitalize the first letter of a rendered sentence."""
        text = text.strip()
        return text[:1].upper() + text[1:]

    def render_template(self, template: str, **values: str) -> str:
        """Substitute ``{key}`` placeholders verbatim."""
        result = template
        for key, value in values.items():
            result = result.replace("{" + key + "}", value)
        return re.sub(r"\s{2,}", " ", result).strip()

    def format_name(self, template: str, **values: str) -> str:
        """Substitute humanized values into a template.

        ``format_name("The {name}", name="returnsType")`` -> ``The returns type``.
        """
        humanized = {
            key: self.humanize_identifier(value) for key, value in values.items()
        }
        return self.render_template(template, **humanized)

    def humanize_list(self, names: Sequence[str]) -> str:
        """Humanize names and join them: ``a``, ``a and b``, ``a, b and c``."""
        words = [self.humanize_identifier(n) for n in names if n]
        if len(words) <= 1:
            return "".join(words)
        return ", ".join(words[:-1]) + " and " + words[-1]

    def format_method(
        self,
        name: str,
        parameters: Sequence[str] = (),
        attributes: Iterable[str] = (),
    ) -> str:
        """
        Build the summary sentence of a method from its name.

        The first word is read as a verb and conjugated; the remaining words
        become its object. The first parameter, when present, is named with
        ``using the specified``. Test methods and predicate-style names get
        dedicated phrasings. A trailing ``Async`` is ignored.

        Args:
            name: Method identifier.
            parameters: Parameter names in declaration order.
            attributes: Attribute names (``Fact``, ``TestMethod``...).

        Returns:
            A finished sentence, e.g. ``Gets the supported kinds``.
        """
        words = self.humanize(name).split()
        if len(words) > 1 and words[-1].lower() == "async":
            words = words[:-1]
        if not words:
            return self.finish_sentence(name)

        first_param = self.humanize_identifier(parameters[0]) if parameters else ""
        attribute_names = {_attribute_key(a) for a in attributes}

        if attribute_names & TEST_ATTRIBUTES:
            sentence = "Tests that " + " ".join(words)
        elif words[0].lower() in PREDICATE_PREFIXES:
            sentence = "Describes whether " + " ".join(words)
        else:
            verb = self.conjugate_third_person_singular(words[0])
            rest = " ".join(words[1:])
            if rest:
                sentence = f"{verb} the {rest}"
                if first_param:
                    sentence += f" using the specified {first_param}"
            elif first_param:
                sentence = f"{verb} the {first_param}"
            else:
                sentence = verb

        return self.finish_sentence(sentence)

    def format_boolean_returns(self, name: str) -> str:
        """Returns phrase for ``IsReady``-style predicates."""
        state = self.humanize(name[2:])
        return f"true if this instance is [{state}]; otherwise, false."

    def is_boolean_predicate(self, return_type: str, name: str) -> bool:
        """True for a boolean method whose name starts with ``is``."""
        return (
            return_type.strip().lower() in BOOLEAN_TYPES
            and name.lower().startswith("is")
            and len(name) > 2
        )

    def humanize_returns_type(self, return_type: str) -> Optional[str]:
        """
        Describe a declared return type in words.

        Args:
            return_type: Type text such as ``int[]`` or ``Mapping<Key, Value>``.

        Returns:
            None for ``void``/``Task``/``ValueTask``; a fixed asynchronous
            phrase for ``Task<T>``; otherwise a lower-case description.
        """
        text = return_type.strip()
        kind = classify_return_type(text)
        if kind in (ReturnKind.NO_VALUE, ReturnKind.ASYNC_NO_VALUE):
            return None
        if kind is ReturnKind.ASYNC_VALUE:
            return f"a {text} representing the asynchronous operation."

        text = NAMESPACE_PATTERN.sub("", text)
        if "[]" in text:
            text = re.sub(r"\s*\[\]", " array of ", text)

        if "<" in text and ">" in text:
            keywords = [
                self.humanize(k) for k in re.split(r"[<>]", text.replace(",", " and "))
            ]
            generic_type = self.remove_single_chars(keywords[0]) or keywords[0]
            inner = " ".join(k for k in keywords[1:] if k)
            description = f"{self.article_for(generic_type)} {generic_type} of {inner}"
        else:
            humanized = self.humanize(text)
            description = f"the {self.remove_single_chars(humanized) or humanized}"

        description = re.sub(r"\s+", " ", description).strip()
        return re.sub(r"\s+of$", "", description)

    def qualified_type_name(self, type_name: Optional[str]) -> Optional[str]:
        """
        Resolve a declared type to its qualified name.

        C# keyword aliases map to their ``System`` types and dotted names are
        already qualified. Generic, array and plain user types are not
        resolvable here and return None.
        """
        if not type_name:
            return None
        text = type_name.strip().rstrip("?")
        if any(c in text for c in "<>[],"):
            return None
        if text in CSHARP_TYPE_ALIASES:
            return CSHARP_TYPE_ALIASES[text]
        if "." in text:
            return text
        return None


def _split_token(token: str) -> list[str]:
    """Split a run of letters and digits at case and digit boundaries.

    An acronym ends before a capitalized word (``HTTPClient``); letters
    without case (CJK) stay with the word before them.
    """
    words = []
    i, n = 0, len(token)
    while i < n:
        j = i
        if token[i].isdigit():
            while j < n and token[j].isdigit():
                j += 1
        else:
            while j < n and token[j].isupper():
                j += 1
            if j - i > 1 and j < n and not token[j].isdigit():
                j -= 1
            if j - i <= 1:
                while j < n and not token[j].isupper() and not token[j].isdigit():
                    j += 1
        words.append(token[i:j])
        i = j
    return words


def _attribute_key(attribute: str) -> str:
    name = attribute.split(".")[-1].strip("[] ").lower()
    if name.endswith("attribute") and name != "attribute":
        name = name[: -len("attribute")]
    return name
