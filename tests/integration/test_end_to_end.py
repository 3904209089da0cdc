"""
End-to-end tests: C# text in, documented C# text out.

Test Strategy
-------------
- Real parser, default configuration, no mocks
- Compare complete output for the shared sample file
- Skipped when the Tree-sitter C# grammar is not installed

Organization
------------
- TestSampleFile: full documentation of the sample source
- TestFileFormats: newline styles and byte order marks on disk
"""

import pytest

from docforge.engine import DocumentationEngine, read_source, write_result

pytest.importorskip("tree_sitter_c_sharp")

EXPECTED = """\
using System;

namespace Shop.Orders
{
    /// <summary>
    /// The order service class
    /// </summary>
    public class OrderService
    {
        /// <summary>
        /// Initializes a new instance of the order service class using the specified repository and logger
        /// </summary>
        /// <param name="repository">The repository</param>
        /// <param name="logger">The logger</param>
        public OrderService(IRepository repository, ILogger logger)
        {
            _repository = repository;
        }

        /// <summary>
        /// Gets or sets the value of the name
        /// </summary>
        /// <value>System.String</value>
        public string Name { get; set; }

        /// <summary>
        /// Describes whether is ready
        /// </summary>
        /// <param name="timeout">The timeout</param>
        /// <returns>true if this instance is [ready]; otherwise, false.</returns>
        public bool IsReady(int timeout)
        {
            return _ready;
        }

        /// <summary>Already documented.</summary>
        public void Cancel()
        {
        }
    }

    /// <summary>
    /// The order state enum
    /// </summary>
    public enum OrderState
    {
        /// <summary>
        /// The open order state
        /// </summary>
        Open,
        /// <summary>
        /// The closed order state
        /// </summary>
        Closed
    }
}
"""


@pytest.fixture
def engine() -> DocumentationEngine:
    return DocumentationEngine()


# ============================================================================
# Test Classes
# ============================================================================


class TestSampleFile:
    def test_full_output(self, engine, sample_source):
        run = engine.document_text(sample_source, "OrderService.cs")
        assert run.tree.text == EXPECTED
        assert run.documented_count == 7
        assert run.warnings == ()

    def test_reparse_finds_nothing_to_do(self, engine, sample_source):
        first = engine.document_text(sample_source)
        second = engine.document_text(first.tree.text)
        assert second.walk.undocumented == ()
        assert second.tree.text == first.tree.text

    def test_rewritten_tree_matches_reparse(self, engine, sample_source):
        run = engine.document_text(sample_source)
        reparsed = engine.parser.parse(run.tree.text)
        assert [(c.identifier, c.span) for c in run.tree.walk()] == [
            (c.identifier, c.span) for c in reparsed.walk()
        ]

    @pytest.mark.parametrize(
        "between", ["// TODO: batch writes", "#pragma warning disable CS0618"]
    )
    def test_documented_member_behind_comment_kept(self, engine, between):
        source = (
            "class Store\n{\n"
            "    /// <summary>Saves.</summary>\n"
            f"    {between}\n"
            "    public void Save() { }\n"
            "}\n"
        )
        run = engine.document_text(source)
        assert [c.identifier for c in run.walk.undocumented] == ["Store"]
        assert run.tree.text.count("<summary>") == 2
        assert run.tree.text.endswith(source[len("class Store\n"):])

    def test_non_ascii_identifiers(self, engine):
        source = (
            "class Größe\n{\n"
            "    public int Länge { get; set; }\n"
            "    void Получить() { }\n"
            "}\n"
        )
        run = engine.document_text(source)
        assert run.warnings == ()
        assert "/// The größe class" in run.tree.text
        assert "/// Gets or sets the value of the länge" in run.tree.text
        assert "/// Получить" in run.tree.text
        assert engine.document_text(run.tree.text).walk.undocumented == ()

    def test_single_line_enum_members_skipped(self, engine):
        run = engine.document_text("enum Color\n{\n    Red, Green\n}\n")
        assert "/// The red color" in run.tree.text
        assert "/// The green color" not in run.tree.text
        assert len(run.warnings) == 1


class TestFileFormats:
    def test_crlf_file(self, engine, temp_dir, sample_source):
        path = temp_dir / "OrderService.cs"
        path.write_bytes(sample_source.replace("\n", "\r\n").encode("utf-8"))
        write_result(engine.document_file(path), path)
        data = path.read_bytes()
        assert data == EXPECTED.replace("\n", "\r\n").encode("utf-8")

    def test_byte_order_mark_preserved(self, engine, temp_dir):
        path = temp_dir / "Cart.cs"
        path.write_bytes(b"\xef\xbb\xbfpublic class Cart\n{\n}\n")
        write_result(engine.document_file(path), path)
        assert path.read_bytes() == (
            b"\xef\xbb\xbf/// <summary>\n/// The cart class\n/// </summary>\n"
            b"public class Cart\n{\n}\n"
        )
        assert read_source(path).startswith("\ufeff///")
