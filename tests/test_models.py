"""Tests for the triple model."""

import json

import pyoxigraph as oxigraph
import pytest

from vindu.models import Term, TermKind, Triple, quote_literal, XSD_STRING


# =============================================================================
# Term Tests
# =============================================================================

class TestTerm:
    """Tests for Term construction and identity."""

    def test_iri(self):
        """Test creating an IRI term."""
        term = Term.iri("http://data.deichman.no/work/w1")
        assert term.kind == TermKind.IRI
        assert term.is_iri
        assert not term.is_bnode
        assert str(term) == "<http://data.deichman.no/work/w1>"

    def test_bnode(self):
        """Test creating a blank node term."""
        term = Term.bnode("b0")
        assert term.is_bnode
        assert str(term) == "_:b0"

    def test_bnode_equality_by_label(self):
        """Blank nodes are equal when their labels are."""
        assert Term.bnode("b0") == Term.bnode("b0")
        assert Term.bnode("b0") != Term.bnode("b1")
        assert Term.bnode("x") != Term.iri("x")

    def test_iri_equality_by_string(self):
        """IRIs are equal when their strings are."""
        assert Term.iri("http://a/") == Term.iri("http://a/")
        assert hash(Term.iri("http://a/")) == hash(Term.iri("http://a/"))

    def test_literal_forms(self):
        """Test N-Triples form of literals."""
        assert str(Term.literal("hi")) == '"hi"'
        assert str(Term.literal("hei", lang="no")) == '"hei"@no'
        assert str(Term.literal("1", datatype="http://www.w3.org/2001/XMLSchema#int")) == \
            '"1"^^<http://www.w3.org/2001/XMLSchema#int>'

    def test_xsd_string_dropped(self):
        """Plain xsd:string literals carry no datatype."""
        assert Term.literal("x", datatype=XSD_STRING) == Term.literal("x")

    def test_immutable(self):
        """Terms cannot be modified."""
        term = Term.iri("http://a/")
        with pytest.raises(Exception):
            term.lex = "http://b/"


# =============================================================================
# Literal Quoting Tests
# =============================================================================

class TestQuoteLiteral:
    """Tests for the literal quoting primitive."""

    def test_plain(self):
        """Test quoting a plain value."""
        assert quote_literal("Alice") == '"Alice"'

    def test_escapes_quotes_and_backslashes(self):
        """Test escaping of quote and backslash."""
        assert quote_literal('say "hi" \\o/') == '"say \\"hi\\" \\\\o/"'

    def test_escapes_newlines(self):
        """Test escaping of line breaks and tabs."""
        assert quote_literal("a\nb\tc\r") == '"a\\nb\\tc\\r"'

    @pytest.mark.parametrize("value", [
        "",
        "Alice",
        'He said "no"',
        "back\\slash",
        "line\nbreak\r\n",
        "bell\x07 and nul\x00",
        "ærøåØ 日本語",
        '"\\"',
    ])
    def test_round_trip(self, value):
        """Unquoting the rendered literal reproduces the value."""
        assert json.loads(quote_literal(value)) == value

    def test_term_quoted(self):
        """Term.quoted uses the shared primitive and ignores lang."""
        term = Term.literal('a "b"', lang="en")
        assert term.quoted() == quote_literal('a "b"')


# =============================================================================
# Conversion Tests
# =============================================================================

class TestFromOxigraph:
    """Tests for converting pyoxigraph terms."""

    def test_named_node(self):
        term = Term.from_oxigraph(oxigraph.NamedNode("http://a/b"))
        assert term == Term.iri("http://a/b")

    def test_blank_node(self):
        term = Term.from_oxigraph(oxigraph.BlankNode("x1"))
        assert term == Term.bnode("x1")

    def test_literal(self):
        term = Term.from_oxigraph(oxigraph.Literal("hei", language="no"))
        assert term.is_literal
        assert term.lex == "hei"
        assert term.lang == "no"

    def test_plain_literal_has_no_datatype(self):
        term = Term.from_oxigraph(oxigraph.Literal("x"))
        assert term.datatype is None

    def test_unsupported(self):
        with pytest.raises(TypeError):
            Term.from_oxigraph("not a term")

    def test_triple(self):
        """Test converting a parsed quad into a Triple."""
        quad = oxigraph.Quad(
            oxigraph.NamedNode("http://a/s"),
            oxigraph.NamedNode("http://a/p"),
            oxigraph.BlankNode("o"),
        )
        triple = Triple.from_oxigraph(quad)
        assert triple.subject == Term.iri("http://a/s")
        assert triple.predicate == Term.iri("http://a/p")
        assert triple.object == Term.bnode("o")
        assert str(triple) == "<http://a/s> <http://a/p> _:o ."
