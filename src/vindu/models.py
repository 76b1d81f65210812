"""
Triple model for vindu.

In-memory representation of the RDF terms and triples returned by a
CBD describe query:
- IRIs (named nodes), compared by exact IRI string
- Blank nodes, compared by their local label
- Literals with optional datatype and language tag

Terms are built from pyoxigraph's parsed nodes and are immutable.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

import pyoxigraph as oxigraph


XSD_STRING = "http://www.w3.org/2001/XMLSchema#string"

# Escapes shared by Turtle ECHAR and JSON strings
_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\b': '\\b',
    '\f': '\\f',
}


def quote_literal(value: str) -> str:
    """
    Quote a literal's lexical value.

    This is the one quoting primitive for every literal in a rendering.
    Backslashes, double quotes and control characters are escaped, so
    unescaping the result reproduces ``value`` exactly.
    """
    out = []
    for ch in value:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20 or ch == '\x7f':
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + ''.join(out) + '"'


class TermKind(IntEnum):
    """RDF term kind enumeration."""
    IRI = 0
    LITERAL = 1
    BNODE = 2


@dataclass(frozen=True, slots=True)
class Term:
    """
    An RDF term.

    Attributes:
        kind: The type of term (IRI, LITERAL, BNODE)
        lex: Lexical form (IRI string, literal value, bnode label)
        datatype: Datatype IRI (for typed literals)
        lang: Language tag (for language-tagged literals)
    """
    kind: TermKind
    lex: str
    datatype: Optional[str] = None
    lang: Optional[str] = None

    @classmethod
    def iri(cls, value: str) -> "Term":
        """Create an IRI term."""
        return cls(kind=TermKind.IRI, lex=value)

    @classmethod
    def literal(
        cls,
        value: str,
        datatype: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> "Term":
        """Create a literal term."""
        if datatype == XSD_STRING:
            datatype = None
        return cls(kind=TermKind.LITERAL, lex=value, datatype=datatype, lang=lang)

    @classmethod
    def bnode(cls, label: str) -> "Term":
        """Create a blank node term."""
        return cls(kind=TermKind.BNODE, lex=label)

    @classmethod
    def from_oxigraph(cls, node: Any) -> "Term":
        """Convert a pyoxigraph NamedNode, BlankNode or Literal."""
        if isinstance(node, oxigraph.NamedNode):
            return cls.iri(node.value)
        if isinstance(node, oxigraph.BlankNode):
            return cls.bnode(node.value)
        if isinstance(node, oxigraph.Literal):
            datatype = node.datatype.value if node.datatype is not None else None
            return cls.literal(node.value, datatype=datatype, lang=node.language)
        raise TypeError(f"Unsupported RDF term: {node!r}")

    @property
    def is_iri(self) -> bool:
        return self.kind == TermKind.IRI

    @property
    def is_bnode(self) -> bool:
        return self.kind == TermKind.BNODE

    @property
    def is_literal(self) -> bool:
        return self.kind == TermKind.LITERAL

    def quoted(self) -> str:
        """The literal's lexical value, quoted."""
        return quote_literal(self.lex)

    def __str__(self) -> str:
        # N-Triples form
        if self.kind == TermKind.IRI:
            return f"<{self.lex}>"
        if self.kind == TermKind.BNODE:
            return f"_:{self.lex}"
        text = quote_literal(self.lex)
        if self.lang:
            return f"{text}@{self.lang}"
        if self.datatype:
            return f"{text}^^<{self.datatype}>"
        return text


@dataclass(frozen=True, slots=True)
class Triple:
    """A single (subject, predicate, object) statement."""
    subject: Term
    predicate: Term
    object: Term

    @classmethod
    def from_oxigraph(cls, quad: Any) -> "Triple":
        """Convert a parsed pyoxigraph Triple or Quad (graph is dropped)."""
        return cls(
            subject=Term.from_oxigraph(quad.subject),
            predicate=Term.from_oxigraph(quad.predicate),
            object=Term.from_oxigraph(quad.object),
        )

    def __str__(self) -> str:
        return f"{self.subject} {self.predicate} {self.object} ."
