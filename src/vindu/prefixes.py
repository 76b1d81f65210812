"""
Prefix compaction for predicate display.

Maps a fixed set of well-known namespaces to short tokens. The table is
built once and shared read-only by every request.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"

# (namespace, token) in match order
DEFAULT_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("http://data.deichman.no/ontology#", "deich:"),
    (RDF_TYPE, "a"),
    ("http://data.deichman.no/raw#", "raw:"),
    ("http://migration.deichman.no/", "migration:"),
)


@dataclass(frozen=True)
class PrefixCompactor:
    """
    Exact-prefix rewrite of IRIs into short tokens.

    The first table entry whose namespace prefixes the IRI wins. The
    rdf:type IRI is a whole-IRI entry: it only matches itself.
    """
    table: Tuple[Tuple[str, str], ...] = DEFAULT_PREFIXES

    def match(self, iri: str) -> Optional[Tuple[str, str]]:
        for namespace, token in self.table:
            if namespace == RDF_TYPE:
                if iri == RDF_TYPE:
                    return namespace, token
            elif iri.startswith(namespace):
                return namespace, token
        return None

    def compact(self, iri: str) -> str:
        """Compacted form of ``iri``, or ``iri`` unchanged if nothing matches."""
        found = self.match(iri)
        if found is None:
            return iri
        namespace, token = found
        return token + iri[len(namespace):]

    def display(self, iri: str) -> str:
        """Compacted token, or the full IRI in angle brackets."""
        if self.match(iri) is None:
            return f"<{iri}>"
        return self.compact(iri)

    def declarations(self) -> Iterator[Tuple[str, str]]:
        """(token, namespace) pairs suitable for ``@prefix`` lines."""
        for namespace, token in self.table:
            if token.endswith(":"):
                yield token, namespace
