"""Shared fixtures: sample describe results and a recording fake store."""

import httpx
import pytest

from vindu.config import ServerConfig
from vindu.sparql import SparqlClient


PERSON_NT = b"""\
<http://data.deichman.no/person/p1> <http://data.deichman.no/ontology#name> "Alice" .
<http://data.deichman.no/person/p1> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> <http://data.deichman.no/ontology#Person> .
<http://data.deichman.no/person/p1> <http://data.deichman.no/ontology#creatorOf> <http://data.deichman.no/work/w1> .
<http://data.deichman.no/person/p1> <http://data.deichman.no/ontology#role> _:r1 .
_:r1 <http://data.deichman.no/ontology#name> "author" .
"""

PERSON_TTL = b"""\
@prefix deich: <http://data.deichman.no/ontology#> .
<http://data.deichman.no/person/p1> a deich:Person ;
    deich:name "Alice" .
"""

PERSON_RDFXML = b"""\
<?xml version="1.0" encoding="utf-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:deich="http://data.deichman.no/ontology#">
  <rdf:Description rdf:about="http://data.deichman.no/person/p1">
    <deich:name>Alice</deich:name>
  </rdf:Description>
</rdf:RDF>
"""

EMPTY_RDFXML = b"""\
<?xml version="1.0" encoding="utf-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
</rdf:RDF>
"""


class FakeStore:
    """A SPARQL endpoint stand-in that records every request."""

    def __init__(self, bodies=None, status_code=200, error=None):
        self.bodies = bodies or {}
        self.status_code = status_code
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        fmt = request.url.params.get("format")
        return httpx.Response(self.status_code, content=self.bodies.get(fmt, b""))

    def client(self, config: ServerConfig) -> SparqlClient:
        return SparqlClient(config, transport=httpx.MockTransport(self))


@pytest.fixture
def config():
    return ServerConfig(sparql_endpoint="http://store.test/sparql/", graph="lsext", timeout_seconds=5.0)


@pytest.fixture
def person_store():
    return FakeStore({
        "text/plain": PERSON_NT,
        "text/turtle": PERSON_TTL,
        "application/rdf+xml": PERSON_RDFXML,
    })


@pytest.fixture
def empty_store():
    return FakeStore({
        "text/plain": b"",
        "text/turtle": b"@prefix deich: <http://data.deichman.no/ontology#> .\n",
        "application/rdf+xml": EMPTY_RDFXML,
    })
