"""
SPARQL describe client.

Issues the CBD describe query for one resource against the configured
endpoint and decodes the answer into the triple model:
- One synchronous POST per request, bounded by a timeout
- No retries and no caching
- Decoding through pyoxigraph's parsers
"""

from __future__ import annotations

import logging
import re
import time
from typing import Dict, List, Optional

import httpx
import pyoxigraph as oxigraph

from vindu.config import ServerConfig
from vindu.errors import DecodeError, QueryConstructionError, UpstreamError
from vindu.models import Triple
from vindu.negotiation import RDF_XML, TEXT_PLAIN, TEXT_TURTLE

logger = logging.getLogger(__name__)

DESCRIBE_QUERY = 'DEFINE sql:describe-mode "CBD" DESCRIBE <{iri}>'

# Response formats the store can be asked for, by media type
RDF_FORMATS: Dict[str, oxigraph.RdfFormat] = {
    TEXT_PLAIN: oxigraph.RdfFormat.N_TRIPLES,
    TEXT_TURTLE: oxigraph.RdfFormat.TURTLE,
    RDF_XML: oxigraph.RdfFormat.RDF_XML,
}


# Characters that may not appear inside an IRIREF
IRI_FORBIDDEN = re.compile(r'[\s\x00-\x20<>"{}|^`\\]')


def build_describe_query(iri: str) -> str:
    """
    CBD describe query for ``iri`` (Virtuoso dialect).

    Raises:
        QueryConstructionError: If ``iri`` cannot be written as an IRIREF
    """
    if IRI_FORBIDDEN.search(iri):
        raise QueryConstructionError(f"Invalid resource IRI: {iri!r}")
    return DESCRIBE_QUERY.format(iri=iri)


def decode_triples(
    body: bytes,
    media_type: str = TEXT_PLAIN,
    base_iri: Optional[str] = None,
) -> List[Triple]:
    """
    Decode a describe response into triples, in document order.

    Args:
        body: Raw response body
        media_type: One of text/plain (N-Triples), text/turtle, application/rdf+xml
        base_iri: Base for resolving relative IRIs

    Returns:
        List of Triple

    Raises:
        DecodeError: If the body is not valid RDF in that format
    """
    rdf_format = RDF_FORMATS.get(media_type)
    if rdf_format is None:
        raise DecodeError(f"Unsupported RDF media type: {media_type}")
    if not body.strip():
        return []
    try:
        return [
            Triple.from_oxigraph(quad)
            for quad in oxigraph.parse(body, rdf_format, base_iri=base_iri)
        ]
    except (SyntaxError, ValueError, TypeError) as e:
        logger.warning(f"Could not decode {media_type} response: {e}")
        raise DecodeError(str(e)) from e


class SparqlClient:
    """
    Client for the store's SPARQL endpoint.

    Wraps one ``httpx.Client``; its connection pool is safe to share between
    the server's worker threads.
    """

    def __init__(
        self,
        config: ServerConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.Client(
            timeout=config.timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def params(self, iri: str, upstream_format: str) -> Dict[str, str]:
        """Query-string parameters of the describe request."""
        return {
            "query": build_describe_query(iri),
            "default-graph-uri": self.config.graph,
            "format": upstream_format,
        }

    def describe(self, iri: str, upstream_format: str) -> bytes:
        """
        Fetch the CBD of ``iri`` serialized as ``upstream_format``.

        Raises:
            QueryConstructionError: If the request cannot be built
            UpstreamError: On transport failure, timeout or error status
        """
        try:
            request = self._client.build_request(
                "POST",
                self.config.sparql_endpoint,
                params=self.params(iri, upstream_format),
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise QueryConstructionError(str(e)) from e

        start_time = time.time()
        try:
            response = self._client.send(request)
            response.raise_for_status()
        except httpx.UnsupportedProtocol as e:
            raise QueryConstructionError(str(e)) from e
        except httpx.HTTPError as e:
            logger.warning(f"Describe of {iri} failed: {e}")
            raise UpstreamError(str(e)) from e

        execution_time = (time.time() - start_time) * 1000
        logger.debug(
            f"Described {iri} as {upstream_format}: "
            f"{len(response.content)} bytes in {execution_time:.1f}ms"
        )
        return response.content
