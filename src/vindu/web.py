"""
vindu web server

FastAPI application exposing linked-data resources from a SPARQL store.
Provides:
- GET /<path>: the CBD of <base>/<path>, content negotiated between
  N-Triples (text/plain), Turtle, RDF/XML and a browsable HTML view
- GET /favicon.ico: always 404, never queries the store
"""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from vindu import __version__
from vindu.config import ServerConfig
from vindu.describe import render
from vindu.errors import DecodeError, ResourceNotFound, VinduError
from vindu.linkify import Linkifier
from vindu.models import Term
from vindu.negotiation import PassThrough, negotiate
from vindu.page import render_document
from vindu.prefixes import PrefixCompactor
from vindu.sparql import SparqlClient, decode_triples

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ServerConfig] = None,
    client: Optional[SparqlClient] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Server configuration (read from the environment if not provided)
        client: SPARQL client (built from ``config`` if not provided)

    Returns:
        Configured FastAPI application
    """
    config = config or ServerConfig.from_env()
    client = client or SparqlClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        client.close()

    app = FastAPI(
        title="vindu",
        description="Browsable views of linked-data resources",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # State, shared read-only by all requests
    app.state.config = config
    app.state.client = client
    app.state.compactor = PrefixCompactor()
    app.state.linkifier = Linkifier(config.base)

    @app.exception_handler(VinduError)
    async def vindu_error_handler(request: Request, exc: VinduError):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    # ==========================================================================
    # Routes
    # ==========================================================================

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon():
        raise ResourceNotFound()

    @app.get("/{path:path}")
    def resource(path: str, request: Request):
        """Describe the resource at ``<base>/<path>``."""
        logger.info(f"/{path}")
        variant = negotiate(request.headers.get("accept"))
        iri = config.resource_iri(path)

        body = client.describe(iri, variant.upstream_format)
        base_iri = config.base + "/"

        if isinstance(variant, PassThrough):
            # Decoded only to tell an empty description from a real one
            try:
                empty = not decode_triples(body, variant.upstream_format, base_iri=base_iri)
            except DecodeError as e:
                logger.warning(f"Passing through undecodable {variant.media_type} for {iri}: {e.message}")
                empty = False
            if empty:
                raise ResourceNotFound()
            return Response(content=body, media_type=variant.media_type)

        triples = decode_triples(body, variant.upstream_format, base_iri=base_iri)
        if not triples:
            raise ResourceNotFound()

        tree = render(triples, Term.iri(iri), app.state.compactor, app.state.linkifier)
        return HTMLResponse(
            render_document(path, iri, tree, config.base, app.state.compactor)
        )

    return app


def main(argv=None):
    """Run the server with uvicorn."""
    import uvicorn

    defaults = ServerConfig.from_env()
    parser = argparse.ArgumentParser(description="Browsable linked-data views over a SPARQL store")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("--graph", default=defaults.graph, help="Graph to expose")
    parser.add_argument("--sparql", default=defaults.sparql_endpoint, help="SPARQL endpoint address")
    parser.add_argument("--base", default=defaults.base, help="Base IRI of the exposed resources")
    parser.add_argument("--timeout", type=float, default=defaults.timeout_seconds,
                        help="Timeout in seconds for SPARQL requests")
    parser.add_argument("--host", default=defaults.host, help="Interface to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = ServerConfig(
        graph=args.graph,
        sparql_endpoint=args.sparql,
        base=args.base,
        timeout_seconds=args.timeout,
        host=args.host,
    )
    logger.info(f"Serving {config.base} from {config.sparql_endpoint} (graph {config.graph})")
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
