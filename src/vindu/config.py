"""
Server configuration for vindu.

Provides:
- Defaults for the graph, SPARQL endpoint and resource base
- Loading from environment variables
- Dict round-trip for logging and tests
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_GRAPH = "lsext"
DEFAULT_SPARQL_ENDPOINT = "http://virtuoso:8890/sparql/"
DEFAULT_BASE = "http://data.deichman.no"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 7777

ENV_PREFIX = "VINDU_"


@dataclass
class ServerConfig:
    """Configuration for one vindu server."""
    graph: str = DEFAULT_GRAPH
    sparql_endpoint: str = DEFAULT_SPARQL_ENDPOINT
    base: str = DEFAULT_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self):
        self.base = self.base.rstrip("/")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")

    def resource_iri(self, path: str) -> str:
        """IRI of the resource served at ``/<path>``."""
        return f"{self.base}/{path.lstrip('/')}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "graph": self.graph,
            "sparql_endpoint": self.sparql_endpoint,
            "base": self.base,
            "timeout_seconds": self.timeout_seconds,
            "host": self.host,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerConfig":
        return cls(
            graph=data.get("graph", DEFAULT_GRAPH),
            sparql_endpoint=data.get("sparql_endpoint", DEFAULT_SPARQL_ENDPOINT),
            base=data.get("base", DEFAULT_BASE),
            timeout_seconds=float(data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
            host=data.get("host", DEFAULT_HOST),
            port=int(data.get("port", DEFAULT_PORT)),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Build a configuration from ``VINDU_*`` environment variables.

        Recognised: VINDU_GRAPH, VINDU_SPARQL_ENDPOINT, VINDU_BASE,
        VINDU_TIMEOUT, VINDU_HOST. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for key, name in (
            ("graph", "GRAPH"),
            ("sparql_endpoint", "SPARQL_ENDPOINT"),
            ("base", "BASE"),
            ("timeout_seconds", "TIMEOUT"),
            ("host", "HOST"),
        ):
            value = env.get(ENV_PREFIX + name)
            if value:
                data[key] = value
        config = cls.from_dict(data)
        logger.debug(f"Loaded configuration: {config.to_dict()}")
        return config
