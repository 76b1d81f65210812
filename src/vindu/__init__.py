"""
vindu: browsable windows onto linked-data resources in a SPARQL store.

Fetches the Concise Bounded Description of a resource and serves it either
as the store's own serialization or as a Turtle-like HTML view.
"""

__version__ = "0.1.0"

from vindu.models import Term, TermKind, Triple, quote_literal
from vindu.prefixes import PrefixCompactor, DEFAULT_PREFIXES
from vindu.linkify import Link, Linkifier, RESOURCE_CATEGORIES
from vindu.describe import Description, Clause, ClassName, CycleRef, sort_triples, describe, format_description, render
from vindu.config import ServerConfig

__all__ = [
    "Term",
    "TermKind",
    "Triple",
    "quote_literal",
    "PrefixCompactor",
    "DEFAULT_PREFIXES",
    "Link",
    "Linkifier",
    "RESOURCE_CATEGORIES",
    # Renderer
    "Description",
    "Clause",
    "ClassName",
    "CycleRef",
    "sort_triples",
    "describe",
    "format_description",
    "render",
    "ServerConfig",
]
