"""
Linkifier: decides whether an IRI names another resource served here.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple


RESOURCE_CATEGORIES: Tuple[str, ...] = (
    "place",
    "publication",
    "work",
    "person",
    "corporation",
    "subject",
    "genre",
    "serial",
)


@dataclass(frozen=True)
class Link:
    """An IRI ready for display; ``href`` is None when it is not browsable."""
    text: str
    href: Optional[str] = None


class Linkifier:
    """
    Pattern match IRIs against ``<base>/<category>/``.

    Matching IRIs get a relative path on this service: the IRI with the
    ``<base>/`` prefix stripped. Nothing is dereferenced.
    """

    def __init__(self, base: str, categories: Tuple[str, ...] = RESOURCE_CATEGORIES):
        self.base = base.rstrip("/")
        self.categories = tuple(categories)
        alternatives = "|".join(re.escape(c) for c in self.categories)
        self._pattern = re.compile(rf"^{re.escape(self.base)}/({alternatives})/")

    def is_browsable(self, iri: str) -> bool:
        return bool(self.categories) and self._pattern.match(iri) is not None

    def link(self, iri: str) -> Link:
        if not self.is_browsable(iri):
            return Link(text=iri)
        return Link(text=iri, href="/" + iri[len(self.base) + 1:])
