"""
HTTP content negotiation.

Chooses a response format from the request's Accept header. The outcome is
one of two variants, dispatched once per request:
- PassThrough: stream the store's serialization in that format
- RenderHTML: fetch N-Triples and render the browsable HTML view
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union


TEXT_PLAIN = "text/plain"
TEXT_TURTLE = "text/turtle"
RDF_XML = "application/rdf+xml"
TEXT_HTML = "text/html"

OFFERS: Tuple[str, ...] = (TEXT_PLAIN, TEXT_TURTLE, RDF_XML, TEXT_HTML)
DEFAULT_OFFER = TEXT_PLAIN


@dataclass(frozen=True)
class PassThrough:
    """Return the upstream bytes as they are."""
    media_type: str

    @property
    def upstream_format(self) -> str:
        return self.media_type


@dataclass(frozen=True)
class RenderHTML:
    """Render the description as HTML from an N-Triples fetch."""
    media_type: str = TEXT_HTML
    upstream_format: str = TEXT_PLAIN


Negotiated = Union[PassThrough, RenderHTML]


@dataclass(frozen=True)
class MediaRange:
    """One entry of an Accept header."""
    value: str
    q: float = 1.0

    @property
    def specificity(self) -> int:
        """2 for type/subtype, 1 for type/*, 0 for */*."""
        if self.value == "*/*":
            return 0
        if self.value.endswith("/*"):
            return 1
        return 2

    def matches(self, offer: str) -> bool:
        if self.value == "*/*":
            return True
        if self.value.endswith("/*"):
            return offer.startswith(self.value[:-1])
        return self.value == offer


def parse_accept(header: Optional[str]) -> List[MediaRange]:
    """
    Parse an Accept header into media ranges.

    Parameters other than ``q`` are ignored; a malformed ``q`` counts as 0.
    """
    ranges = []
    if not header:
        return ranges
    for part in header.split(","):
        pieces = [p.strip() for p in part.split(";")]
        value = pieces[0].lower()
        if not value:
            continue
        if "/" not in value:
            # Some clients send a bare "*"
            if value != "*":
                continue
            value = "*/*"
        q = 1.0
        for param in pieces[1:]:
            name, _, raw = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    q = min(max(float(raw.strip()), 0.0), 1.0)
                except ValueError:
                    q = 0.0
        ranges.append(MediaRange(value, q))
    return ranges


def best_offer(
    header: Optional[str],
    offers: Sequence[str] = OFFERS,
    default: str = DEFAULT_OFFER,
) -> str:
    """
    Pick the offer the client prefers.

    Each offer takes the q of its most specific matching range; q=0
    excludes it. Highest q wins, then the more specific match, then the
    earlier offer. With no acceptable offer the default is returned.
    """
    ranges = parse_accept(header)
    best = default
    best_rank = (0.0, -1)
    for offer in offers:
        matching = [r for r in ranges if r.matches(offer)]
        if not matching:
            continue
        chosen = max(matching, key=lambda r: r.specificity)
        if chosen.q <= 0.0:
            continue
        rank = (chosen.q, chosen.specificity)
        if rank > best_rank:
            best, best_rank = offer, rank
    return best


def negotiate(header: Optional[str]) -> Negotiated:
    """Negotiate the response variant for an Accept header."""
    offer = best_offer(header)
    if offer == TEXT_HTML:
        return RenderHTML()
    return PassThrough(offer)
