"""
Graph description renderer.

Turns the triples of a CBD describe result into a nested, Turtle-like
description of one root resource:
- triples are sorted once by (subject, compacted predicate)
- consecutive triples sharing a predicate form one clause with an object list
- blank node objects are expanded in place, one indentation level deeper
- IRIs are linkified, literals quoted

The renderer does no I/O and never raises for odd input: a dangling blank
node becomes an empty block and a blank node cycle becomes a ``_:label``
reference.
"""

from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterable, List, Sequence, Set, Union

from vindu.linkify import Link, Linkifier
from vindu.models import Term, Triple
from vindu.prefixes import RDF_TYPE, PrefixCompactor


INDENT = "    "
# Blocks nested deeper than this share its indentation
MAX_INDENT_DEPTH = 32


@dataclass(frozen=True)
class CycleRef:
    """A blank node already being expanded further up the tree."""
    label: str


@dataclass(frozen=True)
class ClassName:
    """A compacted class IRI, the object of an ``a`` clause."""
    iri: str
    text: str


Object = Union[Link, ClassName, str, "Description", CycleRef]


@dataclass
class Clause:
    """One predicate with its object list."""
    predicate: str
    label: str
    objects: List[Object] = field(default_factory=list)


@dataclass
class Description:
    """Clauses describing one subject; ``depth`` is the blank node nesting level."""
    subject: Term
    depth: int = 0
    clauses: List[Clause] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.clauses


def sort_triples(triples: Iterable[Triple], compactor: PrefixCompactor) -> List[Triple]:
    """
    Sort by subject string form, then compacted predicate name.

    The sort is stable, so objects of one (subject, predicate) pair keep
    the order in which the store returned them.
    """
    return sorted(
        triples,
        key=lambda t: (str(t.subject), compactor.compact(t.predicate.lex)),
    )


def describe(
    triples: Sequence[Triple],
    node: Term,
    compactor: PrefixCompactor,
    linkifier: Linkifier,
    depth: int = 0,
) -> Description:
    """
    Describe ``node`` from the triples whose subject it is.

    Blank node objects are expanded depth first from an explicit stack, so
    arbitrarily long chains (RDF collections, for one) do not exhaust the
    interpreter's recursion limit.

    Args:
        triples: The full triple set, already sorted with sort_triples
        node: Subject to describe
        compactor: Prefix table for predicate labels
        linkifier: Decides which IRIs become links
        depth: Blank node nesting level of ``node``

    Returns:
        Description of ``node``
    """
    by_subject: Dict[Term, List[Triple]] = {}
    for triple in triples:
        by_subject.setdefault(triple.subject, []).append(triple)

    root = Description(subject=node, depth=depth)
    # Labels of the blank nodes on the path from the root to the node on top
    expanding: Set[str] = set()
    stack: List[Union[Description, str]] = [root]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            expanding.discard(item)
            continue

        description = item
        if description.subject.is_bnode:
            expanding.add(description.subject.lex)
            stack.append(description.subject.lex)

        clause = None
        nested = []
        for triple in by_subject.get(description.subject, ()):
            if clause is None or clause.predicate != triple.predicate.lex:
                clause = Clause(
                    predicate=triple.predicate.lex,
                    label=compactor.display(triple.predicate.lex),
                )
                description.clauses.append(clause)

            obj = triple.object
            if obj.is_iri:
                clause.objects.append(_iri_object(triple.predicate.lex, obj.lex, compactor, linkifier))
            elif obj.is_bnode:
                if obj.lex in expanding:
                    clause.objects.append(CycleRef(obj.lex))
                else:
                    child = Description(subject=obj, depth=description.depth + 1)
                    clause.objects.append(child)
                    nested.append(child)
            else:
                clause.objects.append(obj.quoted())

        # Children are already in place; only their clauses are filled later
        stack.extend(reversed(nested))
    return root


def _iri_object(
    predicate: str,
    iri: str,
    compactor: PrefixCompactor,
    linkifier: Linkifier,
) -> Union[Link, ClassName]:
    # a deich:Work, not a <http://data.deichman.no/ontology#Work>
    if predicate == RDF_TYPE and not linkifier.is_browsable(iri):
        if compactor.match(iri) is not None:
            return ClassName(iri=iri, text=compactor.compact(iri))
    return linkifier.link(iri)


def format_description(description: Description) -> str:
    """Format a description as HTML-escaped, indented text (no trailing ``.``)."""
    chunks = []
    stack: List[Union[Description, str]] = [description]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            chunks.append(item)
        else:
            stack.extend(reversed(_layout(item)))
    return "".join(chunks)


def _indent(depth: int) -> str:
    return INDENT * (min(depth, MAX_INDENT_DEPTH) + 1)


def _layout(description: Description) -> List[Union[Description, str]]:
    """Text pieces of one description, with non-empty nested blocks left unformatted."""
    indent = _indent(description.depth)
    width = max((len(c.label) for c in description.clauses), default=0) + 1
    continuation = ",\n" + indent + " " * width

    pieces: List[Union[Description, str]] = []
    for i, clause in enumerate(description.clauses):
        if i:
            pieces.append(" ;\n")
        pieces.append(indent + escape(clause.label.ljust(width)))
        for j, obj in enumerate(clause.objects):
            if j:
                pieces.append(continuation)
            if isinstance(obj, Description) and not obj.is_empty:
                pieces.extend(["[\n", obj, "\n" + indent + "]"])
            else:
                pieces.append(_format_object(obj))
    return pieces


def _format_object(obj: Object) -> str:
    if isinstance(obj, ClassName):
        return escape(obj.text)
    if isinstance(obj, Link):
        text = f"&lt;{escape(obj.text)}&gt;"
        if obj.href is None:
            return text
        return f'<a href="{escape(obj.href)}">{text}</a>'
    if isinstance(obj, Description):
        return "[ ]"
    if isinstance(obj, CycleRef):
        return escape(f"_:{obj.label}")
    return escape(obj)


def render(
    triples: Iterable[Triple],
    root: Term,
    compactor: PrefixCompactor,
    linkifier: Linkifier,
) -> str:
    """Sort, describe and format the description of ``root``."""
    ordered = sort_triples(triples, compactor)
    return format_description(describe(ordered, root, compactor, linkifier))
