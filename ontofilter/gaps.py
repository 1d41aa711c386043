"""Reconnect hierarchy edges broken by unselected intermediates."""
from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Set

from rdflib import URIRef

from .store import GraphStore
from .structures import HIERARCHY_KINDS, HIERARCHY_PREDICATES, Statement

logger = logging.getLogger(__name__)


def span(store: GraphStore, entities: Iterable[URIRef]) -> FrozenSet[Statement]:
    """Synthesize direct hierarchy edges across unselected entities.

    For ``A subClassOf X subClassOf B`` with ``A`` and ``B`` selected and
    ``X`` not, the result holds ``A subClassOf B``. Walks stop at the first
    selected entity on each branch and use a seen-set, so cycles terminate.
    Edges already asserted in the source are never synthesized.
    """

    selected = frozenset(entities)
    spanned: Set[Statement] = set()
    for predicate in HIERARCHY_PREDICATES:
        kind = HIERARCHY_KINDS[predicate]
        for child in selected:
            for ancestor in _selected_across_gaps(store, child, predicate, selected):
                if ancestor == child or store.has_edge(child, predicate, ancestor):
                    continue
                spanned.add(Statement.single(kind, (child, predicate, ancestor)))
    logger.debug("Spanned %d hierarchy gaps", len(spanned))
    return frozenset(spanned)


def _selected_across_gaps(
    store: GraphStore, start: URIRef, predicate: URIRef, selected: FrozenSet[URIRef]
) -> Set[URIRef]:
    """Selected ancestors of ``start`` reached only through unselected nodes."""

    reached: Set[URIRef] = set()
    seen: Set[URIRef] = {start}
    stack = [
        parent for parent in store.parents(start, predicate) if parent not in selected
    ]
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        for parent in store.parents(node, predicate):
            if parent in selected:
                reached.add(parent)
            elif parent not in seen:
                stack.append(parent)
    return reached
