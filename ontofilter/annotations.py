"""Pull descriptive annotations for every referenced entity."""
from __future__ import annotations

from typing import FrozenSet, Iterable, Set

from rdflib import URIRef

from .store import GraphStore, entities_of
from .structures import Statement


def propagate(
    store: GraphStore,
    statements: Iterable[Statement],
    extra_entities: Iterable[URIRef] = (),
) -> FrozenSet[Statement]:
    """Return the annotation statements about any entity in ``statements``.

    ``extra_entities`` widens the subject set, e.g. with the directly
    selected entities of a filter run.
    """

    subjects = set(entities_of(statements))
    subjects.update(extra_entities)
    found: Set[Statement] = set()
    for subject in subjects:
        found.update(store.annotations_for(subject))
    return frozenset(found)


def axiom_annotations(store: GraphStore, statements: Iterable[Statement]) -> FrozenSet[Statement]:
    """Return the ``owl:Axiom`` reifications of triples present in ``statements``."""

    found: Set[Statement] = set()
    for statement in statements:
        for triple in statement.triples:
            found.update(store.axiom_annotations_for(triple))
    return frozenset(found)
