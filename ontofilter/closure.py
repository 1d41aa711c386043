"""Decide which source statements transfer for a selected entity set."""
from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, Set

from rdflib import URIRef

from .store import GraphStore
from .structures import Statement, StatementKind

logger = logging.getLogger(__name__)

_HEADER_KINDS = (StatementKind.ONTOLOGY, StatementKind.IMPORT)


def classify(
    store: GraphStore,
    entities: Iterable[URIRef],
    kinds: FrozenSet[StatementKind] = frozenset(),
    complete: bool = True,
) -> FrozenSet[Statement]:
    """Return the statements of ``store`` that qualify for ``entities``.

    In complete mode every entity a statement references must be selected;
    in partial mode one is enough. A non-empty ``kinds`` restricts the result
    to those statement kinds, except that declarations of selected entities
    are always kept.
    """

    selected = frozenset(entities)
    qualified: Set[Statement] = set()
    for entity in selected:
        qualified.update(store.declarations_for(entity))
        for statement in store.statements_for(entity):
            if statement in qualified:
                continue
            if kinds and statement.kind not in kinds:
                continue
            if statement.kind in _HEADER_KINDS:
                continue
            if complete and not statement.entities <= selected:
                continue
            qualified.add(statement)
    logger.debug(
        "Classified %d statements for %d entities (%s mode)",
        len(qualified),
        len(selected),
        "complete" if complete else "partial",
    )
    return frozenset(qualified)
