"""Remove entities left without any surviving statement."""
from __future__ import annotations

import logging

from .output import OutputGraph
from .store import entities_of

logger = logging.getLogger(__name__)


def trim(output: OutputGraph) -> OutputGraph:
    """Return a copy of ``output`` without dangling declarations.

    An entity is dangling when declarations are the only statements that
    mention it. Axiom annotations do not back an entity and leave together
    with the axiom they annotate. Trimming twice gives the same graph as
    trimming once.
    """

    axioms = [s for s in output.statements if s.annotated_triple is None]
    backed = entities_of(s for s in axioms if not s.is_declaration)
    kept = {
        statement
        for statement in axioms
        if not statement.is_declaration or statement.entities <= backed
    }
    surviving = {triple for statement in kept for triple in statement.triples}
    kept.update(s for s in output.statements if s.annotated_triple in surviving)
    removed = len(output.statements) - len(kept)
    if removed:
        logger.debug("Trimmed %d dangling declarations", removed)
    return OutputGraph(output.ontology_iri, kept, output.namespaces)
