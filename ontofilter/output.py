"""Output graph accumulator."""
from __future__ import annotations

from collections import Counter
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Sequence, Set, Tuple

from rdflib import Graph, URIRef
from rdflib.namespace import OWL, RDF

from .store import entities_of
from .structures import Statement, StatementKind


class OutputGraph:
    """Statements selected for the output ontology.

    The graph only ever grows through :meth:`add`/:meth:`update`; statements
    are immutable values shared with the source store, never mutated.
    """

    def __init__(
        self,
        ontology_iri: Optional[URIRef] = None,
        statements: Iterable[Statement] = (),
        namespaces: Sequence[Tuple[str, str]] = (),
    ) -> None:
        self.ontology_iri = ontology_iri
        self.namespaces = tuple(namespaces)
        self.statements: Set[Statement] = set(statements)

    def add(self, statement: Statement) -> None:
        self.statements.add(statement)

    def update(self, statements: Iterable[Statement]) -> None:
        self.statements.update(statements)

    def add_header(self, statements: Iterable[Statement]) -> None:
        """Add ontology metadata or imports, attached to this graph's ontology IRI."""

        for statement in statements:
            if self.ontology_iri is not None and statement.subject != self.ontology_iri:
                statement = statement.with_subject(self.ontology_iri)
            self.statements.add(statement)

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __contains__(self, statement: object) -> bool:
        return statement in self.statements

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutputGraph):
            return NotImplemented
        return self.ontology_iri == other.ontology_iri and self.statements == other.statements

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OutputGraph(ontology_iri={self.ontology_iri!r}, statements={len(self.statements)})"

    @property
    def entities(self) -> FrozenSet[URIRef]:
        return entities_of(self.statements)

    def of_kind(self, kind: StatementKind) -> FrozenSet[Statement]:
        return frozenset(s for s in self.statements if s.kind is kind)

    def kind_counts(self) -> Dict[str, int]:
        counts = Counter(statement.kind.value for statement in self.statements)
        return dict(sorted(counts.items()))

    def triples(self) -> Iterator:
        for statement in self.statements:
            yield from statement.triples

    def copy(self) -> "OutputGraph":
        return OutputGraph(self.ontology_iri, self.statements, self.namespaces)

    def to_graph(self) -> Graph:
        """Build a fresh ``rdflib.Graph`` holding the output ontology."""

        graph = Graph()
        for prefix, namespace in self.namespaces:
            graph.bind(prefix, namespace, override=True)
        if self.ontology_iri is not None:
            graph.add((self.ontology_iri, RDF.type, OWL.Ontology))
        for triple in self.triples():
            graph.add(triple)
        return graph
