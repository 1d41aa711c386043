"""Read-only statement index over a source ontology graph."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Set, Tuple

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF

from .structures import (
    BUILTIN_ANNOTATION_PROPERTIES,
    DECLARATION_TYPES,
    HIERARCHY_KINDS,
    HIERARCHY_PREDICATES,
    Node,
    Statement,
    StatementKind,
    Triple,
    is_entity,
)

logger = logging.getLogger(__name__)

EQUIVALENCE_PREDICATES = frozenset({OWL.equivalentClass, OWL.equivalentProperty, OWL.sameAs})
DISJOINTNESS_PREDICATES = frozenset({OWL.disjointWith, OWL.propertyDisjointWith, OWL.differentFrom})
DISJOINT_GROUP_TYPES = frozenset({OWL.AllDisjointClasses, OWL.AllDisjointProperties, OWL.AllDifferent})
DISJOINT_GROUP_MEMBERS = (OWL.members, OWL.distinctMembers)

_EMPTY: FrozenSet = frozenset()


def _freeze(index: Dict) -> Dict:
    return {key: frozenset(values) for key, values in index.items()}


class GraphStore:
    """Statements of a source graph plus the lookups the filter needs.

    Everything is copied out of the ``rdflib.Graph`` at construction and held
    in frozensets, so one store can be shared by concurrent filter runs and
    nothing returned from it aliases mutable state.
    """

    def __init__(self, graph: Graph) -> None:
        self.ontology_iri: Optional[URIRef] = _find_ontology_iri(graph)
        self.namespaces: Tuple[Tuple[str, str], ...] = tuple(
            (prefix, str(namespace)) for prefix, namespace in graph.namespace_manager.namespaces()
        )
        self._annotation_properties = frozenset(
            BUILTIN_ANNOTATION_PROPERTIES
            | {p for p in graph.subjects(RDF.type, OWL.AnnotationProperty) if isinstance(p, URIRef)}
        )
        self._datatype_properties = frozenset(graph.subjects(RDF.type, OWL.DatatypeProperty))

        self.statements: FrozenSet[Statement] = frozenset(self._extract_statements(graph))

        by_entity: Dict[URIRef, Set[Statement]] = defaultdict(set)
        declarations: Dict[URIRef, Set[Statement]] = defaultdict(set)
        annotations: Dict[Node, Set[Statement]] = defaultdict(set)
        axiom_annotations: Dict[Triple, Set[Statement]] = defaultdict(set)
        metadata: Set[Statement] = set()
        imports: Set[Statement] = set()
        for statement in self.statements:
            if statement.kind is StatementKind.ONTOLOGY:
                metadata.add(statement)
                continue
            if statement.kind is StatementKind.IMPORT:
                imports.add(statement)
                continue
            # Axiom annotations belong to the annotated axiom, not to any entity.
            if statement.annotated_triple is not None:
                axiom_annotations[statement.annotated_triple].add(statement)
                continue
            for entity in statement.entities:
                by_entity[entity].add(statement)
            declared = statement.declared_entity()
            if declared is not None:
                declarations[declared].add(statement)
            if statement.kind is StatementKind.ANNOTATION:
                annotations[statement.subject].add(statement)

        self._by_entity = _freeze(by_entity)
        self._declarations = _freeze(declarations)
        self._annotations = _freeze(annotations)
        self._axiom_annotations = _freeze(axiom_annotations)
        self.metadata_statements: FrozenSet[Statement] = frozenset(metadata)
        self.import_statements: FrozenSet[Statement] = frozenset(imports)
        self.entities: FrozenSet[URIRef] = frozenset(self._by_entity)

        self._build_relations(graph)
        logger.debug(
            "Indexed %d statements over %d entities", len(self.statements), len(self.entities)
        )

    # ------------------------------------------------------------------
    # Lookups

    def __len__(self) -> int:
        return len(self.statements)

    def __contains__(self, entity: object) -> bool:
        return entity in self._by_entity

    def statements_for(self, entity: URIRef) -> FrozenSet[Statement]:
        return self._by_entity.get(entity, _EMPTY)

    def declarations_for(self, entity: URIRef) -> FrozenSet[Statement]:
        return self._declarations.get(entity, _EMPTY)

    def annotations_for(self, entity: URIRef) -> FrozenSet[Statement]:
        return self._annotations.get(entity, _EMPTY)

    def axiom_annotations_for(self, triple: Triple) -> FrozenSet[Statement]:
        return self._axiom_annotations.get(triple, _EMPTY)

    def parents(self, entity: URIRef, predicate: Optional[URIRef] = None) -> FrozenSet[URIRef]:
        return self._hierarchy_lookup(self._up, entity, predicate)

    def children(self, entity: URIRef, predicate: Optional[URIRef] = None) -> FrozenSet[URIRef]:
        return self._hierarchy_lookup(self._down, entity, predicate)

    def equivalents(self, entity: URIRef) -> FrozenSet[URIRef]:
        return self._equivalents.get(entity, _EMPTY)

    def disjoints(self, entity: URIRef) -> FrozenSet[URIRef]:
        return self._disjoints.get(entity, _EMPTY)

    def types(self, entity: URIRef) -> FrozenSet[URIRef]:
        return self._types.get(entity, _EMPTY)

    def individuals(self, entity: URIRef) -> FrozenSet[URIRef]:
        return self._members.get(entity, _EMPTY)

    def has_edge(self, child: URIRef, predicate: URIRef, parent: URIRef) -> bool:
        return parent in self._up[predicate].get(child, _EMPTY)

    @staticmethod
    def _hierarchy_lookup(index, entity, predicate) -> FrozenSet[URIRef]:
        if predicate is not None:
            return index[predicate].get(entity, _EMPTY)
        found: Set[URIRef] = set()
        for by_predicate in index.values():
            found.update(by_predicate.get(entity, _EMPTY))
        return frozenset(found)

    # ------------------------------------------------------------------
    # Construction

    def _extract_statements(self, graph: Graph) -> Iterator[Statement]:
        referenced = {o for o in graph.objects() if isinstance(o, BNode)}
        root_bnodes: Set[BNode] = set()
        for triple in graph:
            subject, predicate, obj = triple
            if isinstance(subject, BNode):
                if subject not in referenced:
                    root_bnodes.add(subject)
                continue
            if subject == self.ontology_iri and predicate == RDF.type and obj == OWL.Ontology:
                continue
            triples = {triple}
            if isinstance(obj, BNode):
                triples.update(_bnode_closure(graph, obj))
            yield Statement(
                kind=self._classify_triple(subject, predicate, obj),
                subject=subject,
                triples=frozenset(triples),
            )
        for node in root_bnodes:
            yield self._bnode_statement(graph, node)

    def _classify_triple(self, subject: Node, predicate: URIRef, obj: Node) -> StatementKind:
        if self.ontology_iri is not None and subject == self.ontology_iri:
            return StatementKind.IMPORT if predicate == OWL.imports else StatementKind.ONTOLOGY
        if predicate == RDF.type:
            if obj in DECLARATION_TYPES:
                return StatementKind.DECLARATION
            if isinstance(obj, BNode) or is_entity(obj):
                return StatementKind.TYPE
            return StatementKind.OTHER
        if predicate in HIERARCHY_KINDS:
            return HIERARCHY_KINDS[predicate]
        if predicate in EQUIVALENCE_PREDICATES:
            return StatementKind.EQUIVALENT
        if predicate in DISJOINTNESS_PREDICATES:
            return StatementKind.DISJOINT
        if predicate in self._annotation_properties:
            return StatementKind.ANNOTATION
        if (
            isinstance(obj, Literal)
            and is_entity(predicate)
            and predicate not in self._datatype_properties
        ):
            return StatementKind.ANNOTATION
        return StatementKind.OTHER

    def _bnode_statement(self, graph: Graph, node: BNode) -> Statement:
        triples = frozenset(_bnode_closure(graph, node))
        node_types = set(graph.objects(node, RDF.type))
        if node_types & DISJOINT_GROUP_TYPES:
            kind = StatementKind.DISJOINT
        elif OWL.Axiom in node_types:
            kind = StatementKind.ANNOTATION
        else:
            kind = StatementKind.OTHER
        return Statement(kind=kind, subject=node, triples=triples)

    def _build_relations(self, graph: Graph) -> None:
        up: Dict[URIRef, Dict[URIRef, Set[URIRef]]] = {p: defaultdict(set) for p in HIERARCHY_PREDICATES}
        down: Dict[URIRef, Dict[URIRef, Set[URIRef]]] = {p: defaultdict(set) for p in HIERARCHY_PREDICATES}
        equivalents: Dict[URIRef, Set[URIRef]] = defaultdict(set)
        disjoints: Dict[URIRef, Set[URIRef]] = defaultdict(set)
        types: Dict[URIRef, Set[URIRef]] = defaultdict(set)
        members: Dict[URIRef, Set[URIRef]] = defaultdict(set)

        for statement in self.statements:
            if statement.kind in (StatementKind.ONTOLOGY, StatementKind.IMPORT):
                continue
            if len(statement.triples) == 1:
                ((subject, predicate, obj),) = statement.triples
                if not (is_entity(subject) and is_entity(obj)):
                    continue
                if statement.kind.is_hierarchy:
                    up[predicate][subject].add(obj)
                    down[predicate][obj].add(subject)
                elif statement.kind is StatementKind.EQUIVALENT:
                    _link(equivalents, subject, obj)
                elif statement.kind is StatementKind.DISJOINT:
                    _link(disjoints, subject, obj)
                elif statement.kind is StatementKind.TYPE:
                    types[subject].add(obj)
                    members[obj].add(subject)
            elif statement.kind is StatementKind.DISJOINT and isinstance(statement.subject, BNode):
                group = [
                    item
                    for predicate in DISJOINT_GROUP_MEMBERS
                    for head in graph.objects(statement.subject, predicate)
                    for item in graph.items(head)
                    if is_entity(item)
                ]
                for left in group:
                    for right in group:
                        if left != right:
                            disjoints[left].add(right)

        self._up = {p: _freeze(index) for p, index in up.items()}
        self._down = {p: _freeze(index) for p, index in down.items()}
        self._equivalents = _freeze(equivalents)
        self._disjoints = _freeze(disjoints)
        self._types = _freeze(types)
        self._members = _freeze(members)


def _find_ontology_iri(graph: Graph) -> Optional[URIRef]:
    for subject in graph.subjects(RDF.type, OWL.Ontology):
        if isinstance(subject, URIRef):
            return subject
    return None


def _bnode_closure(graph: Graph, start: BNode) -> Set[Triple]:
    """Collect every triple reachable from ``start`` through blank nodes."""

    triples: Set[Triple] = set()
    seen: Set[BNode] = set()
    stack = [start]
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        for triple in graph.triples((node, None, None)):
            triples.add(triple)
            if isinstance(triple[2], BNode):
                stack.append(triple[2])
    return triples


def _link(index: Dict[URIRef, Set[URIRef]], left: URIRef, right: URIRef) -> None:
    if left == right:
        return
    index[left].add(right)
    index[right].add(left)


def entities_of(statements: Iterable[Statement]) -> FrozenSet[URIRef]:
    """Return every entity referenced by ``statements``."""

    found: Set[URIRef] = set()
    for statement in statements:
        found.update(statement.entities)
    return frozenset(found)
