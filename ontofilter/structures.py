"""Typed domain objects shared by the filter components."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from .errors import InvalidAxiomType

Node = Union[URIRef, BNode, Literal]
Triple = Tuple[Node, URIRef, Node]

BUILTIN_NAMESPACES = (str(RDF), str(RDFS), str(OWL), str(XSD))

# Built-in annotation properties are treated as entities so that a label or
# comment only transfers when its property is selected or annotations are
# propagated.
BUILTIN_ANNOTATION_PROPERTIES = frozenset(
    {
        RDFS.label,
        RDFS.comment,
        RDFS.seeAlso,
        RDFS.isDefinedBy,
        OWL.deprecated,
        OWL.versionInfo,
    }
)

DECLARATION_TYPES = frozenset(
    {
        OWL.Class,
        OWL.ObjectProperty,
        OWL.DatatypeProperty,
        OWL.AnnotationProperty,
        OWL.NamedIndividual,
        RDFS.Datatype,
        RDFS.Class,
        RDF.Property,
    }
)

HIERARCHY_PREDICATES = (RDFS.subClassOf, RDFS.subPropertyOf)


def is_entity(term: object) -> bool:
    """Return ``True`` for named terms that are not built-in vocabulary."""

    if not isinstance(term, URIRef):
        return False
    if term in BUILTIN_ANNOTATION_PROPERTIES:
        return True
    return not str(term).startswith(BUILTIN_NAMESPACES)


class StatementKind(Enum):
    DECLARATION = "declaration"
    SUBCLASS = "subclass"
    SUBPROPERTY = "subproperty"
    EQUIVALENT = "equivalent"
    DISJOINT = "disjoint"
    TYPE = "type"
    ANNOTATION = "annotation"
    OTHER = "other"
    ONTOLOGY = "ontology"
    IMPORT = "import"

    @property
    def is_hierarchy(self) -> bool:
        return self in (StatementKind.SUBCLASS, StatementKind.SUBPROPERTY)


LOGICAL_KINDS = frozenset(
    {
        StatementKind.SUBCLASS,
        StatementKind.SUBPROPERTY,
        StatementKind.EQUIVALENT,
        StatementKind.DISJOINT,
        StatementKind.TYPE,
        StatementKind.OTHER,
    }
)

HIERARCHY_KINDS = {
    RDFS.subClassOf: StatementKind.SUBCLASS,
    RDFS.subPropertyOf: StatementKind.SUBPROPERTY,
}


def parse_kinds(values: Iterable[str]) -> FrozenSet[StatementKind]:
    """Parse axiom type names into a kind filter.

    An empty result means no restriction. ``all`` clears the filter and
    ``logical`` expands to every logical axiom kind. Values may hold several
    whitespace-separated names.
    """

    kinds: set[StatementKind] = set()
    for value in values:
        for name in value.split():
            name = name.strip().lower()
            if name == "all":
                return frozenset()
            if name == "logical":
                kinds.update(LOGICAL_KINDS)
                continue
            try:
                kinds.add(StatementKind(name))
            except ValueError:
                raise InvalidAxiomType(f"Unknown axiom type '{name}'") from None
    return frozenset(kinds)


@dataclass(frozen=True)
class Statement:
    """One axiom of the source graph.

    ``triples`` holds the top-level triple together with every triple that
    hangs off its blank-node objects, so restrictions and RDF lists travel
    as a unit.
    """

    kind: StatementKind
    subject: Node
    triples: FrozenSet[Triple]

    @classmethod
    def single(cls, kind: StatementKind, triple: Triple) -> "Statement":
        return cls(kind=kind, subject=triple[0], triples=frozenset({triple}))

    @cached_property
    def entities(self) -> FrozenSet[URIRef]:
        found: set[URIRef] = set()
        for subject, predicate, obj in self.triples:
            for term in (subject, predicate, obj):
                if is_entity(term):
                    found.add(term)
        return frozenset(found)

    @cached_property
    def annotated_triple(self) -> Optional[Triple]:
        """The ``(source, property, target)`` an ``owl:Axiom`` reification annotates."""

        node = self.subject
        if not isinstance(node, BNode) or (node, RDF.type, OWL.Axiom) not in self.triples:
            return None
        values = {predicate: obj for subject, predicate, obj in self.triples if subject == node}
        try:
            return (
                values[OWL.annotatedSource],
                values[OWL.annotatedProperty],
                values[OWL.annotatedTarget],
            )
        except KeyError:
            return None

    def with_subject(self, subject: URIRef) -> "Statement":
        """Copy of this statement with its top-level subject replaced."""

        triples = frozenset(
            (subject, p, o) if s == self.subject else (s, p, o) for s, p, o in self.triples
        )
        return Statement(kind=self.kind, subject=subject, triples=triples)

    @property
    def is_declaration(self) -> bool:
        return self.kind is StatementKind.DECLARATION

    def declared_entity(self) -> Optional[URIRef]:
        if self.is_declaration and isinstance(self.subject, URIRef):
            return self.subject
        return None


class Operator(Enum):
    SELF = "self"
    PARENTS = "parents"
    CHILDREN = "children"
    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"
    EQUIVALENTS = "equivalents"
    DISJOINTS = "disjoints"
    TYPES = "types"
    INDIVIDUALS = "individuals"
    COMPLEMENT = "complement"


@dataclass(frozen=True)
class SelectionStage:
    """A union of relation operators plus pipeline-wide toggles."""

    operators: FrozenSet[Operator] = frozenset({Operator.SELF})
    annotations: bool = False
    imports: bool = False
    ontology: bool = False

    @property
    def selects(self) -> bool:
        return bool(self.operators)
