"""Tests for dangling entity trimming."""

import unittest

from rdflib import BNode, Literal, Namespace
from rdflib.namespace import OWL, RDF, RDFS

from ontofilter.output import OutputGraph
from ontofilter.structures import Statement, StatementKind
from ontofilter.trim import trim

EX = Namespace("http://example.org/trim#")


def _declaration(entity):
    return Statement.single(StatementKind.DECLARATION, (entity, RDF.type, OWL.Class))


class TrimTests(unittest.TestCase):
    def setUp(self) -> None:
        self.edge = Statement.single(StatementKind.SUBCLASS, (EX.A, RDFS.subClassOf, EX.B))
        self.label = Statement.single(StatementKind.ANNOTATION, (EX.C, RDFS.label, Literal("c")))
        self.graph = OutputGraph(
            ontology_iri=EX.onto,
            statements=[
                _declaration(EX.A),
                _declaration(EX.B),
                _declaration(EX.C),
                _declaration(EX.D),
                self.edge,
                self.label,
            ],
        )

    def test_removes_declarations_of_unused_entities(self) -> None:
        trimmed = trim(self.graph)

        self.assertNotIn(_declaration(EX.D), trimmed)
        self.assertIn(_declaration(EX.A), trimmed)
        self.assertIn(_declaration(EX.C), trimmed)
        self.assertIn(self.edge, trimmed)
        self.assertEqual(EX.onto, trimmed.ontology_iri)

    def test_does_not_modify_input(self) -> None:
        trim(self.graph)
        self.assertIn(_declaration(EX.D), self.graph)

    def test_idempotent(self) -> None:
        once = trim(self.graph)
        self.assertEqual(once, trim(once))

    def test_no_dangling_entities_after_trim(self) -> None:
        trimmed = trim(self.graph)
        backed = {
            entity
            for statement in trimmed
            if not statement.is_declaration
            for entity in statement.entities
        }
        for statement in trimmed:
            self.assertLessEqual(statement.entities, backed)

    def test_axiom_annotation_leaves_with_its_declaration(self) -> None:
        note = BNode()
        reification = Statement(
            kind=StatementKind.ANNOTATION,
            subject=note,
            triples=frozenset(
                {
                    (note, RDF.type, OWL.Axiom),
                    (note, OWL.annotatedSource, EX.D),
                    (note, OWL.annotatedProperty, RDF.type),
                    (note, OWL.annotatedTarget, OWL.Class),
                    (note, RDFS.comment, Literal("placeholder")),
                }
            ),
        )
        self.graph.add(reification)

        trimmed = trim(self.graph)

        self.assertNotIn(_declaration(EX.D), trimmed)
        self.assertNotIn(reification, trimmed)
        self.assertEqual(trimmed, trim(trimmed))

    def test_empty_graph(self) -> None:
        self.assertEqual(0, len(trim(OutputGraph())))


if __name__ == "__main__":
    unittest.main()
