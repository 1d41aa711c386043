"""Tests for statement classification."""

import unittest
from pathlib import Path

from rdflib import Graph, Namespace
from rdflib.namespace import RDFS

from ontofilter.closure import classify
from ontofilter.store import GraphStore
from ontofilter.structures import StatementKind, parse_kinds
from ontofilter.errors import InvalidAxiomType

ZOO = Path(__file__).parent / "data" / "zoo.ttl"
EX = Namespace("http://example.org/zoo#")


class ClassifyTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.store = GraphStore(Graph().parse(ZOO, format="turtle"))

    def _triples(self, statements):
        return {triple for statement in statements for triple in statement.triples}

    def test_complete_requires_every_entity(self) -> None:
        result = classify(self.store, {EX.Dog, EX.Mammal}, complete=True)
        triples = self._triples(result)

        self.assertIn((EX.Dog, RDFS.subClassOf, EX.Mammal), triples)
        self.assertNotIn((EX.Mammal, RDFS.subClassOf, EX.Animal), triples)
        # Labels need rdfs:label itself to be selected.
        self.assertEqual(set(), {s for s in result if s.kind is StatementKind.ANNOTATION})

    def test_partial_accepts_any_entity(self) -> None:
        result = classify(self.store, {EX.Dog}, complete=False)
        triples = self._triples(result)

        self.assertIn((EX.Dog, RDFS.subClassOf, EX.Mammal), triples)
        self.assertIn((EX.Hound, RDFS.subClassOf, EX.Dog), triples)
        self.assertTrue(any(s.kind is StatementKind.ANNOTATION for s in result))

    def test_complete_is_subset_of_partial(self) -> None:
        for entities in ({EX.Dog}, {EX.Dog, EX.Cat, EX.Mammal}, self.store.entities):
            for kinds in (frozenset(), parse_kinds(["logical"]), parse_kinds(["annotation"])):
                complete = classify(self.store, entities, kinds, complete=True)
                partial = classify(self.store, entities, kinds, complete=False)
                self.assertLessEqual(complete, partial)

    def test_kind_filter_restricts_but_keeps_declarations(self) -> None:
        result = classify(
            self.store, {EX.Cat, EX.Dog}, parse_kinds(["disjoint"]), complete=True
        )
        kinds = {s.kind for s in result}

        self.assertEqual({StatementKind.DISJOINT, StatementKind.DECLARATION}, kinds)
        self.assertEqual(2, len([s for s in result if s.is_declaration]))

    def test_header_statements_never_qualify(self) -> None:
        result = classify(self.store, self.store.entities, complete=False)
        self.assertFalse(
            any(s.kind in (StatementKind.ONTOLOGY, StatementKind.IMPORT) for s in result)
        )

    def test_empty_selection_yields_nothing(self) -> None:
        self.assertEqual(frozenset(), classify(self.store, set()))


class ParseKindsTests(unittest.TestCase):
    def test_groups_and_names(self) -> None:
        self.assertEqual(frozenset(), parse_kinds([]))
        self.assertEqual(frozenset(), parse_kinds(["subclass all"]))
        self.assertEqual(
            {StatementKind.SUBCLASS, StatementKind.ANNOTATION},
            parse_kinds(["subclass", "annotation"]),
        )
        self.assertIn(StatementKind.OTHER, parse_kinds(["logical"]))
        self.assertNotIn(StatementKind.ANNOTATION, parse_kinds(["logical"]))

    def test_unknown_name_raises(self) -> None:
        with self.assertRaises(InvalidAxiomType):
            parse_kinds(["subclass", "bogus"])


if __name__ == "__main__":
    unittest.main()
