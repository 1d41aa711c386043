"""Selection stage parsing and resolution."""
from __future__ import annotations

import logging
import shlex
from typing import Callable, Dict, FrozenSet, Iterable, List, Sequence, Set

from rdflib import URIRef

from .errors import InvalidStageSyntax
from .store import GraphStore
from .structures import Operator, SelectionStage

logger = logging.getLogger(__name__)

TOGGLES = ("annotations", "imports", "ontology")

Handler = Callable[["SelectionPipeline", FrozenSet[URIRef]], Set[URIRef]]


def parse_stage(text: str) -> SelectionStage:
    """Parse one ``--select`` value such as ``"parents equivalents annotations"``.

    Words are separated by whitespace; double quotes group words. Any word
    that is neither an operator nor a toggle raises :class:`InvalidStageSyntax`.
    """

    try:
        words = shlex.split(text)
    except ValueError as exc:
        raise InvalidStageSyntax(text, text) from exc

    operators: Set[Operator] = set()
    toggles: Set[str] = set()
    for word in words:
        name = word.strip().lower()
        if name in TOGGLES:
            toggles.add(name)
            continue
        try:
            operators.add(Operator(name))
        except ValueError:
            raise InvalidStageSyntax(word, text) from None
    return SelectionStage(
        operators=frozenset(operators),
        annotations="annotations" in toggles,
        imports="imports" in toggles,
        ontology="ontology" in toggles,
    )


def parse_stages(values: Iterable[str]) -> List[SelectionStage]:
    return [parse_stage(value) for value in values]


class SelectionPipeline:
    """Resolve an ordered list of stages into an entity set.

    Each stage consumes the output of the previous one. Operators of a single
    stage are unioned; ``complement`` is applied after the other operators of
    its stage against the whole entity universe.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def resolve(
        self, seed: Iterable[URIRef], stages: Sequence[SelectionStage]
    ) -> FrozenSet[URIRef]:
        current = frozenset(seed)
        if not current:
            logger.debug("Empty seed; selecting all %d entities", len(self.store.entities))
            current = self.store.entities
        chain = [stage for stage in stages if stage.selects] or [SelectionStage()]
        for index, stage in enumerate(chain, start=1):
            current = self.evaluate(current, stage)
            logger.debug(
                "Stage %d (%s) selected %d entities",
                index,
                " ".join(sorted(op.value for op in stage.operators)),
                len(current),
            )
        return current

    def evaluate(self, entities: FrozenSet[URIRef], stage: SelectionStage) -> FrozenSet[URIRef]:
        operators = set(stage.operators)
        complement = Operator.COMPLEMENT in operators
        operators.discard(Operator.COMPLEMENT)
        if complement and not operators:
            operators.add(Operator.SELF)

        selected: Set[URIRef] = set()
        for operator in operators:
            selected.update(self._HANDLERS[operator](self, entities))

        if complement:
            return self.store.entities - selected
        return frozenset(selected)

    def _select_self(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return set(entities)

    def _select_parents(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {parent for entity in entities for parent in self.store.parents(entity)}

    def _select_children(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {child for entity in entities for child in self.store.children(entity)}

    def _select_ancestors(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return _closure(entities, self.store.parents)

    def _select_descendants(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return _closure(entities, self.store.children)

    def _select_equivalents(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {other for entity in entities for other in self.store.equivalents(entity)}

    def _select_disjoints(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {other for entity in entities for other in self.store.disjoints(entity)}

    def _select_types(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {cls for entity in entities for cls in self.store.types(entity)}

    def _select_individuals(self, entities: FrozenSet[URIRef]) -> Set[URIRef]:
        return {member for entity in entities for member in self.store.individuals(entity)}

    _HANDLERS: Dict[Operator, Handler] = {
        Operator.SELF: _select_self,
        Operator.PARENTS: _select_parents,
        Operator.CHILDREN: _select_children,
        Operator.ANCESTORS: _select_ancestors,
        Operator.DESCENDANTS: _select_descendants,
        Operator.EQUIVALENTS: _select_equivalents,
        Operator.DISJOINTS: _select_disjoints,
        Operator.TYPES: _select_types,
        Operator.INDIVIDUALS: _select_individuals,
    }


def _closure(
    start: Iterable[URIRef], step: Callable[[URIRef], FrozenSet[URIRef]]
) -> Set[URIRef]:
    """Transitive closure of ``step`` excluding the start nodes themselves.

    A start node reachable from another start node (or from itself through a
    cycle) is included.
    """

    found: Set[URIRef] = set()
    seen: Set[URIRef] = set()
    stack = list(start)
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        for neighbour in step(node):
            found.add(neighbour)
            if neighbour not in seen:
                stack.append(neighbour)
    return found
