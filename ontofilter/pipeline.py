"""High-level orchestration of an ontology filter run."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Sequence

from rdflib import URIRef

from .annotations import axiom_annotations, propagate
from .closure import classify
from .config import FilterConfig
from .gaps import span
from .loader import load_graph, save_graph
from .output import OutputGraph
from .reporting import build_report, save_report
from .selection import SelectionPipeline, parse_stages
from .store import GraphStore
from .structures import SelectionStage, StatementKind, parse_kinds
from .terms import EntityResolver, PrefixTable, Resolution, load_term_files
from .trim import trim

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    output: OutputGraph
    selected: FrozenSet[URIRef] = frozenset()
    early_exit: bool = False
    resolution: Optional[Resolution] = field(default=None)


def filter_ontology(
    store: GraphStore,
    seed: Iterable[URIRef],
    stages: Sequence[SelectionStage] = (),
    kinds: FrozenSet[StatementKind] = frozenset(),
    preserve_structure: bool = True,
    include_annotations: bool = False,
    complete: bool = True,
    trim_output: bool = True,
    ontology_iri: Optional[URIRef] = None,
) -> FilterResult:
    """Build the output graph for one filter invocation.

    ``store`` is only read. The stage toggles apply once to the whole run:
    ``annotations`` enables annotation propagation, ``imports`` and
    ``ontology`` copy the import declarations and ontology-level metadata
    onto the output ontology IRI. Axiom annotations follow the axioms they
    annotate.
    """

    seed = frozenset(seed)
    include_annotations = include_annotations or any(stage.annotations for stage in stages)
    include_imports = any(stage.imports for stage in stages)
    include_metadata = any(stage.ontology for stage in stages)

    output = OutputGraph(
        ontology_iri=ontology_iri if ontology_iri is not None else store.ontology_iri,
        namespaces=store.namespaces,
    )
    if include_imports:
        output.add_header(store.import_statements)
    if include_metadata:
        output.add_header(store.metadata_statements)

    selecting = any(stage.selects for stage in stages)
    if (include_imports or include_metadata) and not selecting and not seed:
        logger.info("Only ontology header requested; skipping entity selection")
        if trim_output:
            output = trim(output)
        return FilterResult(output=output, early_exit=True)

    selected = SelectionPipeline(store).resolve(seed, stages)
    if not selected:
        logger.info("Selection is empty; falling back to every entity in the ontology")
        selected = store.entities

    axioms = set(classify(store, selected, kinds=kinds, complete=complete))
    if preserve_structure:
        axioms.update(
            statement
            for statement in span(store, selected)
            if not kinds or statement.kind in kinds
        )
    if include_annotations:
        axioms.update(propagate(store, axioms, extra_entities=selected))

    output.update(axioms)
    output.update(axiom_annotations(store, output.statements))
    if trim_output:
        output = trim(output)
    logger.info(
        "Filtered %d of %d statements for %d selected entities",
        len(output),
        len(store),
        len(selected),
    )
    return FilterResult(output=output, selected=selected)


class OntologyFilterPipeline:
    """Run a filter from a :class:`FilterConfig`: load, resolve, filter, save."""

    def __init__(self, config: FilterConfig) -> None:
        self.config = config
        # Stage and axiom syntax errors surface before the graph is loaded.
        self.stages = parse_stages(config.selects)
        self.kinds = parse_kinds(config.axioms)
        self.config.ensure_output_dirs()
        self.store: Optional[GraphStore] = None

    def run(self) -> dict:
        config = self.config
        self.store = GraphStore(load_graph(config.input_path, config.input_format))

        prefixes = PrefixTable.for_store(self.store)
        if config.context_path is not None:
            prefixes.load_context(config.context_path)
        for line in config.prefixes:
            prefixes.add_line(line)

        terms = set(config.terms) | load_term_files(config.term_files)
        resolution = EntityResolver(self.store, prefixes).resolve_all(terms)
        if terms and not resolution.entities:
            logger.warning("None of the %d requested terms resolved", len(terms))

        ontology_iri = URIRef(config.ontology_iri) if config.ontology_iri else None
        result = filter_ontology(
            self.store,
            resolution.entities,
            self.stages,
            kinds=self.kinds,
            preserve_structure=config.preserve_structure,
            complete=config.complete_mode,
            trim_output=config.trim,
            ontology_iri=ontology_iri,
        )
        result.resolution = resolution

        if config.output_path is not None:
            save_graph(result.output.to_graph(), config.output_path, config.output_format)
        report = build_report(result, source_statements=len(self.store))
        if config.report_path is not None:
            save_report(report, config.report_path)
        return report
