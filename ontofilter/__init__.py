"""ontofilter: extract structurally-consistent subsets of an ontology."""

from .config import FilterConfig
from .errors import InvalidAxiomType, InvalidStageSyntax, UnresolvableIdentifier
from .pipeline import FilterResult, OntologyFilterPipeline, filter_ontology
from .store import GraphStore
from .structures import Operator, SelectionStage, Statement, StatementKind

__all__ = [
    "FilterConfig",
    "FilterResult",
    "GraphStore",
    "InvalidAxiomType",
    "InvalidStageSyntax",
    "OntologyFilterPipeline",
    "Operator",
    "SelectionStage",
    "Statement",
    "StatementKind",
    "UnresolvableIdentifier",
    "filter_ontology",
]
