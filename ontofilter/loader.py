"""Load and save ontology graphs with rdflib."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rdflib import Graph
from rdflib.util import guess_format

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FORMAT = "turtle"


def load_graph(path: Path, fmt: Optional[str] = None) -> Graph:
    """Parse ``path`` into a new graph, guessing the format from its suffix."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    graph = Graph()
    graph.parse(path, format=fmt or guess_format(str(path)))
    logger.debug("Loaded %d triples from %s", len(graph), path)
    return graph


def save_graph(graph: Graph, path: Path, fmt: Optional[str] = None) -> None:
    path = Path(path)
    fmt = fmt or guess_format(str(path)) or DEFAULT_OUTPUT_FORMAT
    graph.serialize(destination=str(path), format=fmt)
    logger.debug("Saved %d triples to %s as %s", len(graph), path, fmt)
