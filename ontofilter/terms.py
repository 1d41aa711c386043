"""Turn caller-supplied term strings into entities of the source graph."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from rdflib import URIRef

from .errors import UnresolvableIdentifier
from .store import GraphStore

logger = logging.getLogger(__name__)

DEFAULT_PREFIXES: Dict[str, str] = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "owl": "http://www.w3.org/2002/07/owl#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "obo": "http://purl.obolibrary.org/obo/",
    "oboInOwl": "http://www.geneontology.org/formats/oboInOwl#",
}

_TRAILING_COMMENT_RE = re.compile(r"\s#.*$")
_PREFIX_LINE_RE = re.compile(r"^\s*([A-Za-z_][\w.-]*)?\s*:\s+(\S+)\s*$")
_ABSOLUTE_IRI_RE = re.compile(r"^(?:https?|ftp|file|urn):", re.IGNORECASE)


def extract_terms(text: str) -> Set[str]:
    """Extract term identifiers from free text.

    Lines starting with ``#`` are skipped and a ``#`` preceded by whitespace
    starts a trailing comment, so ``#`` inside IRIs survives. Lines are
    trimmed and blank ones dropped.
    """

    terms: Set[str] = set()
    for line in text.replace("\r", "").split("\n"):
        if line.strip().startswith("#"):
            continue
        term = _TRAILING_COMMENT_RE.sub("", line, count=1).strip()
        if term:
            terms.add(term)
    return terms


def load_term_files(paths: Iterable[Path]) -> Set[str]:
    terms: Set[str] = set()
    for path in paths:
        terms.update(extract_terms(Path(path).read_text(encoding="utf-8")))
    return terms


class PrefixTable:
    """Prefix to namespace mapping used for CURIE expansion."""

    def __init__(self, prefixes: Optional[Mapping[str, str]] = None) -> None:
        self._prefixes: Dict[str, str] = dict(DEFAULT_PREFIXES)
        if prefixes:
            self._prefixes.update(prefixes)

    @classmethod
    def for_store(cls, store: GraphStore) -> "PrefixTable":
        return cls({prefix: namespace for prefix, namespace in store.namespaces})

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._prefixes

    def get(self, prefix: str) -> Optional[str]:
        return self._prefixes.get(prefix)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._prefixes)

    def add(self, prefix: str, namespace: str) -> None:
        self._prefixes[prefix] = namespace

    def add_line(self, line: str) -> None:
        """Add a prefix given as ``"ex: http://example.org/"``."""

        match = _PREFIX_LINE_RE.match(line)
        if not match:
            raise ValueError(f"Invalid prefix definition '{line}'; expected 'prefix: namespace'")
        self.add(match.group(1) or "", match.group(2))

    def load_context(self, path: Path) -> None:
        """Merge the ``@context`` of a JSON-LD file."""

        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict) or "@context" not in data:
            raise ValueError(f"{path} has no JSON-LD @context")
        context = data["@context"]
        if not isinstance(context, dict):
            raise ValueError(f"{path} has an unsupported @context")
        for prefix, value in context.items():
            if prefix.startswith("@"):
                continue
            if isinstance(value, dict):
                value = value.get("@id")
            if isinstance(value, str):
                self._prefixes[prefix] = value

    def expand(self, term: str) -> URIRef:
        """Expand ``term`` into an IRI without checking the graph."""

        term = term.strip()
        if term.startswith("<") and term.endswith(">"):
            return URIRef(term[1:-1])
        if _ABSOLUTE_IRI_RE.match(term) and term.split(":", 1)[0] not in self._prefixes:
            return URIRef(term)
        if ":" in term:
            prefix, local = term.split(":", 1)
            namespace = self._prefixes.get(prefix)
            if namespace is None:
                raise UnresolvableIdentifier(term, f"unknown prefix '{prefix}'")
            return URIRef(namespace + local)
        raise UnresolvableIdentifier(term, "terms must be IRIs or CURIEs")


@dataclass
class Resolution:
    entities: FrozenSet[URIRef] = frozenset()
    unresolved: List[UnresolvableIdentifier] = field(default_factory=list)

    @property
    def unresolved_terms(self) -> List[str]:
        return sorted(error.term for error in self.unresolved)


class EntityResolver:
    """Map term strings to entities of a :class:`GraphStore`."""

    def __init__(self, store: GraphStore, prefixes: Optional[PrefixTable] = None) -> None:
        self.store = store
        self.prefixes = prefixes or PrefixTable.for_store(store)

    def resolve(self, term: str) -> URIRef:
        iri = self.prefixes.expand(term)
        if iri not in self.store:
            raise UnresolvableIdentifier(term, f"<{iri}> is not in the ontology")
        return iri

    def resolve_all(self, terms: Iterable[str]) -> Resolution:
        entities: Set[URIRef] = set()
        unresolved: List[UnresolvableIdentifier] = []
        for term in sorted(set(terms)):
            try:
                entities.add(self.resolve(term))
            except UnresolvableIdentifier as exc:
                logger.warning("Skipping term: %s", exc)
                unresolved.append(exc)
        return Resolution(entities=frozenset(entities), unresolved=unresolved)
