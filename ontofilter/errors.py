"""Exceptions raised by the ontology filter."""
from __future__ import annotations


class InvalidStageSyntax(ValueError):
    """Raised when a selection stage names an unknown operator."""

    def __init__(self, word: str, stage: str) -> None:
        super().__init__(f"Unknown selection '{word}' in stage '{stage}'")
        self.word = word
        self.stage = stage


class InvalidAxiomType(ValueError):
    """Raised when an axiom type filter names an unknown statement kind."""


class UnresolvableIdentifier(LookupError):
    """Raised when a term string cannot be mapped to an entity of the graph."""

    def __init__(self, term: str, reason: str) -> None:
        super().__init__(f"Could not resolve '{term}': {reason}")
        self.term = term
        self.reason = reason
