"""Reporting utilities for filter runs."""
from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:  # pragma: no cover
    from .pipeline import FilterResult


def build_report(result: "FilterResult", source_statements: int) -> Dict[str, Any]:
    output = result.output
    report: Dict[str, Any] = {
        "ontology_iri": str(output.ontology_iri) if output.ontology_iri is not None else None,
        "source_statements": source_statements,
        "selected_entities": len(result.selected),
        "output_statements": len(output),
        "output_entities": len(output.entities),
        "statement_kinds": output.kind_counts(),
        "early_exit": result.early_exit,
    }
    if result.resolution is not None:
        report["resolved_terms"] = len(result.resolution.entities)
        report["unresolved_terms"] = [
            {"term": error.term, "reason": error.reason}
            for error in sorted(result.resolution.unresolved, key=lambda e: e.term)
        ]
    return report


def save_report(report: Dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(report, indent=2), encoding="utf-8")
