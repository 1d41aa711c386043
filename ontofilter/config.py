"""Configuration helpers for ontology filter runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class FilterConfig:
    """Runtime configuration for :class:`OntologyFilterPipeline`."""

    input_path: Path
    output_path: Optional[Path] = None
    report_path: Optional[Path] = None
    terms: List[str] = field(default_factory=list)
    term_files: List[Path] = field(default_factory=list)
    selects: List[str] = field(default_factory=list)
    axioms: List[str] = field(default_factory=list)
    preserve_structure: bool = True
    trim: bool = True
    # None means "follow trim": complete when trimming, partial otherwise.
    complete: Optional[bool] = None
    ontology_iri: Optional[str] = None
    prefixes: List[str] = field(default_factory=list)
    context_path: Optional[Path] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None

    @property
    def complete_mode(self) -> bool:
        return self.trim if self.complete is None else self.complete

    def ensure_output_dirs(self) -> None:
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
        if self.report_path is not None:
            self.report_path.parent.mkdir(parents=True, exist_ok=True)
