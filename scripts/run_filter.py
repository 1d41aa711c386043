#!/usr/bin/env python3
"""Command-line entry point for the ontology filter."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure the project root (containing the ``ontofilter`` package) is on
# ``sys.path`` so the script can be executed directly without an install.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ontofilter import FilterConfig, OntologyFilterPipeline


def _boolean(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "yes", "1"}:
        return True
    if lowered in {"false", "no", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Filter ontology axioms into a focused subset")
    parser.add_argument("-i", "--input", type=Path, required=True, help="Ontology file to filter")
    parser.add_argument("-o", "--output", type=Path, help="Where to write the filtered ontology")
    parser.add_argument("-O", "--ontology-iri", help="Ontology IRI for the output (defaults to the input's)")
    parser.add_argument("-t", "--term", action="append", default=[], help="Term to filter (IRI or CURIE)")
    parser.add_argument(
        "-T", "--term-file", action="append", default=[], type=Path, help="File with one term per line"
    )
    parser.add_argument(
        "-s",
        "--select",
        action="append",
        default=[],
        help="Selection stage, e.g. 'parents equivalents annotations'; repeat to chain stages",
    )
    parser.add_argument(
        "-a", "--axioms", action="append", default=[], help="Only keep these axiom types (default: all)"
    )
    parser.add_argument(
        "-p",
        "--preserve-structure",
        type=_boolean,
        default=True,
        help="If false, do not span hierarchy gaps (default: true)",
    )
    parser.add_argument(
        "-r", "--trim", type=_boolean, default=True, help="If true, trim dangling entities (default: true)"
    )
    parser.add_argument(
        "--mode",
        choices=["complete", "partial"],
        help="Require all (complete) or any (partial) referenced entity to be selected; follows --trim by default",
    )
    parser.add_argument(
        "--prefix", action="append", default=[], help="Extra prefix, e.g. 'ex: http://example.org/'"
    )
    parser.add_argument(
        "--context",
        type=Path,
        default=os.getenv("ONTOFILTER_CONTEXT") or None,
        help="JSON-LD file whose @context supplies prefixes",
    )
    parser.add_argument("--format", dest="output_format", help="rdflib serialization format for --output")
    parser.add_argument("--report", type=Path, help="Optional JSON report path")
    parser.add_argument(
        "--log-level",
        default=os.getenv("ONTOFILTER_LOG_LEVEL", "WARNING"),
        help="Logging level (default: WARNING)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> FilterConfig:
    complete = None if args.mode is None else args.mode == "complete"
    return FilterConfig(
        input_path=args.input,
        output_path=args.output,
        report_path=args.report,
        terms=args.term,
        term_files=args.term_file,
        selects=args.select,
        axioms=args.axioms,
        preserve_structure=args.preserve_structure,
        trim=args.trim,
        complete=complete,
        ontology_iri=args.ontology_iri,
        prefixes=args.prefix,
        context_path=Path(args.context) if args.context else None,
        output_format=args.output_format,
    )


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        report = OntologyFilterPipeline(config_from_args(args)).run()
    except (ValueError, FileNotFoundError) as exc:
        logging.getLogger(__name__).error("Filter aborted: %s", exc)
        return 1

    print("Filter complete. Summary:")
    for key in ("selected_entities", "output_statements", "output_entities"):
        print(f"- {key}: {report[key]}")
    unresolved = report.get("unresolved_terms") or []
    if unresolved:
        print(f"- unresolved_terms: {', '.join(item['term'] for item in unresolved)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
