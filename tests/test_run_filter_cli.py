"""Tests for the ``run_filter`` command-line entry point."""

from pathlib import Path

from rdflib import Graph, Namespace
from rdflib.namespace import OWL, RDF, RDFS

import scripts.run_filter as run_filter

ZOO = Path(__file__).parent / "data" / "zoo.ttl"
EX = Namespace("http://example.org/zoo#")


def test_cli_filters_into_output_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "subset.ttl"

    status = run_filter.main(
        [
            "--input",
            str(ZOO),
            "--output",
            str(output),
            "--prefix",
            "zoo: http://example.org/zoo#",
            "--term",
            "zoo:Hound",
            "--term",
            "zoo:Animal",
            "--select",
            "self",
            "--preserve-structure",
            "true",
        ]
    )

    assert status == 0
    graph = Graph().parse(output, format="turtle")
    assert (EX.Hound, RDFS.subClassOf, EX.Animal) in graph
    assert (EX.Dog, RDF.type, OWL.Class) not in graph
    assert "selected_entities: 2" in capsys.readouterr().out


def test_cli_partial_mode_without_trim(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "partial.ttl"

    status = run_filter.main(
        [
            "-i",
            str(ZOO),
            "-o",
            str(output),
            "-t",
            "http://example.org/zoo#Dog",
            "--trim",
            "false",
            "--axioms",
            "subclass",
        ]
    )

    assert status == 0
    graph = Graph().parse(output, format="turtle")
    assert (EX.Hound, RDFS.subClassOf, EX.Dog) in graph
    assert (EX.Dog, RDFS.subClassOf, EX.Mammal) in graph
    assert (EX.Dog, RDF.type, OWL.Class) in graph
    assert (EX.Dog, RDFS.label, None) not in graph


def test_cli_reports_invalid_select(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)

    status = run_filter.main(["-i", str(ZOO), "-s", "self nephews"])

    assert status == 1
    assert "nephews" in caplog.text


def test_cli_context_from_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    context = tmp_path / "context.jsonld"
    context.write_text('{"@context": {"zoo": "http://example.org/zoo#"}}', encoding="utf-8")
    monkeypatch.setenv("ONTOFILTER_CONTEXT", str(context))
    report = tmp_path / "report.json"

    status = run_filter.main(
        ["-i", str(ZOO), "-t", "zoo:Cat", "-s", "self annotations", "--report", str(report)]
    )

    assert status == 0
    assert '"unresolved_terms": []' in report.read_text(encoding="utf-8")
