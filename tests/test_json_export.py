"""Tests for JSON export of documentation graphs."""

from __future__ import annotations

import json
from pathlib import Path

from docgraph.export.json import doc_graph_to_dict, export_json
from docgraph.graph.models.schema import ExternalReference


def test_export_json_writes_all_tables(tmp_path: Path, scenario_builder) -> None:
    scenario_builder.symbol("S1", kind="class", name="S1", references=["S2", "Ext"])
    scenario_builder.symbol("S2", kind="interface", name="S2")
    scenario_builder.symbol("Ext", kind="class", external=True)
    graph = scenario_builder.run()
    output = tmp_path / "out" / "graph.json"

    export_json(graph, output)

    data = json.loads(output.read_text(encoding="utf-8"))
    s1 = scenario_builder.id_of("S1")
    s2 = scenario_builder.id_of("S2")
    assert data["package_name"] == "pkg"
    assert data["good_identifiers"][s2] == "/.a.S2"
    assert data["canonical_export_locations"][s1] == {
        "parent": scenario_builder.id_of("M"),
        "export_name": "a",
    }
    assert data["owner_of"] == {s2: s1}
    assert data["external_symbols"] == [scenario_builder.id_of("Ext")]
    assert data["symbols"][s1][0]["kind"] == "class"
    assert data["summary"]["identifiers"] == len(graph.good_identifiers)


def test_reference_graph_is_node_link_data(scenario_builder) -> None:
    graph = scenario_builder.run()

    data = doc_graph_to_dict(graph)["reference_graph"]

    assert data["directed"] is True
    assert {node["id"] for node in data["nodes"]} == set(graph.accessible_symbols)
    assert {"source": scenario_builder.id_of("M"), "target": scenario_builder.id_of("S1")} in [
        {"source": edge["source"], "target": edge["target"]} for edge in data["edges"]
    ]


def test_external_references_are_exported_as_objects(scenario_builder) -> None:
    scenario_builder.symbol("S1", kind="class", name="S1", references=["Ext"])
    scenario_builder.symbol("Ext", kind="class", external=True)
    ext = scenario_builder.id_of("Ext")
    reference = ExternalReference(package="lib", version="1.0.0", symbol_id="e1")
    graph = scenario_builder.run(external_reference_resolver={ext: reference}.get)

    data = doc_graph_to_dict(graph)

    assert data["external_references"] == {
        ext: {"package": "lib", "version": "1.0.0", "symbol_id": "e1"}
    }
