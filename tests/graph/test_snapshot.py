"""Tests for the snapshot-backed analysis host."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from docgraph.graph.id_utils import identify
from docgraph.graph.models.schema import DeclarationKind, ExternalReference
from docgraph.graph.snapshot import SnapshotHost


class _Recorder:
    """Observer returning the symbol key and remembering call order."""

    def __init__(self) -> None:
        self.seen = []

    def observe_reference(self, symbol) -> str:
        self.seen.append(symbol.key)
        return f"id:{symbol.key}"


def test_serialize_reports_every_mentioned_symbol(scenario_builder) -> None:
    scenario_builder.symbol("E", kind="enum", name="Color", members=["R"], references=["S1"])
    scenario_builder.symbol("R", kind="enum-member", name="Red")
    host = scenario_builder.host()
    recorder = _Recorder()

    declaration = host.serialize(host.symbol("E").declarations[0], recorder)

    assert recorder.seen == ["S1", "R"]
    assert declaration.kind == DeclarationKind.ENUM
    assert declaration.name == "Color"
    assert declaration.members == ["id:R"]
    assert declaration.references == ["id:S1"]


def test_serialize_container_exports(scenario_builder) -> None:
    scenario_builder.symbol("M", kind="module", name="index", exports={"a": "S1", "gone": None})
    host = scenario_builder.host()
    recorder = _Recorder()

    declaration = host.serialize(host.symbol("M").declarations[0], recorder)

    assert declaration.exports == {"a": "id:S1", "gone": None}
    assert recorder.seen == ["S1"]


def test_unknown_kind_serializes_as_unknown(builder) -> None:
    builder.symbol("X", kind="CallSignature")
    host = builder.host()

    declaration = host.serialize(host.symbol("X").declarations[0], _Recorder())

    assert declaration.kind == DeclarationKind.UNKNOWN
    assert declaration.name == "X"


def test_boundary_queries(builder) -> None:
    builder.symbol("Ext", kind="class", external=True)
    builder.symbol("Hidden", kind="class", include=False)
    host = builder.host()

    assert host.is_external(host.symbol("Ext"))
    assert not host.is_external(host.symbol("Hidden"))
    assert not host.should_include(host.symbol("Hidden").declarations[0])
    assert host.should_include(host.symbol("Ext").declarations[0])


def test_get_exports_of_resolves_symbols(scenario_builder) -> None:
    scenario_builder.symbol("M", kind="module", name="index", exports={"a": "S1", "gone": None})
    host = scenario_builder.host()

    exports = host.get_exports_of(host.symbol("M"))

    assert exports == {"a": host.symbol("S1"), "gone": None}


def test_get_exports_of_ignores_sites_outside_the_package(scenario_builder) -> None:
    scenario_builder.data["symbols"]["M"]["declarations"].append(
        {
            "kind": "module",
            "file_path": "/node_modules/other/index.d.ts",
            "start": 0,
            "end": 40,
            "include": False,
            "exports": {"leaked": "S1"},
        }
    )
    host = scenario_builder.host()

    exports = host.get_exports_of(host.symbol("M"))

    assert "leaked" not in exports
    assert exports["a"] == host.symbol("S1")


def test_external_references_key_symbols_by_id(builder) -> None:
    builder.symbol(
        "React",
        kind="namespace",
        external=True,
        reference={"package": "react", "version": "18.2.0", "id": "r1"},
    )
    builder.symbol("Plain", kind="class", external=True)
    host = builder.host()

    references = host.external_references()

    assert references == {
        identify(host.symbol("React")): ExternalReference("react", "18.2.0", "r1")
    }


def test_roots_map_symbols_to_display_names(scenario_builder) -> None:
    host = scenario_builder.host()

    assert host.roots() == {host.symbol("M"): "pkg"}
    assert host.package_name == "pkg"


def test_unknown_symbol_keys_are_rejected(builder) -> None:
    builder.symbol("A", kind="class", references=["missing"])

    with pytest.raises(ValidationError, match="missing"):
        builder.host()


def test_from_file_round_trips_snapshot(tmp_path: Path, scenario_builder) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(scenario_builder.data), encoding="utf-8")

    host = SnapshotHost.from_file(path)

    assert set(host.symbols) == {"M", "N", "S1"}


def test_from_file_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        SnapshotHost.from_file(path)
