"""Tests for the export-table walker and canonical location resolution."""

from __future__ import annotations

import itertools
import logging

import pytest

from docgraph.graph.errors import InvariantViolation, UnresolvedExportError
from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    DiagnosticCode,
)
from docgraph.graph.ops.canonical import (
    apply_canonical_export_names,
    choose_canonical_location,
    resolve_canonical_locations,
)
from docgraph.graph.ops.exports import collect_export_sites


def _module(name, **exports):
    return [Declaration(kind=DeclarationKind.MODULE, name=name, exports=exports)]


def _namespace(name, **exports):
    return [Declaration(kind=DeclarationKind.NAMESPACE, name=name, exports=exports)]


def _leaf(name, kind=DeclarationKind.CLASS):
    return [Declaration(kind=kind, name=name)]


def _scenario_symbols():
    return {
        "m": _module("pkg", a="s1", b="n"),
        "n": _namespace("N", c="s1"),
        "s1": _leaf("S1"),
    }


def test_walker_records_every_export_site() -> None:
    sites = collect_export_sites(["m"], _scenario_symbols())

    assert sites.sites == {"s1": {"m": "a", "n": "c"}, "n": {"m": "b"}}
    assert sites.diagnostics == []


def test_walker_terminates_on_circular_reexports() -> None:
    symbols = {
        "m": _module("pkg", n="n"),
        "n": _namespace("N", back="m", o="o"),
        "o": _namespace("O", n="n"),
    }

    sites = collect_export_sites(["m"], symbols)

    assert sites.sites == {"n": {"m": "n", "o": "n"}, "m": {"n": "back"}, "o": {"n": "o"}}


def test_walker_keeps_smallest_name_per_parent() -> None:
    symbols = {"m": _module("pkg", zeta="s1", alpha="s1"), "s1": _leaf("S1")}

    sites = collect_export_sites(["m"], symbols)

    assert sites.sites == {"s1": {"m": "alpha"}}


def test_walker_skips_inaccessible_targets() -> None:
    symbols = {"m": _module("pkg", ext="external-id"), "s1": _leaf("S1")}

    assert collect_export_sites(["m"], symbols).sites == {}


def test_unresolved_export_becomes_diagnostic(caplog: pytest.LogCaptureFixture) -> None:
    symbols = {"m": _module("pkg", broken=None, a="s1"), "s1": _leaf("S1")}

    with caplog.at_level(logging.WARNING, logger="docgraph.graph.ops.exports"):
        sites = collect_export_sites(["m"], symbols)

    assert sites.sites == {"s1": {"m": "a"}}
    [diagnostic] = sites.diagnostics
    assert diagnostic.code == DiagnosticCode.UNRESOLVED_EXPORT
    assert diagnostic.symbol_id == "m"
    assert diagnostic.detail == "broken"
    assert "broken" in caplog.text


def test_unresolved_export_raises_in_strict_mode() -> None:
    symbols = {"m": _module("pkg", broken=None)}

    with pytest.raises(UnresolvedExportError) as excinfo:
        collect_export_sites(["m"], symbols, strict=True)

    assert excinfo.value.parent_id == "m"
    assert excinfo.value.export_name == "broken"


def test_module_parent_beats_namespace_parent() -> None:
    sites = collect_export_sites(["m"], _scenario_symbols())

    locations = resolve_canonical_locations(sites.sites, _scenario_symbols(), ["m"])

    assert locations["s1"] == CanonicalLocation("m", "a")
    assert locations["n"] == CanonicalLocation("m", "b")


def test_module_preference_wins_over_export_name() -> None:
    symbols = {
        "m": _module("pkg", zzz="s1", ns="n"),
        "n": _namespace("N", aaa="s1"),
        "s1": _leaf("S1"),
    }

    location = choose_canonical_location({"n": "aaa", "m": "zzz"}, symbols)

    assert location == CanonicalLocation("m", "zzz")


def test_choice_is_independent_of_candidate_order() -> None:
    symbols = {
        "m1": _module("one"),
        "m2": _module("two"),
        "n": _namespace("N"),
        "s": _leaf("S"),
    }
    candidates = [("n", "a"), ("m2", "b"), ("m1", "b")]

    chosen = {
        choose_canonical_location(dict(order), symbols)
        for order in itertools.permutations(candidates)
    }

    assert chosen == {CanonicalLocation("m1", "b")}


def test_walker_reads_tables_from_lookup() -> None:
    symbols = _scenario_symbols()
    tables = {"m": {"renamed": "s1"}, "n": {}}

    sites = collect_export_sites(["m"], symbols, exports_of=tables.__getitem__)

    assert sites.sites == {"s1": {"m": "renamed"}}


def test_namespaces_reexporting_each_other_settle_on_rooted_chain() -> None:
    symbols = {
        "m": _module("pkg", p="p"),
        "p": _namespace("P", z="n1", b="n2"),
        "n1": _namespace("N1", a="n2"),
        "n2": _namespace("N2", a="n1"),
    }
    sites = collect_export_sites(["m"], symbols)

    locations = resolve_canonical_locations(sites.sites, symbols, ["m"])

    assert locations == {
        "p": CanonicalLocation("m", "p"),
        "n1": CanonicalLocation("p", "z"),
        "n2": CanonicalLocation("n1", "a"),
    }


def test_cycle_without_rooted_candidate_is_an_invariant_violation() -> None:
    symbols = {"x": _namespace("X", a="y"), "y": _namespace("Y", b="x")}

    with pytest.raises(InvariantViolation):
        resolve_canonical_locations({"x": {"y": "a"}, "y": {"x": "b"}}, symbols, [])


def test_roots_never_get_a_canonical_location() -> None:
    symbols = {"m": _module("pkg", n="n"), "n": _namespace("N", back="m")}
    sites = collect_export_sites(["m"], symbols)

    locations = resolve_canonical_locations(sites.sites, symbols, ["m"])

    assert "m" not in locations
    assert locations["n"] == CanonicalLocation("m", "n")


def test_apply_canonical_export_names_copies_declarations() -> None:
    symbols = {"m": _module("pkg", Bar="s1"), "s1": _leaf("Foo")}
    locations = {"s1": CanonicalLocation("m", "Bar")}

    renamed = apply_canonical_export_names(symbols, locations)

    assert renamed["s1"][0].name == "Bar"
    assert symbols["s1"][0].name == "Foo"
    assert renamed["m"][0].name == "pkg"
