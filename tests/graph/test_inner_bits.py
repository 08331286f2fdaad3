"""Tests for grouping unexported symbols under exported owners."""

from __future__ import annotations

from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    DiagnosticCode,
)
from docgraph.graph.ops.inner_bits import relax_owner_chains, resolve_inner_bits


def _decls(name, kind=DeclarationKind.CLASS):
    return [Declaration(kind=kind, name=name)]


def test_relaxation_resolves_multi_hop_chains() -> None:
    result = relax_owner_chains(
        direct={"y": "s1"},
        pending={"w": "x", "x": "y"},
    )

    assert result.owners == {"y": "s1", "x": "s1", "w": "s1"}
    assert result.unresolved == {}
    assert not result.truncated


def test_relaxation_stops_on_islands() -> None:
    result = relax_owner_chains(direct={}, pending={"a": "b", "b": "a"})

    assert result.owners == {}
    assert set(result.unresolved) == {"a", "b"}
    assert result.passes == 1


def test_relaxation_pass_limit_is_reported() -> None:
    chain = {f"u{i}": f"u{i + 1}" for i in range(10)}
    chain["u10"] = "v"

    result = relax_owner_chains({"v": "s1"}, chain, max_passes=1)

    assert result.truncated
    assert result.passes == 1
    assert result.unresolved


def test_direct_owner_is_first_exported_referencer() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "s2": _decls("S2"),
        "helper": _decls("Helper"),
    }
    locations = {"s1": CanonicalLocation("m", "a"), "s2": CanonicalLocation("m", "b")}
    references = {"helper": ["s2", "s1"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.owner_of == {"helper": "s2"}
    assert inner.groups == {"s2": ["helper"]}


def test_exported_referencer_preferred_over_earlier_unexported_one() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "y": _decls("Y"),
        "x": _decls("X"),
    }
    locations = {"s1": CanonicalLocation("m", "a")}
    references = {"y": ["s1"], "x": ["y", "s1"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.owner_of == {"y": "s1", "x": "s1"}


def test_two_hop_indirection_resolves_to_exported_owner() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "y": _decls("Y"),
        "x": _decls("X"),
    }
    locations = {"s1": CanonicalLocation("m", "a")}
    references = {"s1": ["m"], "y": ["s1"], "x": ["y"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.owner_of == {"y": "s1", "x": "s1"}
    assert inner.groups == {"s1": ["y", "x"]}
    assert inner.dropped == []


def test_islands_and_root_only_references_are_dropped() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "a": _decls("A"),
        "b": _decls("B"),
        "r": _decls("R"),
    }
    locations = {"s1": CanonicalLocation("m", "a")}
    references = {"a": ["b"], "b": ["a"], "r": ["m"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.owner_of == {}
    assert inner.groups == {}
    assert set(inner.dropped) == {"a", "b", "r"}


def test_enum_members_are_never_grouped() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "e": [Declaration(kind=DeclarationKind.ENUM, name="Color", members=["red"])],
        "red": _decls("Red", DeclarationKind.ENUM_MEMBER),
    }
    locations = {"e": CanonicalLocation("m", "Color")}
    references = {"red": ["e"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.owner_of == {}


def test_groups_follow_discovery_order() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "first": _decls("First"),
        "second": _decls("Second"),
    }
    locations = {"s1": CanonicalLocation("m", "a")}
    references = {"second": ["s1"], "first": ["s1"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"])

    assert inner.groups == {"s1": ["first", "second"]}


def test_relaxation_limit_adds_diagnostic() -> None:
    symbols = {
        "m": _decls("pkg", DeclarationKind.MODULE),
        "s1": _decls("S1"),
        "y": _decls("Y"),
        "x": _decls("X"),
        "w": _decls("W"),
    }
    locations = {"s1": CanonicalLocation("m", "a")}
    references = {"y": ["s1"], "x": ["w"], "w": ["y"]}

    inner = resolve_inner_bits(symbols, locations, references, ["m"], max_passes=1)

    assert inner.owner_of == {"y": "s1", "w": "s1"}
    assert inner.dropped == ["x"]
    [diagnostic] = inner.diagnostics
    assert diagnostic.code == DiagnosticCode.RELAXATION_LIMIT
