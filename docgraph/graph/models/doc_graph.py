"""Immutable output of one documentation graph extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

import networkx as nx

from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    Diagnostic,
    ExternalReference,
    SymbolId,
)


@dataclass(frozen=True)
class DocGraph:
    """Container describing the documentation graph of one package.

    Attributes:
        package_name: Name whose root symbol is shown as ``/``.
        root_ids: Root symbol id to display name.
        accessible_symbols: Symbol id to its non-empty declaration list.
        references: Symbol id to the ids of the symbols referencing it.
        external_symbols: Ids of referenced symbols outside the package.
        external_references: External symbol id to where it is documented.
        canonical_export_locations: Exported symbol id to its chosen home.
        symbols_for_inner_bit: Exported owner id to unexported symbols under it.
        owner_of: Unexported symbol id to its exported owner.
        good_identifiers: Symbol id to permalink string.
        diagnostics: Recovered problems found during extraction.
    """

    package_name: Optional[str]
    root_ids: Dict[SymbolId, str]
    accessible_symbols: Dict[SymbolId, List[Declaration]]
    references: Dict[SymbolId, List[SymbolId]]
    external_symbols: FrozenSet[SymbolId]
    canonical_export_locations: Dict[SymbolId, CanonicalLocation] = field(default_factory=dict)
    symbols_for_inner_bit: Dict[SymbolId, List[SymbolId]] = field(default_factory=dict)
    owner_of: Dict[SymbolId, SymbolId] = field(default_factory=dict)
    good_identifiers: Dict[SymbolId, str] = field(default_factory=dict)
    external_references: Dict[SymbolId, ExternalReference] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def symbol_for_identifier(self, identifier: str) -> Optional[SymbolId]:
        """Reverse lookup of a good identifier; None when unknown."""
        for symbol_id, candidate in self.good_identifiers.items():
            if candidate == identifier:
                return symbol_id
        return None

    def reference_graph(self) -> nx.DiGraph:
        """Forward reference graph: edge ``(A, B)`` means A's declaration mentions B.

        External symbols appear as nodes with ``external=True``.
        """
        graph = nx.DiGraph()
        for symbol_id, declarations in self.accessible_symbols.items():
            first = declarations[0]
            graph.add_node(
                symbol_id,
                name=first.name,
                kind=first.kind.value,
                identifier=self.good_identifiers.get(symbol_id),
                external=False,
            )
        for symbol_id in sorted(self.external_symbols):
            graph.add_node(symbol_id, external=True)
        for referenced, referencers in self.references.items():
            for referencer in referencers:
                graph.add_edge(referencer, referenced)
        return graph

    def export_graph(self) -> nx.MultiDiGraph:
        """Canonical export tree as a graph: ``parent -> symbol`` keyed by export name."""
        graph = nx.MultiDiGraph()
        for root_id, display_name in self.root_ids.items():
            graph.add_node(root_id, root=True, display_name=display_name)
        for symbol_id, location in self.canonical_export_locations.items():
            graph.add_edge(location.parent, symbol_id, key=location.export_name)
        return graph

    def summary(self) -> Dict[str, Any]:
        """Counts describing this graph, for logs and exports."""
        return {
            "package_name": self.package_name,
            "roots": len(self.root_ids),
            "accessible_symbols": len(self.accessible_symbols),
            "external_symbols": len(self.external_symbols),
            "external_references": len(self.external_references),
            "exported_symbols": len(self.canonical_export_locations),
            "inner_bit_symbols": len(self.owner_of),
            "identifiers": len(self.good_identifiers),
            "diagnostics": len(self.diagnostics),
        }
