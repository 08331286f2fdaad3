"""JSON export for documentation graphs."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import networkx as nx

from docgraph.graph.models.doc_graph import DocGraph

logger = logging.getLogger("docgraph.export.json")


def doc_graph_to_dict(doc_graph: DocGraph) -> Dict[str, Any]:
    """Convert a DocGraph into a JSON-compatible dictionary.

    The reference graph is embedded as networkx node-link data; every
    other table is keyed by symbol id.

    Args:
        doc_graph: Graph to convert.

    Returns:
        Dictionary ready for ``json.dump``.
    """
    return {
        "summary": doc_graph.summary(),
        "package_name": doc_graph.package_name,
        "roots": dict(doc_graph.root_ids),
        "symbols": {
            symbol_id: [decl.to_dict() for decl in declarations]
            for symbol_id, declarations in doc_graph.accessible_symbols.items()
        },
        "references": {
            symbol_id: list(referencers)
            for symbol_id, referencers in doc_graph.references.items()
        },
        "external_symbols": sorted(doc_graph.external_symbols),
        "external_references": {
            symbol_id: reference._asdict()
            for symbol_id, reference in doc_graph.external_references.items()
        },
        "canonical_export_locations": {
            symbol_id: location._asdict()
            for symbol_id, location in doc_graph.canonical_export_locations.items()
        },
        "symbols_for_inner_bit": {
            owner: list(members)
            for owner, members in doc_graph.symbols_for_inner_bit.items()
        },
        "owner_of": dict(doc_graph.owner_of),
        "good_identifiers": dict(doc_graph.good_identifiers),
        "diagnostics": [diagnostic.to_dict() for diagnostic in doc_graph.diagnostics],
        "reference_graph": nx.readwrite.json_graph.node_link_data(
            doc_graph.reference_graph(), edges="edges"
        ),
    }


def export_json(doc_graph: DocGraph, output_path: Path) -> None:
    """Export a documentation graph to JSON format.

    Args:
        doc_graph: Graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting documentation graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = doc_graph_to_dict(doc_graph)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(
        "JSON export completed: %d symbols, %d identifiers",
        len(doc_graph.accessible_symbols),
        len(doc_graph.good_identifiers),
    )
