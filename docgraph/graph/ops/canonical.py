"""Choose one canonical export location per exported symbol.

The tie-break is a policy, kept stable because every permalink depends on
it: a parent declared as a module beats one declared as a namespace, then
the smaller export name wins, then the smaller parent id. The whole
candidate set is scanned, so the choice never depends on discovery order.

Namespaces that re-export each other can make the preferred parents form
a cycle that never reaches a root. Only then does discovery order matter:
the first symbol of the cycle, in walk order, falls back to its best parent
that already leads to a root.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

from docgraph.graph.errors import InvariantViolation
from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    SymbolId,
)

logger = logging.getLogger("docgraph.graph.ops.canonical")


def _candidate_rank(
    parent_id: SymbolId,
    export_name: str,
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
) -> Tuple[int, str, str]:
    """Sort key for one (parent, export name) candidate; smaller wins."""
    parent_decls = accessible_symbols.get(parent_id) or ()
    is_module = bool(parent_decls) and parent_decls[0].kind == DeclarationKind.MODULE
    return (0 if is_module else 1, export_name, parent_id)


def choose_canonical_location(
    candidates: Mapping[SymbolId, str],
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
) -> CanonicalLocation:
    """Pick the canonical location among a symbol's export sites.

    Args:
        candidates: Parent id to export name; must not be empty.
        accessible_symbols: Collected declarations keyed by symbol id.

    Returns:
        The winning CanonicalLocation.
    """
    parent_id, export_name = min(
        candidates.items(),
        key=lambda item: _candidate_rank(item[0], item[1], accessible_symbols),
    )
    return CanonicalLocation(parent=parent_id, export_name=export_name)


def resolve_canonical_locations(
    export_sites: Mapping[SymbolId, Mapping[SymbolId, str]],
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    root_ids: Iterable[SymbolId] = (),
) -> Dict[SymbolId, CanonicalLocation]:
    """Collapse every symbol's export sites into one canonical location.

    Args:
        export_sites: Target id to ``{parent id: export name}``.
        accessible_symbols: Collected declarations keyed by symbol id.
        root_ids: Root symbols, which never get a canonical location.

    Returns:
        Symbol id to its CanonicalLocation, in export-site order.

    Raises:
        InvariantViolation: Some exported symbols have no export site
            leading back to a root.
    """
    roots = set(root_ids)
    preferred: Dict[SymbolId, CanonicalLocation] = {}
    contested = 0

    for symbol_id, candidates in export_sites.items():
        if symbol_id in roots or not candidates:
            continue
        if len(candidates) > 1:
            contested += 1
        preferred[symbol_id] = choose_canonical_location(candidates, accessible_symbols)

    settled = _settle_chains(preferred, export_sites, accessible_symbols)
    locations = {symbol_id: settled[symbol_id] for symbol_id in preferred}

    logger.info(
        "Resolved %d canonical location(s) (%d with multiple export sites)",
        len(locations),
        contested,
    )
    return locations


def _settle_chains(
    preferred: Mapping[SymbolId, CanonicalLocation],
    export_sites: Mapping[SymbolId, Mapping[SymbolId, str]],
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
) -> Dict[SymbolId, CanonicalLocation]:
    """Accept preferred locations whose parent chain reaches a root.

    A parent is settled when it is not itself waiting for a location
    (roots, for instance) or when it already has one. If a whole pass
    settles nothing, the remaining preferred parents only lead into
    re-export cycles; the first waiting symbol with a settled candidate
    takes its best settled candidate instead.
    """
    settled: Dict[SymbolId, CanonicalLocation] = {}

    def is_settled(parent_id: SymbolId) -> bool:
        return parent_id not in preferred or parent_id in settled

    pending: List[SymbolId] = list(preferred)
    while pending:
        waiting: List[SymbolId] = []
        for symbol_id in pending:
            location = preferred[symbol_id]
            if is_settled(location.parent):
                settled[symbol_id] = location
            else:
                waiting.append(symbol_id)

        if len(waiting) == len(pending):
            waiting = _break_cycle(waiting, export_sites, accessible_symbols, is_settled, settled)
        pending = waiting

    return settled


def _break_cycle(
    waiting: List[SymbolId],
    export_sites: Mapping[SymbolId, Mapping[SymbolId, str]],
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    is_settled: Callable[[SymbolId], bool],
    settled: Dict[SymbolId, CanonicalLocation],
) -> List[SymbolId]:
    """Settle one waiting symbol through a parent that already reaches a root."""
    for index, symbol_id in enumerate(waiting):
        fallback = {
            parent_id: export_name
            for parent_id, export_name in export_sites[symbol_id].items()
            if is_settled(parent_id)
        }
        if not fallback:
            continue
        location = choose_canonical_location(fallback, accessible_symbols)
        logger.debug(
            "Preferred parent of %s re-exports it in a cycle; using %s.%s",
            symbol_id,
            location.parent,
            location.export_name,
        )
        settled[symbol_id] = location
        return waiting[:index] + waiting[index + 1:]

    raise InvariantViolation(
        f"{len(waiting)} exported symbol(s) have no export chain leading to a "
        f"root: {', '.join(waiting)}"
    )


def apply_canonical_export_names(
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    locations: Mapping[SymbolId, CanonicalLocation],
) -> Dict[SymbolId, List[Declaration]]:
    """Rename declarations of exported symbols to their canonical export name.

    A symbol declared as ``Foo`` but exported as ``Bar`` is shown as ``Bar``.

    Args:
        accessible_symbols: Collected declarations keyed by symbol id.
        locations: Canonical locations keyed by symbol id.

    Returns:
        A new symbol table; declarations are copied, never mutated.
    """
    renamed: Dict[SymbolId, List[Declaration]] = {}
    for symbol_id, declarations in accessible_symbols.items():
        location = locations.get(symbol_id)
        if location is None:
            renamed[symbol_id] = list(declarations)
        else:
            renamed[symbol_id] = [
                decl.with_name(location.export_name) for decl in declarations
            ]
    return renamed


__all__ = [
    "apply_canonical_export_names",
    "choose_canonical_location",
    "resolve_canonical_locations",
]
