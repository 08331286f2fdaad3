"""Attach unexported symbols to the exported symbol that pulls them in.

Private helper types and unexported locals are never exported, but they
still need a place in the documentation when an exported declaration
mentions them. Each such symbol is owned by the nearest exported symbol
on its back-reference chain, which may run through other unexported
symbols (``X <- Y <- S1`` makes ``S1`` own both ``Y`` and ``X``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence

from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticCode,
    SymbolId,
)

logger = logging.getLogger("docgraph.graph.ops.inner_bits")


@dataclass(frozen=True)
class RelaxationResult:
    """Outcome of relaxing pending owner edges.

    Attributes:
        owners: Every symbol with a known exported owner.
        unresolved: Pending edges left after the fixed point (islands).
        passes: Number of full passes performed.
        truncated: Whether the pass limit stopped relaxation early.
    """

    owners: Dict[SymbolId, SymbolId]
    unresolved: Dict[SymbolId, SymbolId]
    passes: int
    truncated: bool = False


@dataclass(frozen=True)
class InnerBits:
    """Ownership of unexported symbols.

    Attributes:
        owner_of: Unexported symbol id to its exported owner id.
        groups: Owner id to the unexported symbols shown under it, in
            discovery order.
        dropped: Unexported symbols with no path to an exported symbol.
        diagnostics: Recovered problems.
    """

    owner_of: Dict[SymbolId, SymbolId]
    groups: Dict[SymbolId, List[SymbolId]]
    dropped: List[SymbolId] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def relax_owner_chains(
    direct: Mapping[SymbolId, SymbolId],
    pending: Mapping[SymbolId, SymbolId],
    max_passes: int = 0,
) -> RelaxationResult:
    """Resolve indirect owner edges to a fixed point.

    Each pass rewrites a pending ``U -> V`` edge to ``V``'s owner when ``V``
    is resolved, and otherwise copies ``V``'s own pending target onto ``U``
    (path compression). A pass that resolves nothing proves that no
    remaining edge can ever resolve, so the loop stops there; since every
    other pass removes at least one pending edge, it always terminates.

    Args:
        direct: Symbols already owned by an exported symbol.
        pending: Symbol to the unexported symbol it was pulled in by.
        max_passes: Optional cap on the number of passes (0 = unbounded).

    Returns:
        RelaxationResult with the resolved owners and leftover islands.
    """
    owners = dict(direct)
    remaining = dict(pending)
    passes = 0
    truncated = False

    while remaining:
        if max_passes and passes >= max_passes:
            truncated = True
            break
        passes += 1
        resolved_this_pass = 0
        for symbol_id, target in list(remaining.items()):
            if target in owners:
                owners[symbol_id] = owners[target]
                del remaining[symbol_id]
                resolved_this_pass += 1
            elif target in remaining:
                remaining[symbol_id] = remaining[target]
        if not resolved_this_pass:
            break

    return RelaxationResult(
        owners=owners, unresolved=remaining, passes=passes, truncated=truncated
    )


def resolve_inner_bits(
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    canonical_locations: Mapping[SymbolId, CanonicalLocation],
    references: Mapping[SymbolId, Sequence[SymbolId]],
    root_ids: Iterable[SymbolId] = (),
    max_passes: int = 0,
) -> InnerBits:
    """Group unexported symbols under their nearest exported referencer.

    Args:
        accessible_symbols: Collected declarations keyed by symbol id.
        canonical_locations: Canonical locations of exported symbols.
        references: Symbol id to the ids referencing it, in first-seen order.
        root_ids: Root symbol ids (never grouped).
        max_passes: Optional relaxation pass cap (0 = unbounded).

    Returns:
        InnerBits with owners, groups and dropped islands.
    """
    roots = set(root_ids)
    direct: Dict[SymbolId, SymbolId] = {}
    pending: Dict[SymbolId, SymbolId] = {}

    for symbol_id, declarations in accessible_symbols.items():
        if symbol_id in roots or symbol_id in canonical_locations:
            continue
        if declarations[0].kind == DeclarationKind.ENUM_MEMBER:
            continue
        referencers = references.get(symbol_id)
        if not referencers:
            continue
        exported = next(
            (ref for ref in referencers if ref in canonical_locations), None
        )
        if exported is not None:
            direct[symbol_id] = exported
        else:
            pending[symbol_id] = referencers[0]

    relaxation = relax_owner_chains(direct, pending, max_passes)
    logger.debug(
        "Relaxed %d indirect owner edge(s) in %d pass(es)",
        len(pending),
        relaxation.passes,
    )

    diagnostics: List[Diagnostic] = []
    if relaxation.truncated:
        logger.warning(
            "Owner relaxation stopped after %d pass(es) with %d edge(s) pending",
            relaxation.passes,
            len(relaxation.unresolved),
        )
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.RELAXATION_LIMIT,
                message=(
                    f"Owner relaxation hit the limit of {max_passes} pass(es); "
                    f"{len(relaxation.unresolved)} symbol(s) left ungrouped"
                ),
            )
        )

    for symbol_id in relaxation.unresolved:
        logger.debug("Dropping unreachable unexported symbol %s", symbol_id)

    owner_of: Dict[SymbolId, SymbolId] = {}
    groups: Dict[SymbolId, List[SymbolId]] = {}
    for symbol_id in accessible_symbols:
        owner = relaxation.owners.get(symbol_id)
        if owner is None:
            continue
        owner_of[symbol_id] = owner
        groups.setdefault(owner, []).append(symbol_id)

    logger.info(
        "Grouped %d unexported symbol(s) under %d exported symbol(s); dropped %d",
        len(owner_of),
        len(groups),
        len(relaxation.unresolved),
    )
    return InnerBits(
        owner_of=owner_of,
        groups=groups,
        dropped=list(relaxation.unresolved),
        diagnostics=diagnostics,
    )


__all__ = ["InnerBits", "RelaxationResult", "relax_owner_chains", "resolve_inner_bits"]
