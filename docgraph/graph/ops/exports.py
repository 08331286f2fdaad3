"""Enumerate every export site reachable from the root modules.

Each module or namespace reached from a root has its export table walked
exactly once. Every ``(parent, export_name) -> target`` binding is recorded,
so a symbol re-exported through several containers ends up with all of
its export sites; the canonical resolver later picks one of them.

Export tables come from the analysis host when a lookup is given, and
from the serialized container declarations otherwise.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Mapping, Optional, Sequence

from docgraph.graph.errors import UnresolvedExportError
from docgraph.graph.models.schema import (
    Declaration,
    Diagnostic,
    DiagnosticCode,
    SymbolId,
)

logger = logging.getLogger("docgraph.graph.ops.exports")

# target symbol -> {parent container -> export name}
ExportSiteMap = Dict[SymbolId, Dict[SymbolId, str]]

# container id -> {export name -> target id (None = unresolved)}
ExportTableLookup = Callable[[SymbolId], Mapping[str, Optional[SymbolId]]]


@dataclass(frozen=True)
class ExportSites:
    """Raw export multimap plus the problems found while building it.

    Attributes:
        sites: Target symbol id to ``{parent id: export name}``.
        diagnostics: One entry per export that did not resolve to a symbol.
    """

    sites: ExportSiteMap
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _is_container(declarations: Sequence[Declaration]) -> bool:
    return any(decl.kind.is_container for decl in declarations)


def _declared_exports(declarations: Sequence[Declaration]) -> Dict[str, Optional[SymbolId]]:
    """Merged export table of the container declarations of one symbol."""
    table: Dict[str, Optional[SymbolId]] = {}
    for decl in declarations:
        if decl.kind.is_container:
            table.update(decl.exports)
    return table


def collect_export_sites(
    root_ids: Iterable[SymbolId],
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    strict: bool = False,
    exports_of: Optional[ExportTableLookup] = None,
) -> ExportSites:
    """Walk export tables recursively starting at the root modules.

    Args:
        root_ids: Ids of the root module symbols.
        accessible_symbols: Collected declarations keyed by symbol id.
        strict: Raise instead of recording a diagnostic when an export
            target is unresolved.
        exports_of: Export table of a container id, as answered by the
            analysis host. Defaults to the tables carried by the
            serialized declarations.

    Returns:
        ExportSites for every accessible exported symbol.

    Raises:
        UnresolvedExportError: In strict mode, for the first unresolved export.
    """
    sites: ExportSiteMap = {}
    diagnostics: List[Diagnostic] = []

    queue: Deque[SymbolId] = deque()
    seen: Dict[SymbolId, None] = {}
    for root_id in root_ids:
        if root_id not in seen:
            seen[root_id] = None
            queue.append(root_id)

    while queue:
        container_id = queue.popleft()
        declarations = accessible_symbols.get(container_id)
        if not declarations:
            logger.debug("Container %s was not collected; skipping", container_id)
            continue

        if not _is_container(declarations):
            continue
        container_name = declarations[0].name
        if exports_of is not None:
            table = exports_of(container_id)
        else:
            table = _declared_exports(declarations)

        for export_name, target_id in table.items():
            if target_id is None:
                if strict:
                    raise UnresolvedExportError(container_id, export_name)
                logger.warning(
                    "Export '%s' of %s (%s) has no resolvable target",
                    export_name,
                    container_name,
                    container_id,
                )
                diagnostics.append(
                    Diagnostic(
                        code=DiagnosticCode.UNRESOLVED_EXPORT,
                        message=(
                            f"Export '{export_name}' of '{container_name}' could "
                            "not be resolved"
                        ),
                        symbol_id=container_id,
                        detail=export_name,
                    )
                )
                continue

            target_decls = accessible_symbols.get(target_id)
            if not target_decls:
                # External or filtered out; not documented here.
                continue

            locations = sites.setdefault(target_id, {})
            previous = locations.get(container_id)
            if previous is None or export_name < previous:
                locations[container_id] = export_name

            if target_id not in seen and _is_container(target_decls):
                seen[target_id] = None
                queue.append(target_id)

    logger.info(
        "Found export sites for %d symbol(s) across %d container(s)",
        len(sites),
        len(seen),
    )
    return ExportSites(sites=sites, diagnostics=diagnostics)


__all__ = ["ExportSiteMap", "ExportSites", "ExportTableLookup", "collect_export_sites"]
