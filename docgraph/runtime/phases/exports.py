"""
EXPORTS phase implementation.

This phase walks the export tables of every module and namespace
reachable from the roots and records all export sites. Tables are asked
from the analysis host for the symbols found by COLLECT.
"""

from typing import Dict, Optional

from docgraph.graph.id_utils import safe_identify
from docgraph.graph.models.schema import SymbolId
from docgraph.graph.ops.exports import collect_export_sites
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases.base import BasePhase


class ExportsPhase(BasePhase):
    """
    EXPORTS phase: Build the raw export multimap.

    In strict mode an unresolved export aborts the run.
    """

    PHASE = ExtractionPhase.EXPORTS

    def execute(self, context: PhaseContext) -> None:
        """Execute EXPORTS phase logic."""
        host = context.host
        hash_length = context.config.hash_length
        symbols = self.state.symbols

        def exports_of(container_id: SymbolId) -> Dict[str, Optional[SymbolId]]:
            table = host.get_exports_of(symbols[container_id])
            return {
                export_name: None if target is None else safe_identify(target, hash_length)
                for export_name, target in table.items()
            }

        export_sites = collect_export_sites(
            self.state.root_ids,
            self.state.accessible_symbols,
            strict=context.config.strict,
            exports_of=exports_of,
        )
        self.state.update_phase_result(self.PHASE, "export_sites", export_sites.sites)
        self.state.add_diagnostics(self.PHASE, export_sites.diagnostics)
