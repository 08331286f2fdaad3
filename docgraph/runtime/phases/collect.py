"""
COLLECT phase implementation.

This phase discovers every symbol reachable from the roots, serializes
its declarations and records who references whom.
"""

import logging

from docgraph.graph.collector import SymbolCollector
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases.base import BasePhase

logger = logging.getLogger("docgraph.extraction.phase.collect")


class CollectPhase(BasePhase):
    """
    COLLECT phase: Worklist traversal from the root symbols.

    With ``modules_only`` enabled only modules and namespaces are
    serialized and no references are recorded.

    Every later phase reads the collected symbols.
    """

    PHASE = ExtractionPhase.COLLECT

    def execute(self, context: PhaseContext) -> None:
        """Execute COLLECT phase logic."""
        collector = SymbolCollector(context.host, context.config.hash_length)
        if context.config.modules_only:
            logger.info("Collecting modules and namespaces only")
            result = collector.collect_modules_only(context.roots)
        else:
            result = collector.collect(context.roots)

        self.state.update_phase_result(self.PHASE, "root_ids", result.root_ids)
        self.state.update_phase_result(self.PHASE, "symbols", result.symbols)
        self.state.update_phase_result(
            self.PHASE, "accessible_symbols", result.accessible_symbols
        )
        self.state.update_phase_result(self.PHASE, "references", result.references)
        self.state.update_phase_result(
            self.PHASE, "external_symbols", result.external_symbols
        )
        self.state.add_diagnostics(self.PHASE, result.diagnostics)

        if self.state.package_name is None and result.root_ids:
            first_display_name = next(iter(result.root_ids.values()))
            logger.debug("Using first root '%s' as package name", first_display_name)
            self.state.update_phase_result(self.PHASE, "package_name", first_display_name)
