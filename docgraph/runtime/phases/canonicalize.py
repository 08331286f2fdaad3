"""
CANONICALIZE phase implementation.

This phase collapses the export sites of each symbol into exactly one
canonical location, and optionally renames exported declarations to
their canonical export name.
"""

import logging

from docgraph.graph.ops.canonical import (
    apply_canonical_export_names,
    resolve_canonical_locations,
)
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases.base import BasePhase

logger = logging.getLogger("docgraph.extraction.phase.canonicalize")


class CanonicalizePhase(BasePhase):
    """
    CANONICALIZE phase: One home per exported symbol.

    Identifiers are derived from canonical locations.
    """

    PHASE = ExtractionPhase.CANONICALIZE

    def execute(self, context: PhaseContext) -> None:
        """Execute CANONICALIZE phase logic."""
        locations = resolve_canonical_locations(
            self.state.export_sites,
            self.state.accessible_symbols,
            self.state.root_ids,
        )
        self.state.update_phase_result(
            self.PHASE, "canonical_export_locations", locations
        )

        if context.config.apply_export_names:
            logger.info("Renaming exported declarations to their export names")
            self.state.update_phase_result(
                self.PHASE,
                "accessible_symbols",
                apply_canonical_export_names(self.state.accessible_symbols, locations),
            )
