"""
INNER_BITS phase implementation.

This phase attaches every referenced but unexported symbol to the
exported symbol that pulls it into the documentation.
"""

from docgraph.graph.ops.inner_bits import resolve_inner_bits
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases.base import BasePhase


class InnerBitsPhase(BasePhase):
    """
    INNER_BITS phase: Group unexported symbols under exported owners.

    Grouped symbols need an owner before they get identifiers.
    """

    PHASE = ExtractionPhase.INNER_BITS

    def execute(self, context: PhaseContext) -> None:
        """Execute INNER_BITS phase logic."""
        inner_bits = resolve_inner_bits(
            self.state.accessible_symbols,
            self.state.canonical_export_locations,
            self.state.references,
            self.state.root_ids,
            max_passes=context.config.max_relaxation_passes,
        )
        self.state.update_phase_result(self.PHASE, "owner_of", inner_bits.owner_of)
        self.state.update_phase_result(
            self.PHASE, "symbols_for_inner_bit", inner_bits.groups
        )
        self.state.add_diagnostics(self.PHASE, inner_bits.diagnostics)
