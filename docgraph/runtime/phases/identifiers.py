"""
IDENTIFIERS phase implementation.

This phase assigns the final human-readable identifier of every root,
exported, grouped and enum-member symbol, and links external symbols to
the packages documenting them when a resolver is configured.
"""

from docgraph.graph.ops.externals import resolve_external_references
from docgraph.graph.ops.identifiers import assign_identifiers
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases.base import BasePhase


class IdentifiersPhase(BasePhase):
    """
    IDENTIFIERS phase: Permalinks following the canonical chain.

    A broken canonical chain is an invariant violation.
    """

    PHASE = ExtractionPhase.IDENTIFIERS

    def execute(self, context: PhaseContext) -> None:
        """Execute IDENTIFIERS phase logic."""
        identifiers = assign_identifiers(
            self.state.accessible_symbols,
            self.state.canonical_export_locations,
            self.state.symbols_for_inner_bit,
            self.state.root_ids,
            self.state.package_name,
        )
        self.state.update_phase_result(self.PHASE, "good_identifiers", identifiers)

        external_references = resolve_external_references(
            self.state.external_symbols, context.external_reference_resolver
        )
        self.state.update_phase_result(
            self.PHASE, "external_references", external_references
        )
