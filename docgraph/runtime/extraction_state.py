"""
Extraction state container with centralized state management.

All phase results of one extraction live on an ``ExtractionState``.
Every mutation goes through ``update_phase_result()`` so it is logged
with the phase that made it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Optional

from docgraph.config.schema import ExtractionConfig
from docgraph.graph.models.doc_graph import DocGraph
from docgraph.runtime.lifecycle import ExtractionPhase

if TYPE_CHECKING:  # pragma: no cover
    from docgraph.graph.models.schema import (
        CanonicalLocation,
        Declaration,
        Diagnostic,
        ExternalReference,
        SymbolId,
    )
    from docgraph.runtime.protocols import LifecycleHook, SymbolLike

logger = logging.getLogger("docgraph.extraction.state")


@dataclass
class ExtractionState:
    """
    Centralized state container for one extraction.

    Attributes:
        run_id: Unique identifier for this extraction
        config: Effective extraction configuration
        package_name: Name whose root symbol is shown as ``/``
        lifecycle_hooks: Hooks called before/after their phase

        root_ids: Root symbol id to display name (COLLECT)
        symbols: Symbol id to in-memory symbol (COLLECT, read by EXPORTS)
        accessible_symbols: Symbol id to declarations (COLLECT, CANONICALIZE)
        references: Symbol id to its referencers (COLLECT)
        external_symbols: Ids of external symbols (COLLECT)
        export_sites: Target id to ``{parent: export name}`` (EXPORTS)
        canonical_export_locations: Canonical homes (CANONICALIZE)
        owner_of: Unexported symbol to owner (INNER_BITS)
        symbols_for_inner_bit: Owner to grouped symbols (INNER_BITS)
        good_identifiers: Symbol id to identifier (IDENTIFIERS)
        external_references: External id to its documentation (IDENTIFIERS)
        diagnostics: Recovered problems from every phase
        current_phase: Currently executing phase
        start_time: Extraction start timestamp
    """

    # ===== Basic Configuration =====
    run_id: str
    config: ExtractionConfig = field(default_factory=ExtractionConfig.default)
    package_name: Optional[str] = None
    lifecycle_hooks: List["LifecycleHook"] = field(default_factory=list)

    # ===== Phase Results =====
    root_ids: Dict["SymbolId", str] = field(default_factory=dict)
    symbols: Dict["SymbolId", "SymbolLike"] = field(default_factory=dict)
    accessible_symbols: Dict["SymbolId", List["Declaration"]] = field(default_factory=dict)
    references: Dict["SymbolId", List["SymbolId"]] = field(default_factory=dict)
    external_symbols: FrozenSet["SymbolId"] = field(default_factory=frozenset)
    export_sites: Dict["SymbolId", Dict["SymbolId", str]] = field(default_factory=dict)
    canonical_export_locations: Dict["SymbolId", "CanonicalLocation"] = field(
        default_factory=dict
    )
    owner_of: Dict["SymbolId", "SymbolId"] = field(default_factory=dict)
    symbols_for_inner_bit: Dict["SymbolId", List["SymbolId"]] = field(default_factory=dict)
    good_identifiers: Dict["SymbolId", str] = field(default_factory=dict)
    external_references: Dict["SymbolId", "ExternalReference"] = field(default_factory=dict)
    diagnostics: List["Diagnostic"] = field(default_factory=list)
    current_phase: Optional[ExtractionPhase] = None
    start_time: float = 0.0

    def update_phase_result(
        self,
        phase: ExtractionPhase,
        key: str,
        value: Any,
    ) -> None:
        """
        Centralized state update with logging.

        Args:
            phase: The phase making the update
            key: State attribute name to update
            value: New value for the attribute

        Example:
            state.update_phase_result(
                ExtractionPhase.IDENTIFIERS,
                'good_identifiers',
                {'3f2a...': '/.Button'}
            )
        """
        value_repr = (
            f"{type(value).__name__}(len={len(value)})"
            if hasattr(value, "__len__")
            else f"{type(value).__name__}"
        )
        logger.debug(
            "[%s] Phase %s updated state[%s] = %s",
            self.run_id[:8],
            phase.name,
            key,
            value_repr,
        )

        # Warn if creating a new attribute (potential typo)
        if not hasattr(self, key):
            logger.warning(
                "Phase %s creating new state attribute: %s",
                phase.name,
                key,
            )

        setattr(self, key, value)

    def add_diagnostics(self, phase: ExtractionPhase, diagnostics: List["Diagnostic"]) -> None:
        """Append recovered problems reported by a phase."""
        if not diagnostics:
            return
        logger.debug(
            "[%s] Phase %s reported %d diagnostic(s)",
            self.run_id[:8],
            phase.name,
            len(diagnostics),
        )
        self.diagnostics.extend(diagnostics)

    def to_doc_graph(self) -> DocGraph:
        """Freeze the accumulated phase results into a DocGraph."""
        return DocGraph(
            package_name=self.package_name,
            root_ids=dict(self.root_ids),
            accessible_symbols=dict(self.accessible_symbols),
            references=dict(self.references),
            external_symbols=frozenset(self.external_symbols),
            canonical_export_locations=dict(self.canonical_export_locations),
            symbols_for_inner_bit=dict(self.symbols_for_inner_bit),
            owner_of=dict(self.owner_of),
            good_identifiers=dict(self.good_identifiers),
            external_references=dict(self.external_references),
            diagnostics=list(self.diagnostics),
        )

    def __repr__(self) -> str:
        """Readable representation for debugging."""
        return (
            f"ExtractionState("
            f"id={self.run_id[:8]}..., "
            f"package={self.package_name}, "
            f"phase={self.current_phase.name if self.current_phase else None})"
        )
