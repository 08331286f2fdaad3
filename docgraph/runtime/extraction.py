"""
Extraction orchestrator for the documentation graph lifecycle.

An ``Extraction`` owns one ``ExtractionState``, creates the phase
instances and runs them in lifecycle order. Each extraction is
independent; nothing is shared between runs.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Dict, Mapping, Optional, Sequence

from docgraph.config.schema import ExtractionConfig
from docgraph.graph.models.doc_graph import DocGraph
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.extraction_state import ExtractionState
from docgraph.runtime.lifecycle import ExtractionPhase
from docgraph.runtime.phases import (
    BasePhase,
    CanonicalizePhase,
    CollectPhase,
    ExportsPhase,
    IdentifiersPhase,
    InnerBitsPhase,
)
from docgraph.runtime.protocols import (
    AnalysisHost,
    ExternalReferenceResolver,
    LifecycleHook,
    SymbolLike,
)

logger = logging.getLogger("docgraph.extraction.orchestrator")


class Extraction:
    """
    Run every extraction phase for one package.

    Example:
        extraction = Extraction(host, {entry: "my-package"})
        doc_graph = extraction.run()

    Attributes:
        host: Analysis host answering symbol queries
        roots: Mapping from root symbol to display name
        state: ExtractionState shared by all phases
    """

    def __init__(
        self,
        host: AnalysisHost,
        roots: Mapping[SymbolLike, str],
        config: Optional[ExtractionConfig] = None,
        package_name: Optional[str] = None,
        lifecycle_hooks: Optional[Sequence[LifecycleHook]] = None,
        external_reference_resolver: Optional[ExternalReferenceResolver] = None,
    ) -> None:
        """
        Initialize the extraction.

        Args:
            host: Analysis host answering symbol queries
            roots: Mapping from root symbol to display name
            config: Optional ExtractionConfig; defaults are used when omitted
            package_name: Overrides ``config.package_name`` when given
            lifecycle_hooks: Optional hooks called around their phase
            external_reference_resolver: Optional lookup of where external
                symbols are documented
        """
        self.host = host
        self.roots = roots
        self.external_reference_resolver = external_reference_resolver
        effective_config = config or ExtractionConfig.default()
        self.state = ExtractionState(
            run_id=uuid.uuid4().hex,
            config=effective_config,
            package_name=package_name or effective_config.package_name,
            lifecycle_hooks=list(lifecycle_hooks or ()),
        )
        self._phases = self._create_phases()

    def _create_phases(self) -> Dict[ExtractionPhase, BasePhase]:
        """Create one phase instance per lifecycle phase, in execution order."""
        return {
            ExtractionPhase.COLLECT: CollectPhase(self.state),
            ExtractionPhase.EXPORTS: ExportsPhase(self.state),
            ExtractionPhase.CANONICALIZE: CanonicalizePhase(self.state),
            ExtractionPhase.INNER_BITS: InnerBitsPhase(self.state),
            ExtractionPhase.IDENTIFIERS: IdentifiersPhase(self.state),
        }

    def _create_context(self) -> PhaseContext:
        return PhaseContext(
            run_id=self.state.run_id,
            host=self.host,
            roots=self.roots,
            config=self.state.config,
            current_phase=self.state.current_phase,
            external_reference_resolver=self.external_reference_resolver,
        )

    def run(self) -> DocGraph:
        """
        Execute all phases in order and return the documentation graph.

        Returns:
            DocGraph with every phase result

        Raises:
            ExtractionError: A critical phase failed
        """
        self.state.start_time = time.time()
        logger.info(
            "Starting extraction %s for %d root(s)",
            self.state.run_id[:8],
            len(self.roots),
        )

        context = self._create_context()
        for phase in self._phases.values():
            phase.run(context)

        doc_graph = self.state.to_doc_graph()
        logger.info(
            "Extraction %s finished in %.2fs: %s",
            self.state.run_id[:8],
            time.time() - self.state.start_time,
            doc_graph.summary(),
        )
        return doc_graph


__all__ = ["Extraction"]
