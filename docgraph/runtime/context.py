"""Per-run traversal context for symbol collection.

All mutable traversal state (worklist, seen-set, the symbol currently
being serialized, accumulated maps) lives in an ``ExtractionContext``
created for one call to the collector and discarded when it returns.
Nothing is stored at module level, so independent packages can be
extracted concurrently.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, Dict, List, Mapping, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from docgraph.graph.models.schema import Declaration, Diagnostic, SymbolId
    from docgraph.config.schema import ExtractionConfig
    from docgraph.runtime.lifecycle import ExtractionPhase
    from docgraph.runtime.protocols import (
        AnalysisHost,
        ExternalReferenceResolver,
        SymbolLike,
    )


@dataclass
class ExtractionContext:
    """Mutable state of one collection run.

    Args:
        roots: Mapping from root symbol to its display name.
        hash_length: Digest length used for symbol ids.
        queue: FIFO worklist of (id, symbol) pairs awaiting serialization.
        seen: Ids ever enqueued; re-adding one is a no-op.
        symbols: Id to in-memory symbol for every enqueued symbol.
        currently_visiting: Id of the symbol whose sites are being serialized.
        accessible_symbols: Id to its non-empty list of declarations.
        references: Referenced id to the ids referencing it, in first-seen order.
        external_symbols: Ids of symbols outside the package boundary.
        diagnostics: Recovered problems found during collection.
    """

    roots: Mapping[SymbolLike, str]
    hash_length: int
    queue: Deque[Tuple[SymbolId, SymbolLike]] = field(default_factory=deque)
    seen: Dict[SymbolId, None] = field(default_factory=dict)
    symbols: Dict[SymbolId, SymbolLike] = field(default_factory=dict)
    currently_visiting: Optional[SymbolId] = None
    accessible_symbols: Dict[SymbolId, List[Declaration]] = field(default_factory=dict)
    references: Dict[SymbolId, Dict[SymbolId, None]] = field(default_factory=dict)
    external_symbols: Dict[SymbolId, None] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def enqueue(self, symbol_id: SymbolId, symbol: SymbolLike) -> bool:
        """Add a symbol to the worklist unless it was already seen.

        Returns:
            True when the symbol was newly enqueued.
        """
        if symbol_id in self.seen:
            return False
        self.seen[symbol_id] = None
        self.symbols[symbol_id] = symbol
        self.queue.append((symbol_id, symbol))
        return True

    def add_reference(self, referenced: SymbolId, referencer: SymbolId) -> None:
        """Record the reverse edge ``referenced -> referencer``."""
        self.references.setdefault(referenced, {})[referencer] = None


@dataclass
class PhaseContext:
    """Read-only view of one extraction handed to phases and hooks.

    Args:
        run_id: Identifier of the extraction run.
        host: Analysis host answering symbol queries.
        roots: Mapping from root symbol to its display name.
        config: Effective extraction configuration.
        current_phase: Phase being executed when the context is handed out.
        external_reference_resolver: Optional lookup of where external
            symbols are documented.
    """

    run_id: str
    host: AnalysisHost
    roots: Mapping[SymbolLike, str]
    config: ExtractionConfig
    current_phase: Optional[ExtractionPhase] = None
    external_reference_resolver: Optional[ExternalReferenceResolver] = None
