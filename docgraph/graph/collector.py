"""Worklist-driven discovery of every symbol reachable from a set of roots.

Serializing a declaration is delegated to the analysis host. While it
serializes, the host reports each symbol it mentions to the injected
``ReferenceRecorder``; the recorder enqueues those symbols and records the
reverse reference edges. The traversal ends when the worklist drains,
which always happens because a symbol is enqueued at most once per id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Mapping

from pydantic import ValidationError

from docgraph.graph.errors import InvariantViolation
from docgraph.graph.id_utils import DEFAULT_HASH_LENGTH, identify
from docgraph.graph.models.schema import (
    SENTINEL_SYMBOL_IDS,
    UNKNOWN_SYMBOL_ID,
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticCode,
    SymbolId,
)
from docgraph.runtime.context import ExtractionContext
from docgraph.runtime.protocols import AnalysisHost, DeclarationSiteLike, SymbolLike

logger = logging.getLogger("docgraph.graph.collector")


@dataclass(frozen=True)
class CollectionResult:
    """Everything discovered by one collection run.

    Attributes:
        accessible_symbols: Symbol id to its non-empty declaration list, in
            discovery order.
        references: Symbol id to the ids of the symbols whose declarations
            mention it, in first-seen order.
        external_symbols: Ids of mentioned symbols outside the package.
        root_ids: Root symbol id to its display name.
        symbols: Symbol id to the in-memory symbol it was computed from.
        diagnostics: Recovered problems.
    """

    accessible_symbols: Dict[SymbolId, List[Declaration]]
    references: Dict[SymbolId, List[SymbolId]]
    external_symbols: FrozenSet[SymbolId]
    root_ids: Dict[SymbolId, str]
    symbols: Dict[SymbolId, SymbolLike] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class ReferenceRecorder:
    """Observer handed to the host serializer for one collection run."""

    def __init__(
        self,
        host: AnalysisHost,
        context: ExtractionContext,
        record_references: bool = True,
    ) -> None:
        self.host = host
        self.context = context
        self.record_references = record_references

    def observe_reference(self, symbol: SymbolLike) -> SymbolId:
        """Record a mention of ``symbol`` by the symbol being serialized.

        Args:
            symbol: Mentioned symbol.

        Returns:
            The mentioned symbol's id, for embedding in the declaration.
        """
        ctx = self.context
        if not symbol.declarations:
            if symbol.name in SENTINEL_SYMBOL_IDS:
                return symbol.name
            logger.warning("No declaration for referenced symbol %s", symbol.name)
            ctx.diagnostics.append(
                Diagnostic(
                    code=DiagnosticCode.MISSING_DECLARATIONS,
                    message=f"Referenced symbol '{symbol.name}' has no declarations",
                    symbol_id=ctx.currently_visiting,
                    detail=symbol.name,
                )
            )
            return UNKNOWN_SYMBOL_ID

        symbol_id = identify(symbol, ctx.hash_length)
        if self.host.is_external(symbol):
            if symbol_id not in ctx.external_symbols:
                logger.debug("External symbol %s (%s)", symbol.name, symbol_id)
            ctx.external_symbols[symbol_id] = None
            return symbol_id

        current = ctx.currently_visiting
        if self.record_references and current is not None and symbol_id != current:
            ctx.add_reference(symbol_id, current)
        ctx.enqueue(symbol_id, symbol)
        return symbol_id


def _is_container_site(site: DeclarationSiteLike) -> bool:
    """Whether a declaration site declares a module or namespace."""
    try:
        return DeclarationKind(site.kind).is_container
    except ValueError:
        return False


class SymbolCollector:
    """Discover all symbols reachable from root symbols.

    Example:
        collector = SymbolCollector(host)
        result = collector.collect({entry_symbol: "my-package"})
        print(len(result.accessible_symbols))
    """

    def __init__(self, host: AnalysisHost, hash_length: int = DEFAULT_HASH_LENGTH) -> None:
        """Initialize the collector.

        Args:
            host: Analysis host answering boundary and serialization queries.
            hash_length: Digest length used for symbol ids.
        """
        self.host = host
        self.hash_length = hash_length

    def collect(self, roots: Mapping[SymbolLike, str]) -> CollectionResult:
        """Serialize every reachable symbol and record who references whom.

        Args:
            roots: Mapping from root symbol to its display name.

        Returns:
            CollectionResult for this run.

        Raises:
            InvariantViolation: A reachable symbol has no visible declaration.
        """
        context = ExtractionContext(roots=roots, hash_length=self.hash_length)
        recorder = ReferenceRecorder(self.host, context)
        return self._drain(context, recorder, self._serialize_filtered)

    def collect_modules_only(self, roots: Mapping[SymbolLike, str]) -> CollectionResult:
        """Cheap traversal that only serializes modules and namespaces.

        Declarations that cannot export anything are replaced with
        ``unknown`` placeholders and no references are recorded. This is
        enough to compute export tables, for instance of dependencies.

        Args:
            roots: Mapping from root symbol to its display name.

        Returns:
            CollectionResult with an empty reference map.
        """
        context = ExtractionContext(roots=roots, hash_length=self.hash_length)
        recorder = ReferenceRecorder(self.host, context, record_references=False)
        return self._drain(context, recorder, self._serialize_containers)

    def _drain(
        self,
        context: ExtractionContext,
        recorder: ReferenceRecorder,
        serialize_symbol: Callable[
            [SymbolLike, ReferenceRecorder], List[Declaration]
        ],
    ) -> CollectionResult:
        """Run the worklist to exhaustion."""
        root_ids: Dict[SymbolId, str] = {}
        for symbol, display_name in context.roots.items():
            symbol_id = identify(symbol, context.hash_length)
            root_ids[symbol_id] = display_name
            context.enqueue(symbol_id, symbol)

        logger.info("Collecting symbols from %d root(s)", len(root_ids))

        while context.queue:
            symbol_id, symbol = context.queue.popleft()
            context.currently_visiting = symbol_id
            declarations = serialize_symbol(symbol, recorder)
            display_name = root_ids.get(symbol_id)
            if display_name is not None:
                declarations = [
                    decl.with_name(display_name)
                    if decl.kind == DeclarationKind.MODULE
                    else decl
                    for decl in declarations
                ]
            context.accessible_symbols[symbol_id] = declarations
        context.currently_visiting = None

        logger.info(
            "Collected %d accessible symbol(s), %d external symbol(s)",
            len(context.accessible_symbols),
            len(context.external_symbols),
        )

        return CollectionResult(
            accessible_symbols=context.accessible_symbols,
            references={
                referenced: list(referencers)
                for referenced, referencers in context.references.items()
            },
            external_symbols=frozenset(context.external_symbols),
            root_ids=root_ids,
            symbols=context.symbols,
            diagnostics=context.diagnostics,
        )

    def _serialize_filtered(
        self, symbol: SymbolLike, recorder: ReferenceRecorder
    ) -> List[Declaration]:
        """Serialize the declaration sites of a symbol that pass the boundary filter."""
        sites = list(symbol.declarations or ())
        if not sites:
            raise InvariantViolation(
                f"Symbol '{symbol.name}' in the worklist has no declarations"
            )

        declarations = [
            self._serialize_site(site, recorder)
            for site in sites
            if self.host.should_include(site)
        ]
        if not declarations:
            locations = ", ".join(
                f"{site.file_path}[{site.start}:{site.end}]" for site in sites
            )
            raise InvariantViolation(
                f"All declarations of symbol '{symbol.name}' were filtered out: "
                f"{locations}"
            )
        return declarations

    def _serialize_containers(
        self, symbol: SymbolLike, recorder: ReferenceRecorder
    ) -> List[Declaration]:
        """Serialize only module and namespace sites of a symbol."""
        sites = list(symbol.declarations or ())
        if not sites:
            raise InvariantViolation(
                f"Symbol '{symbol.name}' in the worklist has no declarations"
            )
        return [
            self._serialize_site(site, recorder)
            if _is_container_site(site)
            else Declaration(kind=DeclarationKind.UNKNOWN)
            for site in sites
        ]

    def _serialize_site(
        self, site: DeclarationSiteLike, recorder: ReferenceRecorder
    ) -> Declaration:
        """Serialize one site, validating whatever the host returns."""
        raw = self.host.serialize(site, recorder)
        if isinstance(raw, Declaration):
            return raw
        try:
            return Declaration.model_validate(raw)
        except ValidationError as exc:
            raise InvariantViolation(
                f"Host returned an invalid declaration for {site.file_path}"
                f"[{site.start}:{site.end}]: {exc}"
            ) from exc


__all__ = ["CollectionResult", "ReferenceRecorder", "SymbolCollector"]
