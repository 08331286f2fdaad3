"""
Protocol definitions for the analysis host and its collaborators.

Protocols provide abstract interfaces for dependency injection: the
extraction pipeline never imports a concrete front end. Anything that
quacks like these protocols (a compiler binding, an in-memory snapshot,
a test double) can drive an extraction.
"""

from typing import TYPE_CHECKING, Mapping, Optional, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from docgraph.graph.models.schema import Declaration, ExternalReference
    from docgraph.runtime.context import PhaseContext
    from docgraph.runtime.lifecycle import ExtractionPhase


class DeclarationSiteLike(Protocol):
    """One syntactic location where a symbol is declared."""

    kind: str
    file_path: str
    start: int
    end: int


class SymbolLike(Protocol):
    """A program entity as seen by the static-analysis front end.

    Implementations must be hashable; root symbols are passed as mapping keys.
    """

    name: str
    declarations: Sequence[DeclarationSiteLike]


class ReferenceObserver(Protocol):
    """
    Recorder injected into the serializer.

    The serializer must call ``observe_reference`` synchronously for every
    symbol it mentions while producing a declaration. The returned id is
    what the serializer should embed in its output.
    """

    def observe_reference(self, symbol: SymbolLike) -> str:
        """
        Record that the declaration being serialized mentions ``symbol``.

        Args:
            symbol: The mentioned symbol (already alias-resolved)

        Returns:
            The SymbolId of the mentioned symbol
        """
        ...


class AnalysisHost(Protocol):
    """
    Oracle answering questions about one analyzed program.

    Example:
        collector = SymbolCollector(host)
        result = collector.collect({entry_symbol: "my-package"})
    """

    def is_external(self, symbol: SymbolLike) -> bool:
        """Whether the symbol lives outside the package under analysis."""
        ...

    def should_include(self, site: DeclarationSiteLike) -> bool:
        """Whether a declaration site is inside the documented boundary."""
        ...

    def serialize(
        self, site: DeclarationSiteLike, observer: ReferenceObserver
    ) -> "Declaration":
        """Turn one declaration site into a Declaration, reporting references."""
        ...

    def get_exports_of(self, symbol: SymbolLike) -> Mapping[str, Optional[SymbolLike]]:
        """Export table of a module or namespace symbol (None = unresolved)."""
        ...


class ExternalReferenceResolver(Protocol):
    """Callable locating the documentation of an external symbol.

    Returns None when the symbol is not documented anywhere (built-in
    types, undocumented dependencies); such symbols stay plain ids.
    """

    def __call__(self, symbol_id: str) -> Optional["ExternalReference"]:
        ...


class LifecycleHook(Protocol):
    """Hook that executes before and after a specific extraction phase.

    Hooks may inspect the provided context. Failures inside a hook are
    logged by the runtime and never abort the extraction.

    Attributes:
        phase: ExtractionPhase this hook is associated with.
    """

    phase: "ExtractionPhase"

    def before(self, ctx: "PhaseContext") -> None:
        """Execute logic before the associated phase starts."""

    def after(self, ctx: "PhaseContext") -> None:
        """Execute logic after the associated phase completes."""
