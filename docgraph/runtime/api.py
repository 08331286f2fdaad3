"""Library-facing helpers for running an extraction.

The CLI uses the ``Extraction`` class directly. This module provides a
slim convenience wrapper that builds and runs an extraction in a single
call.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from docgraph.config.schema import ExtractionConfig
from docgraph.graph.models.doc_graph import DocGraph
from docgraph.runtime.extraction import Extraction
from docgraph.runtime.protocols import (
    AnalysisHost,
    ExternalReferenceResolver,
    LifecycleHook,
    SymbolLike,
)


def extract_doc_graph(
    host: AnalysisHost,
    roots: Mapping[SymbolLike, str],
    config: Optional[ExtractionConfig] = None,
    package_name: Optional[str] = None,
    lifecycle_hooks: Optional[Sequence[LifecycleHook]] = None,
    external_reference_resolver: Optional[ExternalReferenceResolver] = None,
) -> DocGraph:
    """Run the whole extraction pipeline over one package.

    Args:
        host: Analysis host answering symbol queries.
        roots: Mapping from root symbol to display name.
        config: Optional ExtractionConfig. When omitted,
            ``ExtractionConfig.default()`` is used.
        package_name: Name whose root is shown as ``/``. Falls back to
            ``config.package_name``, then to the first root's display name.
        lifecycle_hooks: Optional sequence of lifecycle hooks.
        external_reference_resolver: Optional lookup returning where an
            external symbol id is documented (package, version, id there).

    Returns:
        The immutable DocGraph.
    """
    return Extraction(
        host,
        roots,
        config=config,
        package_name=package_name,
        lifecycle_hooks=lifecycle_hooks,
        external_reference_resolver=external_reference_resolver,
    ).run()


__all__ = ["extract_doc_graph"]
