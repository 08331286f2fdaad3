"""Link external symbols to the packages that document them."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from docgraph.graph.models.schema import ExternalReference, SymbolId
from docgraph.runtime.protocols import ExternalReferenceResolver

logger = logging.getLogger("docgraph.graph.ops.externals")


def resolve_external_references(
    external_symbols: Iterable[SymbolId],
    resolver: Optional[ExternalReferenceResolver],
) -> Dict[SymbolId, ExternalReference]:
    """Ask the resolver where each external symbol is documented.

    Symbols the resolver does not know are left out of the table.

    Args:
        external_symbols: Ids of symbols outside the package.
        resolver: Caller-supplied lookup; None resolves nothing.

    Returns:
        External symbol id to its ExternalReference, ordered by id.
    """
    if resolver is None:
        return {}

    references: Dict[SymbolId, ExternalReference] = {}
    candidates = sorted(external_symbols)
    for symbol_id in candidates:
        reference = resolver(symbol_id)
        if reference is None:
            logger.debug("No documentation found for external symbol %s", symbol_id)
            continue
        references[symbol_id] = reference

    logger.info(
        "Linked %d of %d external symbol(s) to their packages",
        len(references),
        len(candidates),
    )
    return references


__all__ = ["resolve_external_references"]
