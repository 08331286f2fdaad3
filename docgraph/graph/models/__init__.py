"""Data models used by the graph package."""

from .doc_graph import DocGraph
from .schema import (
    GLOBAL_THIS_SYMBOL_ID,
    SENTINEL_SYMBOL_IDS,
    UNDEFINED_SYMBOL_ID,
    UNKNOWN_SYMBOL_ID,
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    DeclarationSite,
    Diagnostic,
    DiagnosticCode,
    ExternalReference,
    SymbolId,
)

__all__ = [
    "CanonicalLocation",
    "Declaration",
    "DeclarationKind",
    "DeclarationSite",
    "Diagnostic",
    "DiagnosticCode",
    "ExternalReference",
    "DocGraph",
    "GLOBAL_THIS_SYMBOL_ID",
    "SENTINEL_SYMBOL_IDS",
    "SymbolId",
    "UNDEFINED_SYMBOL_ID",
    "UNKNOWN_SYMBOL_ID",
]
