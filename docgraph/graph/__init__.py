"""Public graph API surface."""

from docgraph.graph.collector import CollectionResult, ReferenceRecorder, SymbolCollector
from docgraph.graph.errors import (
    ExtractionError,
    InvariantViolation,
    UnidentifiableSymbolError,
    UnresolvedExportError,
)
from docgraph.graph.id_utils import (
    DEFAULT_HASH_LENGTH,
    hash_declaration_sites,
    identify,
    safe_identify,
)
from docgraph.graph.models import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    DeclarationSite,
    Diagnostic,
    DiagnosticCode,
    DocGraph,
    ExternalReference,
    SymbolId,
)
from docgraph.graph.ops import (
    InnerBits,
    apply_canonical_export_names,
    assign_identifiers,
    collect_export_sites,
    resolve_canonical_locations,
    resolve_external_references,
    resolve_inner_bits,
)
from docgraph.graph.snapshot import SnapshotHost, SnapshotSymbol

__all__ = [
    "CanonicalLocation",
    "CollectionResult",
    "DEFAULT_HASH_LENGTH",
    "Declaration",
    "DeclarationKind",
    "DeclarationSite",
    "Diagnostic",
    "DiagnosticCode",
    "DocGraph",
    "ExternalReference",
    "ExtractionError",
    "InnerBits",
    "InvariantViolation",
    "ReferenceRecorder",
    "SnapshotHost",
    "SnapshotSymbol",
    "SymbolCollector",
    "SymbolId",
    "UnidentifiableSymbolError",
    "UnresolvedExportError",
    "apply_canonical_export_names",
    "assign_identifiers",
    "collect_export_sites",
    "hash_declaration_sites",
    "identify",
    "resolve_canonical_locations",
    "resolve_external_references",
    "resolve_inner_bits",
    "safe_identify",
]
