"""Graph operations (export walking, canonicalization, grouping, identifiers, external links)."""

from .canonical import (
    apply_canonical_export_names,
    choose_canonical_location,
    resolve_canonical_locations,
)
from .exports import ExportSiteMap, ExportSites, ExportTableLookup, collect_export_sites
from .externals import resolve_external_references
from .identifiers import (
    INDEX_IDENTIFIER,
    IdentifierAssigner,
    assign_identifiers,
    root_identifier,
)
from .inner_bits import InnerBits, RelaxationResult, relax_owner_chains, resolve_inner_bits

__all__ = [
    "ExportSiteMap",
    "ExportSites",
    "ExportTableLookup",
    "INDEX_IDENTIFIER",
    "IdentifierAssigner",
    "InnerBits",
    "RelaxationResult",
    "apply_canonical_export_names",
    "assign_identifiers",
    "choose_canonical_location",
    "collect_export_sites",
    "relax_owner_chains",
    "resolve_canonical_locations",
    "resolve_external_references",
    "resolve_inner_bits",
    "root_identifier",
]
