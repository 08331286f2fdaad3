"""In-memory analysis host built from a JSON-compatible snapshot.

A snapshot describes the result of running a static-analysis front end
over one package: its symbols, their declaration sites, what each site
exports and mentions, and which symbols lie outside the package. It lets
the extraction pipeline run without a live compiler (CLI, tests, caches).

Snapshot format::

    {
      "package": "my-package",
      "roots": {"index": "my-package"},
      "symbols": {
        "index": {
          "name": "index",
          "declarations": [
            {"kind": "module", "file_path": "/src/index.ts", "start": 0,
             "end": 120, "exports": {"Button": "button", "broken": null}}
          ]
        },
        "button": {
          "name": "Button",
          "declarations": [
            {"kind": "class", "file_path": "/src/button.ts", "start": 10,
             "end": 80, "references": ["props"]}
          ]
        },
        "react": {
          "name": "React",
          "external": true,
          "reference": {"package": "react", "version": "18.2.0", "id": "9f1c0e2ab44d7a10"},
          "declarations": [
            {"kind": "namespace", "file_path": "/node_modules/react/index.d.ts",
             "start": 0, "end": 900}
          ]
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from docgraph.graph.id_utils import DEFAULT_HASH_LENGTH, identify
from docgraph.graph.models.schema import (
    Declaration,
    DeclarationKind,
    ExternalReference,
    SymbolId,
)
from docgraph.runtime.protocols import ReferenceObserver

logger = logging.getLogger("docgraph.graph.snapshot")

_CONTAINER_KINDS = frozenset(kind.value for kind in DeclarationKind if kind.is_container)


# =============================================================================
# Snapshot document schema
# =============================================================================


class SnapshotSiteSpec(BaseModel):
    """One declaration site of a snapshot symbol."""

    model_config = ConfigDict(extra="allow")

    kind: Annotated[str, Field(..., description="Declaration kind tag")]
    file_path: Annotated[str, Field(..., description="Absolute source file path")]
    start: Annotated[int, Field(..., ge=0)]
    end: Annotated[int, Field(..., ge=0)]
    include: Annotated[
        bool, Field(default=True, description="Whether the site is inside the package")
    ]
    name: Annotated[
        Optional[str], Field(default=None, description="Declared name; defaults to the symbol name")
    ]
    docs: str = ""
    exports: Annotated[
        Dict[str, Optional[str]],
        Field(default_factory=dict, description="Export name to symbol key (null = unresolved)"),
    ]
    references: Annotated[
        List[str], Field(default_factory=list, description="Keys of mentioned symbols")
    ]
    members: Annotated[
        List[str], Field(default_factory=list, description="Keys of enum member symbols")
    ]


class SnapshotReferenceSpec(BaseModel):
    """Where an external symbol is documented."""

    model_config = ConfigDict(extra="forbid")

    package: str
    version: str
    id: Annotated[str, Field(..., description="Symbol id inside the documenting package")]


class SnapshotSymbolSpec(BaseModel):
    """A symbol of the snapshot."""

    model_config = ConfigDict(extra="forbid")

    name: str
    external: bool = False
    reference: Optional[SnapshotReferenceSpec] = None
    declarations: List[SnapshotSiteSpec] = Field(default_factory=list)


class SnapshotDocument(BaseModel):
    """Top-level snapshot document."""

    model_config = ConfigDict(extra="forbid")

    package: Optional[str] = None
    roots: Dict[str, str] = Field(default_factory=dict)
    symbols: Dict[str, SnapshotSymbolSpec] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_symbol_keys(self) -> "SnapshotDocument":
        """Every key mentioned anywhere must name a snapshot symbol."""
        known = self.symbols.keys()
        for key in self.roots:
            if key not in known:
                raise ValueError(f"Root '{key}' is not a snapshot symbol")
        for owner, spec in self.symbols.items():
            for site in spec.declarations:
                mentioned = list(site.references) + list(site.members)
                mentioned += [target for target in site.exports.values() if target]
                for key in mentioned:
                    if key not in known:
                        raise ValueError(
                            f"Symbol '{owner}' mentions unknown symbol '{key}'"
                        )
        return self


# =============================================================================
# Host implementation
# =============================================================================


@dataclass(frozen=True)
class SnapshotSite:
    """Declaration site handed to the pipeline.

    ``owner`` and ``index`` locate the site spec inside the snapshot; only
    ``kind``, ``file_path``, ``start`` and ``end`` contribute to identity.
    """

    kind: str
    file_path: str
    start: int
    end: int
    owner: str
    index: int
    include: bool = True


@dataclass(frozen=True)
class SnapshotSymbol:
    """Symbol handed to the pipeline; hashable so it can key the roots mapping."""

    key: str
    name: str
    declarations: Tuple[SnapshotSite, ...]


class SnapshotHost:
    """AnalysisHost answering queries from a SnapshotDocument.

    Example:
        host = SnapshotHost.from_file("snapshot.json")
        graph = extract_doc_graph(host, host.roots(), package_name=host.package_name)
    """

    def __init__(self, document: SnapshotDocument) -> None:
        """Initialize the host.

        Args:
            document: Validated snapshot document.
        """
        self.document = document
        self.package_name = document.package
        self.symbols: Dict[str, SnapshotSymbol] = {}
        for key, spec in document.symbols.items():
            sites = tuple(
                SnapshotSite(
                    kind=site.kind,
                    file_path=site.file_path,
                    start=site.start,
                    end=site.end,
                    owner=key,
                    index=index,
                    include=site.include,
                )
                for index, site in enumerate(spec.declarations)
            )
            self.symbols[key] = SnapshotSymbol(key=key, name=spec.name, declarations=sites)
        logger.debug("Loaded snapshot with %d symbol(s)", len(self.symbols))

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "SnapshotHost":
        """Build a host from an already-parsed snapshot mapping."""
        return cls(SnapshotDocument.model_validate(data))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SnapshotHost":
        """Load a snapshot from a JSON file."""
        snapshot_path = Path(path)
        logger.info("Loading analysis snapshot: %s", snapshot_path)
        with open(snapshot_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Top-level snapshot must be a mapping/dict")
        return cls.from_dict(data)

    def symbol(self, key: str) -> SnapshotSymbol:
        """Return the snapshot symbol with the given key."""
        return self.symbols[key]

    def roots(self) -> Dict[SnapshotSymbol, str]:
        """Root symbols of the snapshot mapped to their display names."""
        return {self.symbols[key]: name for key, name in self.document.roots.items()}

    def external_references(
        self, hash_length: int = DEFAULT_HASH_LENGTH
    ) -> Dict[SymbolId, ExternalReference]:
        """Documentation locations of the snapshot symbols that declare one.

        Args:
            hash_length: Digest length used for symbol ids; must match the
                extraction configuration.

        Returns:
            Symbol id to ExternalReference, usable as a resolver via ``.get``.
        """
        references: Dict[SymbolId, ExternalReference] = {}
        for key, spec in self.document.symbols.items():
            if spec.reference is None or not spec.declarations:
                continue
            symbol_id = identify(self.symbols[key], hash_length)
            references[symbol_id] = ExternalReference(
                package=spec.reference.package,
                version=spec.reference.version,
                symbol_id=spec.reference.id,
            )
        return references

    # ===== AnalysisHost Protocol Implementation =====

    def is_external(self, symbol: SnapshotSymbol) -> bool:
        return self.document.symbols[symbol.key].external

    def should_include(self, site: SnapshotSite) -> bool:
        return site.include

    def get_exports_of(self, symbol: SnapshotSymbol) -> Dict[str, Optional[SnapshotSymbol]]:
        exports: Dict[str, Optional[SnapshotSymbol]] = {}
        for site in self.document.symbols[symbol.key].declarations:
            if not site.include or site.kind not in _CONTAINER_KINDS:
                continue
            for export_name, target in site.exports.items():
                exports[export_name] = self.symbols[target] if target else None
        return exports

    def serialize(self, site: SnapshotSite, observer: ReferenceObserver) -> Declaration:
        spec = self.document.symbols[site.owner].declarations[site.index]
        try:
            kind = DeclarationKind(site.kind)
        except ValueError:
            kind = DeclarationKind.UNKNOWN

        exports: Dict[str, Optional[SymbolId]] = {}
        if kind.is_container:
            for export_name, target in spec.exports.items():
                exports[export_name] = (
                    observer.observe_reference(self.symbols[target]) if target else None
                )

        references = [
            observer.observe_reference(self.symbols[key]) for key in spec.references
        ]
        members = [observer.observe_reference(self.symbols[key]) for key in spec.members]

        return Declaration(
            kind=kind,
            name=spec.name if spec.name is not None else self.symbols[site.owner].name,
            docs=spec.docs,
            exports=exports,
            members=members,
            references=references,
        )


__all__ = [
    "SnapshotDocument",
    "SnapshotHost",
    "SnapshotReferenceSpec",
    "SnapshotSite",
    "SnapshotSiteSpec",
    "SnapshotSymbol",
    "SnapshotSymbolSpec",
]
