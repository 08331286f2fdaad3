"""Canonical symbol graph schema models.

This module defines a single source of truth for declaration kinds and the
shapes exchanged between the analysis host and the extraction pipeline.
Serialized declarations are validated with Pydantic so that a misbehaving
host is caught at the boundary instead of deep inside a later phase.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

# Content-addressed symbol identity (see docgraph.graph.id_utils).
SymbolId = str

UNKNOWN_SYMBOL_ID: SymbolId = "unknown"
GLOBAL_THIS_SYMBOL_ID: SymbolId = "globalThis"
UNDEFINED_SYMBOL_ID: SymbolId = "undefined"

# Names of entities that legitimately have no declaration site.
SENTINEL_SYMBOL_IDS = frozenset(
    {UNKNOWN_SYMBOL_ID, GLOBAL_THIS_SYMBOL_ID, UNDEFINED_SYMBOL_ID}
)


class DeclarationKind(str, Enum):
    """Tagged variants a serialized declaration can take."""

    MODULE = "module"
    NAMESPACE = "namespace"
    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    TYPE_ALIAS = "type-alias"
    INTERFACE = "interface"
    ENUM = "enum"
    ENUM_MEMBER = "enum-member"
    UNKNOWN = "unknown"

    @property
    def is_container(self) -> bool:
        """Whether declarations of this kind carry an export table."""
        return self in (DeclarationKind.MODULE, DeclarationKind.NAMESPACE)


class Declaration(BaseModel):
    """One syntactic rendering of a symbol, as produced by the host serializer.

    Shape-specific fields (parameters, members of a class, type text, ...)
    are accepted as extra attributes and passed through untouched; the
    pipeline only reads the fields declared here.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    kind: Annotated[DeclarationKind, Field(..., description="Declaration variant tag")]
    name: Annotated[str, Field(default="", description="Declared name")]
    docs: Annotated[str, Field(default="", description="Rendered documentation text")]
    exports: Annotated[
        Dict[str, Optional[SymbolId]],
        Field(
            default_factory=dict,
            description=(
                "Export table for modules and namespaces; None marks an export "
                "whose target could not be resolved"
            ),
        ),
    ]
    members: Annotated[
        List[SymbolId],
        Field(default_factory=list, description="Enum member symbol ids"),
    ]

    def with_name(self, name: str) -> "Declaration":
        """Return a copy of this declaration carrying a different name."""
        return self.model_copy(update={"name": name})

    def to_dict(self) -> Dict[str, Any]:
        """Dump to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


@dataclass(frozen=True)
class DeclarationSite:
    """Location of one declaration of a symbol.

    Attributes:
        kind: Declaration kind tag as reported by the front end.
        file_path: Absolute path of the declaring source file.
        start: Start offset of the declaration in the file.
        end: End offset of the declaration in the file.
    """

    kind: str
    file_path: str
    start: int
    end: int


class CanonicalLocation(NamedTuple):
    """The single chosen home of an exported symbol."""

    parent: SymbolId
    export_name: str


class ExternalReference(NamedTuple):
    """Where an external symbol is documented: its package, version and id there."""

    package: str
    version: str
    symbol_id: SymbolId


class DiagnosticCode(str, Enum):
    """Categories of recovered problems."""

    UNRESOLVED_EXPORT = "unresolved-export"
    MISSING_DECLARATIONS = "missing-declarations"
    RELAXATION_LIMIT = "relaxation-limit"


@dataclass(frozen=True)
class Diagnostic:
    """A recovered problem surfaced to operators.

    Attributes:
        code: Diagnostic category.
        message: Human-readable description.
        symbol_id: Symbol the diagnostic is about, when known.
        detail: Extra context (export name, symbol name, ...).
    """

    code: DiagnosticCode
    message: str
    symbol_id: Optional[SymbolId] = None
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Dump to a JSON-compatible dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "symbol_id": self.symbol_id,
            "detail": self.detail,
        }
