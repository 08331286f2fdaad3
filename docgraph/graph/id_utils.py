"""Shared helpers for stable, content-addressed symbol identifiers.

A ``SymbolId`` is derived only from a symbol's declaration sites, never
from object identity, so two in-memory symbols describing the same
declarations (for example an alias and its target after resolution) get
the same id, and ids survive re-runs on unchanged source.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Iterable

from docgraph.graph.errors import InvariantViolation, UnidentifiableSymbolError
from docgraph.graph.models.schema import (
    SENTINEL_SYMBOL_IDS,
    UNKNOWN_SYMBOL_ID,
    SymbolId,
)
from docgraph.runtime.protocols import DeclarationSiteLike, SymbolLike

logger = logging.getLogger("docgraph.graph.id_utils")

DEFAULT_HASH_LENGTH = 16

_FIELD_SEPARATOR = ":"
_SITE_SEPARATOR = "|"


def _serialize_site(site: DeclarationSiteLike) -> str:
    """Serialize one declaration site as ``kind:path:start:end``."""
    try:
        kind = str(site.kind)
        file_path = str(site.file_path)
        start = int(site.start)
        end = int(site.end)
    except (AttributeError, TypeError, ValueError) as exc:
        raise InvariantViolation(
            f"Declaration site {site!r} cannot be serialized for hashing: {exc}"
        ) from exc

    if not kind or not file_path:
        raise InvariantViolation(
            f"Declaration site {site!r} is missing its kind or file path"
        )
    return _FIELD_SEPARATOR.join((kind, file_path, str(start), str(end)))


def hash_declaration_sites(
    sites: Iterable[DeclarationSiteLike], length: int = DEFAULT_HASH_LENGTH
) -> SymbolId:
    """Hash declaration sites into a stable identifier.

    Args:
        sites: Declaration sites in their natural declaration order.
        length: Number of hex digits kept from the SHA-256 digest.

    Returns:
        Hex digest prefix identifying the site set.
    """
    joined = _SITE_SEPARATOR.join(_serialize_site(site) for site in sites)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:length]


def identify(symbol: SymbolLike, length: int = DEFAULT_HASH_LENGTH) -> SymbolId:
    """Return the content-addressed identifier of a symbol.

    Args:
        symbol: Symbol exposing ``name`` and ``declarations``.
        length: Number of hex digits kept from the digest.

    Returns:
        The symbol id, or the symbol's name for the well-known
        declaration-less sentinels.

    Raises:
        UnidentifiableSymbolError: The symbol has no declarations and is not
            a sentinel.
    """
    declarations = symbol.declarations or ()
    if not declarations:
        if symbol.name in SENTINEL_SYMBOL_IDS:
            return symbol.name
        raise UnidentifiableSymbolError(
            f"Symbol '{symbol.name}' has no declarations and no sentinel id"
        )
    return hash_declaration_sites(declarations, length)


def safe_identify(symbol: SymbolLike, length: int = DEFAULT_HASH_LENGTH) -> SymbolId:
    """Like :func:`identify` but degrades to ``"unknown"`` with a warning."""
    try:
        return identify(symbol, length)
    except UnidentifiableSymbolError:
        logger.warning("No declaration for symbol %s", symbol.name)
        return UNKNOWN_SYMBOL_ID
