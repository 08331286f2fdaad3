"""Build the final human-readable permalink ("good identifier") of each symbol.

Identifiers follow the canonical chain: a root is its display name (``/``
for the package itself), an exported symbol is ``<parent>.<export name>``
and an unexported symbol is ``<owner>.<declared name>``. An unexported
symbol whose name is shared with a sibling under the same owner, or is
already taken by an export or enum member of that owner, gets a
``-<index>`` suffix.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Mapping, Optional, Sequence, Set

from docgraph.graph.errors import InvariantViolation
from docgraph.graph.models.schema import (
    CanonicalLocation,
    Declaration,
    DeclarationKind,
    SymbolId,
)

logger = logging.getLogger("docgraph.graph.ops.identifiers")

INDEX_IDENTIFIER = "/"


def root_identifier(display_name: str, package_name: Optional[str]) -> str:
    """Identifier of a root symbol; the package root itself is the index path."""
    if package_name is not None and display_name == package_name:
        return INDEX_IDENTIFIER
    return display_name


class IdentifierAssigner:
    """Assign good identifiers in dependency order.

    Args:
        accessible_symbols: Collected declarations keyed by symbol id.
        canonical_locations: Canonical locations of exported symbols.
        symbols_for_inner_bit: Owner id to the unexported symbols under it.
        root_ids: Root symbol id to display name.
        package_name: Name whose root is shown as ``/``.
    """

    def __init__(
        self,
        accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
        canonical_locations: Mapping[SymbolId, CanonicalLocation],
        symbols_for_inner_bit: Mapping[SymbolId, Sequence[SymbolId]],
        root_ids: Mapping[SymbolId, str],
        package_name: Optional[str],
    ) -> None:
        self.accessible_symbols = accessible_symbols
        self.canonical_locations = canonical_locations
        self.symbols_for_inner_bit = symbols_for_inner_bit
        self.root_ids = root_ids
        self.package_name = package_name
        self._identifiers: Dict[SymbolId, str] = {}
        self._resolving: Set[SymbolId] = set()
        self._child_names: Dict[SymbolId, Set[str]] = {}

    def assign(self) -> Dict[SymbolId, str]:
        """Compute identifiers for roots, exported, grouped and enum-member symbols.

        Returns:
            Symbol id to identifier, in discovery order.

        Raises:
            InvariantViolation: An owner or canonical parent has no identifier,
                or the canonical chain loops.
        """
        for root_id, display_name in self.root_ids.items():
            self._identifiers[root_id] = root_identifier(display_name, self.package_name)

        for symbol_id in self.canonical_locations:
            self._exported_identifier(symbol_id)

        self._collect_child_names()
        for owner_id, members in self.symbols_for_inner_bit.items():
            self._assign_group(owner_id, members)

        self._assign_enum_members()

        ordered = {
            symbol_id: self._identifiers[symbol_id]
            for symbol_id in self.accessible_symbols
            if symbol_id in self._identifiers
        }
        logger.info("Assigned %d identifier(s)", len(ordered))
        return ordered

    def _name_of(self, symbol_id: SymbolId) -> str:
        return self.accessible_symbols[symbol_id][0].name

    def _exported_identifier(self, symbol_id: SymbolId) -> str:
        """Identifier of a root or exported symbol, computed recursively."""
        known = self._identifiers.get(symbol_id)
        if known is not None:
            return known
        if symbol_id in self._resolving:
            raise InvariantViolation(
                f"Canonical export chain of {symbol_id} loops back on itself"
            )

        location = self.canonical_locations.get(symbol_id)
        if location is None:
            raise InvariantViolation(
                f"No canonical location known for {symbol_id}; identifiers must "
                "be assigned after canonical resolution"
            )

        self._resolving.add(symbol_id)
        try:
            parent_identifier = self._exported_identifier(location.parent)
        finally:
            self._resolving.discard(symbol_id)

        identifier = f"{parent_identifier}.{location.export_name}"
        self._identifiers[symbol_id] = identifier
        return identifier

    def _assign_group(self, owner_id: SymbolId, members: Sequence[SymbolId]) -> None:
        """Identifiers for the unexported symbols shown under one owner."""
        owner_identifier = self._identifiers.get(owner_id)
        if owner_identifier is None:
            if owner_id not in self.canonical_locations:
                raise InvariantViolation(
                    f"Owner {owner_id} of an inner-bit group is neither a root "
                    "nor exported"
                )
            owner_identifier = self._exported_identifier(owner_id)

        taken = set(self._child_names.get(owner_id, ()))
        name_counts = Counter(self._name_of(member) for member in members)
        next_index: Counter = Counter()
        for member in members:
            name = self._name_of(member)
            if name_counts[name] > 1 or name in taken:
                index = next_index[name]
                while f"{name}-{index}" in taken:
                    index += 1
                next_index[name] = index + 1
                name = f"{name}-{index}"
            taken.add(name)
            self._identifiers[member] = f"{owner_identifier}.{name}"

    def _collect_child_names(self) -> None:
        """Names already used directly under each owner by exports and enum members."""
        for location in self.canonical_locations.values():
            self._child_names.setdefault(location.parent, set()).add(location.export_name)
        for owner_id in self.symbols_for_inner_bit:
            declarations = self.accessible_symbols.get(owner_id) or ()
            if not declarations or declarations[0].kind != DeclarationKind.ENUM:
                continue
            names = self._child_names.setdefault(owner_id, set())
            names.update(
                self._name_of(member_id)
                for member_id in declarations[0].members
                if member_id in self.accessible_symbols
            )

    def _assign_enum_members(self) -> None:
        """Enum members inherit their enum's identifier."""
        for symbol_id, declarations in self.accessible_symbols.items():
            first = declarations[0]
            if first.kind != DeclarationKind.ENUM:
                continue
            enum_identifier = self._identifiers.get(symbol_id)
            if enum_identifier is None:
                continue
            for member_id in first.members:
                if member_id not in self.accessible_symbols:
                    logger.debug(
                        "Enum member %s of %s was not collected", member_id, symbol_id
                    )
                    continue
                self._identifiers[member_id] = (
                    f"{enum_identifier}.{self._name_of(member_id)}"
                )


def assign_identifiers(
    accessible_symbols: Mapping[SymbolId, Sequence[Declaration]],
    canonical_locations: Mapping[SymbolId, CanonicalLocation],
    symbols_for_inner_bit: Mapping[SymbolId, Sequence[SymbolId]],
    root_ids: Mapping[SymbolId, str],
    package_name: Optional[str],
) -> Dict[SymbolId, str]:
    """Functional wrapper around :class:`IdentifierAssigner`."""
    return IdentifierAssigner(
        accessible_symbols,
        canonical_locations,
        symbols_for_inner_bit,
        root_ids,
        package_name,
    ).assign()


__all__ = [
    "INDEX_IDENTIFIER",
    "IdentifierAssigner",
    "assign_identifiers",
    "root_identifier",
]
