"""Lifecycle phase definitions for documentation graph extraction.

This module defines the canonical execution phases that every extraction
follows: Collect→Exports→Canonicalize→InnerBits→Identifiers.
"""

from enum import Enum, auto


class ExtractionPhase(Enum):
    """Execution phases for an extraction.

    Each phase consumes only what earlier phases produced:
    - COLLECT: Discover every reachable symbol and its references
    - EXPORTS: Walk export tables from the roots
    - CANONICALIZE: Pick one canonical export location per symbol
    - INNER_BITS: Group unexported symbols under exported owners
    - IDENTIFIERS: Assign human-readable identifiers
    """

    COLLECT = auto()
    EXPORTS = auto()
    CANONICALIZE = auto()
    INNER_BITS = auto()
    IDENTIFIERS = auto()

    def __str__(self) -> str:
        """Return human-readable phase name.

        Returns:
            str: Phase name in title case.
        """
        return self.name.replace("_", " ").title()
