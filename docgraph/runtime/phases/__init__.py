"""
Phase implementations for the extraction lifecycle.

Each phase is a separate class implementing the BasePhase interface.
"""

from .base import BasePhase
from .collect import CollectPhase
from .exports import ExportsPhase
from .canonicalize import CanonicalizePhase
from .inner_bits import InnerBitsPhase
from .identifiers import IdentifiersPhase

__all__ = [
    "BasePhase",
    "CollectPhase",
    "ExportsPhase",
    "CanonicalizePhase",
    "InnerBitsPhase",
    "IdentifiersPhase",
]
