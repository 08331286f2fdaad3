"""Configuration schema and validation for docgraph."""

from .schema import ExtractionConfig

__all__ = ["ExtractionConfig"]
