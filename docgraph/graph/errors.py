"""Exception hierarchy for documentation graph extraction.

Errors fall into two groups:

* fatal errors (``InvariantViolation``) mean the analysis host broke its
  contract and the run must abort;
* caller errors (``UnidentifiableSymbolError``, ``UnresolvedExportError``)
  are raised only on the strict paths. The default pipeline records them
  as diagnostics and keeps going.
"""


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class ExtractionError(Exception):
    """Base class for all documentation graph extraction errors."""
    pass


class InvariantViolation(ExtractionError):
    """The analysis host violated its contract; the run cannot continue.

    Raised when a queued symbol ends up with no visible declarations, when an
    identifier is requested before its owner or canonical location is known,
    or when a declaration site cannot be hashed.
    """
    pass


class UnidentifiableSymbolError(ExtractionError, ValueError):
    """A symbol without declarations is not one of the well-known sentinels."""
    pass


class UnresolvedExportError(ExtractionError):
    """An export table entry has no target symbol (strict mode only)."""

    def __init__(self, parent_id: str, export_name: str) -> None:
        self.parent_id = parent_id
        self.export_name = export_name
        super().__init__(
            f"Export '{export_name}' of {parent_id} does not resolve to a symbol"
        )
