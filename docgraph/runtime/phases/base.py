"""
Base phase class implementing template method pattern.

This module provides the BasePhase abstract class that defines the
execution framework for all extraction phases:
- Lifecycle hooks execution
- Exception handling
- Logging and timing
- Error reporting for failed phases

Subclasses only need to implement the execute() method with their
specific business logic.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from docgraph.graph.errors import ExtractionError
from docgraph.runtime.context import PhaseContext
from docgraph.runtime.lifecycle import ExtractionPhase

if TYPE_CHECKING:  # pragma: no cover
    from docgraph.runtime.extraction_state import ExtractionState

# Exceptions a phase may raise; anything else is a programming error
_SAFE_EXCEPTIONS = (
    ExtractionError,
    RuntimeError,
    ValueError,
    TypeError,
    AttributeError,
    KeyError,
    IndexError,
    LookupError,
)

logger = logging.getLogger("docgraph.extraction.phase")


class BasePhase(ABC):
    """
    Abstract base class for all extraction phases.

    Execution Flow:
        1. _before_execute() - Phase setup (logging, state update)
        2. _run_hooks_before() - Execute before-phase hooks
        3. execute() - **SUBCLASS IMPLEMENTS THIS** (core business logic)
        4. _run_hooks_after() - Execute after-phase hooks
        5. _after_execute() - Phase cleanup

    Error Handling:
        Every phase is critical: the failure is logged and propagates,
        halting the extraction. Later phases read what earlier ones wrote.

    Example:
        class MyPhase(BasePhase):
            PHASE = ExtractionPhase.EXPORTS

            def execute(self, context: PhaseContext) -> None:
                self.state.update_phase_result(
                    self.PHASE,
                    'export_sites',
                    some_value
                )

    Attributes:
        PHASE: ExtractionPhase implemented by the subclass.
        state: ExtractionState instance shared across all phases
    """

    PHASE: ExtractionPhase

    def __init__(self, state: "ExtractionState") -> None:
        """
        Initialize the phase with shared state.

        Args:
            state: ExtractionState instance containing all extraction state
        """
        self.state = state

    def run(self, context: PhaseContext) -> None:
        """
        Template method: execute the phase with standardized flow.

        Subclasses should NOT override this method; implement execute() instead.

        Args:
            context: Read-only view of the extraction

        Raises:
            ExtractionError: If execute() raises
        """
        phase_name = self.__class__.__name__

        self._before_execute(context)
        self._run_hooks_before(context)
        started = time.perf_counter()

        try:
            self.execute(context)
        except _SAFE_EXCEPTIONS as error:
            logger.error("Critical phase %s failed: %s", phase_name, error)
            raise

        logger.debug(
            "Phase %s finished in %.3fs", phase_name, time.perf_counter() - started
        )
        self._run_hooks_after(context)
        self._after_execute(context)

    @abstractmethod
    def execute(self, context: PhaseContext) -> None:
        """
        Execute the phase-specific business logic.

        This method should:
        - Read inputs from the state populated by earlier phases
        - Perform phase-specific work
        - Update state via self.state.update_phase_result()

        Args:
            context: Read-only view of the extraction
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement execute() for {context.current_phase}"
        )

    # ========== Template Method Helper Methods ==========

    def _before_execute(self, context: PhaseContext) -> None:
        """Phase setup: logging and state updates."""
        logger.info("=== Phase: %s ===", self.PHASE.name)
        self.state.current_phase = self.PHASE
        context.current_phase = self.PHASE

    def _run_hooks_before(self, context: PhaseContext) -> None:
        """Execute before-phase lifecycle hooks."""
        for hook in self.state.lifecycle_hooks:
            if hook.phase == self.PHASE:
                try:
                    hook.before(context)
                except _SAFE_EXCEPTIONS:
                    logger.exception("Lifecycle hook %r before() failed", hook)

    def _run_hooks_after(self, context: PhaseContext) -> None:
        """Execute after-phase lifecycle hooks."""
        for hook in self.state.lifecycle_hooks:
            if hook.phase == self.PHASE:
                try:
                    hook.after(context)
                except _SAFE_EXCEPTIONS:
                    logger.exception("Lifecycle hook %r after() failed", hook)

    def _after_execute(self, _context: PhaseContext) -> None:
        """
        Phase cleanup (override if needed).

        Args:
            _context: Phase context (reserved for subclass use)
        """
