"""
stepper.py — Step-by-Step Consumer
===================================
The Stepper is the ONLY object a caller interacts with during a run.
It owns the generator, keeps the latest Step it has pulled, and answers
"give me the next step, and tell me whether that was the last one".
Only the current step is held; a caller that needs the whole run
buffers through `on_step` (see engine/recorder.py).

State machine:
    NOT_STARTED  →  start()      →  RUNNING
    RUNNING      →  final step   →  FINISHED
    FINISHED     →  next_step()  →  StepperExhausted

Thread safety:
  This class is NOT thread-safe.  A generator can only be advanced by
  one caller at a time; the JSON API serialises access per run.
"""

import logging
from enum import Enum
from typing import Callable, Generator, List, Optional, Tuple

from algorithms.step import Step

logger = logging.getLogger(__name__)


class StepperExhausted(RuntimeError):
    """next_step() was called after the final step."""


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    NOT_STARTED = "not_started"
    RUNNING     = "running"
    FINISHED    = "finished"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state        : Current StepperState.
        current_step : The most recent Step, or None before the first pull.
        total_steps  : How many Steps have been pulled.
        on_step      : Optional callback(Step) fired for every new step.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self._generator: Optional[Generator[Step, None, None]] = None
        self.current_step: Optional[Step] = None
        self.total_steps:  int            = 0
        self.state:        StepperState   = StepperState.NOT_STARTED
        self.on_step:      Optional[Callable[[Step], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, generator: Generator[Step, None, None]) -> None:
        """Attach a fresh algorithm generator.  Nothing is pulled yet."""
        if self._generator is not None:
            self._generator.close()
        self._generator   = generator
        self.current_step = None
        self.total_steps  = 0
        self.state        = StepperState.RUNNING
        logger.debug("Stepper started")

    def close(self) -> None:
        """Abandon the run."""
        if self._generator is not None:
            self._generator.close()
            self._generator = None
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> Tuple[Step, bool]:
        """
        Pull one step.  Returns (step, exhausted) where `exhausted` is
        True exactly when `step` is the run's final step.
        """
        if self.state == StepperState.NOT_STARTED:
            raise RuntimeError("Call start() first.")
        if self.state == StepperState.FINISHED or self._generator is None:
            raise StepperExhausted("The run has already produced its final step.")

        try:
            step = next(self._generator)
        except StopIteration:
            self._finish()
            raise StepperExhausted("The algorithm ended without a final step.") from None

        self.current_step = step
        self.total_steps += 1
        if self.on_step is not None:
            self.on_step(step)

        if step.is_final_step:
            self._finish()
            return step, True
        return step, False

    def run_to_end(self) -> List[Step]:
        """Pull every remaining step; returns the steps pulled by this call."""
        pulled: List[Step] = []
        while self.state == StepperState.RUNNING:
            step, _ = self.next_step()
            pulled.append(step)
        return pulled

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _finish(self) -> None:
        self.state = StepperState.FINISHED
        if self._generator is not None:
            self._generator.close()
            self._generator = None
        logger.debug("Stepper finished after %d steps", self.total_steps)
