"""
comparison.py — Side-by-Side Playback
======================================
Two independently generated traces driven by ONE shared cursor.

    ctl = ComparisonController(ManualScheduler())
    ctl.load_traces(bubble_trace, quick_trace)
    ctl.play()
    left_step, right_step = ctl.current_step

The shared cursor runs over [0, max(len_left, len_right) - 1].  A side
whose trace is shorter freezes on its own final step while the other
keeps advancing.  Every PlaybackEngine operation (play, pause, step,
speed, reset, …) applies unchanged.
"""

import logging
from typing import Callable, Optional, Tuple

import settings
from algorithms.step import Step, Trace
from engine.playback import PlaybackEngine
from engine.recorder import ComparisonResult, compare, trace_metrics
from engine.scheduler import Scheduler


logger = logging.getLogger(__name__)


class ComparisonController(PlaybackEngine):
    """
    Attributes (in addition to PlaybackEngine's):
        left, right : The two traces, or None before load_traces().
        on_step     : callback((left_step, right_step)) on every cursor change.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        speed_ms: float = settings.DEFAULT_SPEED_MS,
        on_step: Optional[Callable[[object], None]] = None,
    ):
        super().__init__(scheduler, speed_ms=speed_ms, on_step=on_step)
        self.left:  Optional[Trace] = None
        self.right: Optional[Trace] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load_traces(self, left: Trace, right: Trace) -> None:
        if len(left) == 0 or len(right) == 0:
            raise ValueError("Cannot compare an empty trace")
        self._cancel()
        self.left, self.right = left, right
        logger.debug("Comparing %s (%d steps) with %s (%d steps)",
                     left.algorithm, len(left), right.algorithm, len(right))
        self._restart()

    def load_trace(self, trace: Trace) -> None:
        raise TypeError("ComparisonController needs two traces; use load_traces()")

    def close(self) -> None:
        super().close()
        self.left = self.right = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def loaded(self) -> bool:
        return self.left is not None and self.right is not None

    @property
    def length(self) -> int:
        self._require_trace()
        return max(len(self.left), len(self.right))

    @property
    def indices(self) -> Tuple[int, int]:
        """Step index each side is displaying at the shared cursor."""
        self._require_trace()
        return (
            min(self.cursor, len(self.left) - 1),
            min(self.cursor, len(self.right) - 1),
        )

    @property
    def current_step(self) -> Optional[Tuple[Step, Step]]:
        if not self.loaded:
            return None
        li, ri = self.indices
        return self.left[li], self.right[ri]

    @property
    def finished_sides(self) -> Tuple[bool, bool]:
        """Whether each side has reached (and frozen on) its final step."""
        li, ri = self.indices
        return li == len(self.left) - 1, ri == len(self.right) - 1

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def comparison_result(self) -> ComparisonResult:
        self._require_trace()
        return compare(trace_metrics(self.left), trace_metrics(self.right))
