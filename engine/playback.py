"""
playback.py — Step-by-Step Playback Engine
===========================================
The PlaybackEngine is the ONLY object a UI drives during a run.  It owns
a finished Trace, a cursor into it and at most one pending timer, and
exposes a play/pause/next/prev/speed API.

State machine:
    IDLE     →  play()              →  PLAYING
    PLAYING  →  pause() / step_*()  →  PAUSED
    PAUSED   →  play()              →  PLAYING
    PLAYING  →  (last step shown)   →  FINISHED
    any      →  reset() / load_trace()  →  IDLE

Timers:
  Every operation cancels the outstanding timer before acting, and every
  tick carries the generation it was scheduled under.  A tick from an
  older generation (the trace was replaced or the engine closed) is a
  no-op, so a late callback can never move a newer trace's cursor.

Thread safety:
  None inside.  One thread drives the engine and its Scheduler at a
  time; the Flask app holds a per-session lock to guarantee it.
"""

import logging
from enum import Enum
from typing import Callable, Optional

import settings
from algorithms.step import Step, Trace
from engine.scheduler import Scheduler


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


class NoTraceLoaded(RuntimeError):
    """Playback operation issued before load_trace()."""


# ---------------------------------------------------------------------------
# PlaybackEngine
# ---------------------------------------------------------------------------
class PlaybackEngine:
    """
    Attributes:
        state      : Current PlaybackState.
        trace      : The loaded Trace (None before load / after close).
        cursor     : Index of the step currently displayed.
        speed_ms   : Milliseconds between automatic ticks.
        generation : Bumped on every load / close; tags scheduled ticks.
        on_step    : Optional callback(step) fired whenever the displayed
                     step changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        speed_ms: float = settings.DEFAULT_SPEED_MS,
        on_step: Optional[Callable[[object], None]] = None,
    ):
        self.scheduler:  Scheduler     = scheduler
        self.trace:      Optional[Trace] = None
        self.cursor:     int           = 0
        self.state:      PlaybackState = PlaybackState.IDLE
        self.speed_ms:   float         = max(settings.MIN_SPEED_MS, speed_ms)
        self.generation: int           = 0
        self.on_step:    Optional[Callable[[object], None]] = on_step

        self._timer: Optional[object] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load_trace(self, trace: Trace) -> None:
        """Replace whatever is loaded with a fresh trace, cursor 0, IDLE."""
        if len(trace) == 0:
            raise ValueError("Cannot play an empty trace")
        self._cancel()
        self.trace = trace
        logger.debug("Loaded %s (%d steps)", trace.algorithm, len(trace))
        self._restart()

    def reset(self) -> None:
        """Back to step 0 in IDLE; the trace stays loaded."""
        self._require_trace()
        self._cancel()
        self.state = PlaybackState.IDLE
        self._goto(0)

    def close(self) -> None:
        """Teardown: drop the trace and invalidate anything in flight."""
        self._cancel()
        self.generation += 1
        self.trace  = None
        self.cursor = 0
        self.state  = PlaybackState.IDLE

    def _restart(self) -> None:
        """New content is in place: new generation, cursor 0, IDLE."""
        self.generation += 1
        self.cursor = 0
        self.state  = PlaybackState.IDLE
        self._notify()

    # ------------------------------------------------------------------
    # Navigation  (manual stepping always pauses)
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False if already at the end."""
        return self._manual(self.cursor + 1)

    def step_backward(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        return self._manual(self.cursor - 1)

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index (clamped)."""
        return self._manual(idx)

    def jump_to_end(self) -> None:
        self._manual(self.length - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        self._require_trace()
        self._cancel()
        if self.cursor >= self.length - 1:
            self.state = PlaybackState.FINISHED
            return
        self.state = PlaybackState.PLAYING
        self._schedule()

    def pause(self) -> None:
        self._require_trace()
        self._cancel()
        self.state = PlaybackState.PAUSED

    def toggle_play(self) -> None:
        if self.state == PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, ms: float) -> None:
        """Takes effect from the next scheduled tick; never re-triggers."""
        self.speed_ms = max(settings.MIN_SPEED_MS, ms)

    def set_speed_preset(self, preset: str) -> None:
        if preset not in settings.SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.set_speed(settings.SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def length(self) -> int:
        self._require_trace()
        return len(self.trace)

    @property
    def loaded(self) -> bool:
        return self.trace is not None

    @property
    def current_step(self) -> Optional[Step]:
        if self.trace is None:
            return None
        return self.trace[self.cursor]

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    @property
    def is_finished(self) -> bool:
        return self.state == PlaybackState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require_trace(self) -> None:
        if not self.loaded:
            raise NoTraceLoaded("No trace loaded")

    def _manual(self, idx: int) -> bool:
        self._require_trace()
        self._cancel()
        self.state = PlaybackState.PAUSED
        clamped = min(max(idx, 0), self.length - 1)
        if clamped == self.cursor:
            return False
        self._goto(clamped)
        return True

    def _schedule(self) -> None:
        generation = self.generation
        self._timer = self.scheduler.call_later(self.speed_ms, lambda: self._tick(generation))

    def _cancel(self) -> None:
        if self._timer is not None:
            self.scheduler.cancel(self._timer)
            self._timer = None

    def _tick(self, generation: int) -> None:
        if generation != self.generation or self.state != PlaybackState.PLAYING:
            logger.debug("Ignoring stale tick (generation %d, live %d)", generation, self.generation)
            return
        self._timer = None
        if self.cursor < self.length - 1:
            self._goto(self.cursor + 1)
        # on_step may have paused, stepped or reloaded
        if generation != self.generation or self.state != PlaybackState.PLAYING or self._timer is not None:
            return
        if self.cursor >= self.length - 1:
            self.state = PlaybackState.FINISHED
        else:
            self._schedule()

    def _goto(self, idx: int) -> None:
        changed = idx != self.cursor
        self.cursor = idx
        if changed:
            self._notify()

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.current_step)
