"""
stepper.py — Playback Controller
=================================
The PlaybackController is the ONLY object the UI talks to during a run.
It owns a precomputed trace (every Step, materialised before playback
starts) and a cursor into it, and exposes play/pause/step/seek/speed.

State machine:
    reset()                          →  IDLE      (index 0, not playing)
    IDLE / PAUSED  →  play()         →  PLAYING
    PLAYING        →  pause()        →  PAUSED
    PLAYING        →  (last index)   →  COMPLETE
    COMPLETE       →  play()         →  reset(), then PLAYING
    any            →  reset()        →  IDLE

Ticks are cooperative: there is no thread or timer here.  play() arms a
single pending deadline; the host calls tick() from its event loop (or
sleeps seconds_until_tick() first) and at most one step is taken per
deadline.  reset(), pause(), set_input() and close() disarm it, so a
tick that arrives late can never move a cursor over a replaced trace.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread, or guard it
  with a lock (the Flask API does).
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from algorithms.step import Step

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Speed (1 … 100) → delay
# ---------------------------------------------------------------------------
MIN_SPEED     = 1
MAX_SPEED     = 100
DEFAULT_SPEED = 50


def delay_for_speed(speed: int) -> int:
    """Milliseconds between auto-advance ticks for a speed in 1..100."""
    return max(100, 2000 - speed * 19)


def label_for_speed(speed: int) -> str:
    if speed < 30:
        return "Slow"
    if speed < 70:
        return "Medium"
    return "Fast"


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        steps   : The current trace (a tuple, replaced wholesale on reset).
        index   : Index into `steps` that is currently displayed.
        speed   : 1..100; higher is faster.
        on_step : Optional callback(Step) fired every time the current step
                  changes.  The UI hooks its re-render here.

    `compute` is a zero-argument callable returning the full step list for
    the current inputs.  It is called by reset(), never by navigation.
    """

    def __init__(
        self,
        compute: Callable[[], Sequence[Step]],
        speed: int = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self._check_speed(speed)
        self._compute:  Callable[[], Sequence[Step]] = compute
        self._clock:    Callable[[], float]          = clock
        self._deadline: Optional[float]              = None   # pending tick

        self.steps:   Tuple[Step, ...]  = ()
        self.index:   int               = 0
        self.speed:   int               = speed
        self.on_step: Optional[Callable[[Step], None]] = on_step
        self._state:  PlaybackState     = PlaybackState.IDLE

        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Recompute the trace from the current inputs and rewind to 0."""
        self._cancel_tick()
        self.steps  = tuple(self._compute())
        self.index  = 0
        self._state = PlaybackState.IDLE
        logger.debug("Playback reset: %d steps", len(self.steps))
        self._notify()

    def set_input(self, compute: Callable[[], Sequence[Step]]) -> None:
        """Swap in new inputs; the old trace is discarded, never updated."""
        self._cancel_tick()
        self._compute = compute
        logger.debug("Playback input changed")
        self.reset()

    def close(self) -> None:
        """Teardown: disarm the pending tick and stop playback."""
        self._cancel_tick()
        if self._state == PlaybackState.PLAYING:
            self._state = PlaybackState.PAUSED
        self.on_step = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False (and does nothing) at the end."""
        if self.index >= self.last_index:
            return False
        self._goto(self.index + 1)
        return True

    def step_back(self) -> bool:
        """Rewind one step.  Returns False (and does nothing) at index 0."""
        if self.index <= 0:
            return False
        self._goto(self.index - 1)
        return True

    def seek(self, index: int) -> bool:
        """Jump to an arbitrary index.  Out of range is a no-op."""
        if not 0 <= index < len(self.steps):
            return False
        self._goto(index)
        return True

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self._state == PlaybackState.PLAYING:
            return
        if self.index >= self.last_index:
            self.reset()
        self._state    = PlaybackState.PLAYING
        self._deadline = self._clock() + self.delay_ms / 1000

    def pause(self) -> None:
        if self._state != PlaybackState.PLAYING:
            return
        self._cancel_tick()
        self._state = PlaybackState.PAUSED

    def toggle_play(self) -> None:
        if self._state == PlaybackState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance one step if playing and the pending deadline has passed.
        Returns True if a step was taken.
        """
        if self._state != PlaybackState.PLAYING or self._deadline is None:
            return False
        if now is None:
            now = self._clock()
        if now < self._deadline:
            return False

        self._deadline = None
        if not self.step_forward():
            self._state = PlaybackState.COMPLETE
            return False
        if self._state == PlaybackState.PLAYING:
            # the delay in force now, not the one the last tick was armed with
            self._deadline = now + self.delay_ms / 1000
        return True

    def seconds_until_tick(self) -> Optional[float]:
        """Time until the pending tick is due, or None if none is pending."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: int) -> None:
        """Takes effect from the next scheduled tick; a pending one keeps its deadline."""
        self._check_speed(speed)
        self.speed = speed

    @property
    def delay_ms(self) -> int:
        return delay_for_speed(self.speed)

    @property
    def speed_label(self) -> str:
        return label_for_speed(self.speed)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.index < len(self.steps):
            return self.steps[self.index]
        return None

    @property
    def length(self) -> int:
        return len(self.steps)

    @property
    def last_index(self) -> int:
        return max(len(self.steps) - 1, 0)

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    def to_dict(self) -> dict:
        """Cursor snapshot for the controls surface."""
        return {
            "index":       self.index,
            "length":      self.length,
            "playing":     self.is_playing,
            "state":       self._state.value,
            "speed":       self.speed,
            "speed_label": self.speed_label,
            "delay_ms":    self.delay_ms,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.index = idx
        if idx >= self.last_index:
            self._cancel_tick()
            self._state = PlaybackState.COMPLETE
        elif self._state != PlaybackState.PLAYING:
            self._state = PlaybackState.IDLE if idx == 0 else PlaybackState.PAUSED
        self._notify()

    def _cancel_tick(self) -> None:
        self._deadline = None

    def _notify(self) -> None:
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)

    @staticmethod
    def _check_speed(speed: int) -> None:
        if isinstance(speed, bool) or not isinstance(speed, int):
            raise ValueError(f"Speed must be an integer in {MIN_SPEED}..{MAX_SPEED}, got {speed!r}")
        if not MIN_SPEED <= speed <= MAX_SPEED:
            raise ValueError(f"Speed must be in {MIN_SPEED}..{MAX_SPEED}, got {speed}")

