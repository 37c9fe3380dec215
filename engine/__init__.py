"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Recorder
"""

from engine.stepper  import (
    PlaybackController,
    PlaybackState,
    DEFAULT_SPEED,
    MIN_SPEED,
    MAX_SPEED,
    delay_for_speed,
    label_for_speed,
)
from engine.recorder import Recorder, RecordedRun, RunMetrics

__all__ = [
    "PlaybackController",
    "PlaybackState",
    "DEFAULT_SPEED",
    "MIN_SPEED",
    "MAX_SPEED",
    "delay_for_speed",
    "label_for_speed",
    "Recorder",
    "RecordedRun",
    "RunMetrics",
]
