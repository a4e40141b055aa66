"""Gaze-driven four-corner dwell unlock."""

from .core import (
    DwellSequenceTracker,
    FlowState,
    InvalidViewportError,
    TrackerConfig,
    classify,
    zones_for,
)
from .models import Corner, GazePoint, GazeSample, ProgressSnapshot, SequenceState, Zone

__all__ = [
    "DwellSequenceTracker",
    "FlowState",
    "InvalidViewportError",
    "TrackerConfig",
    "classify",
    "zones_for",
    "Corner",
    "GazePoint",
    "GazeSample",
    "ProgressSnapshot",
    "SequenceState",
    "Zone",
]
