from .protocols import UnlockView
from .state import FlowState
from .tracker import DwellSequenceTracker, TrackerConfig
from .zones import InvalidViewportError, classify, zones_for

__all__ = [
    "UnlockView",
    "FlowState",
    "DwellSequenceTracker",
    "TrackerConfig",
    "InvalidViewportError",
    "classify",
    "zones_for",
]
