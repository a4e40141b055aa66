from .gaze import GazePoint, GazeSample
from .sequence import NO_ZONE, ZONE_COUNT, ProgressSnapshot, SequenceState
from .zone import CANONICAL_ORDER, Corner, Zone

__all__ = [
    "GazePoint",
    "GazeSample",
    "NO_ZONE",
    "ZONE_COUNT",
    "ProgressSnapshot",
    "SequenceState",
    "CANONICAL_ORDER",
    "Corner",
    "Zone",
]
