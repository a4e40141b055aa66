from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True, frozen=True)
class GazePoint:
    """A point-of-regard in viewport pixel coordinates."""
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class GazeSample:
    """
    A single delivery from a gaze source.

    `point` is None when the estimator produced no detection for this tick.
    `timestamp_ms` is taken from a monotonic clock.
    """
    point: Optional[GazePoint]
    timestamp_ms: float
