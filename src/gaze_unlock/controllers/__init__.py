from .base import GazeTrackerController, require_tracker
from .dummy import DummyController

__all__ = ["GazeTrackerController", "require_tracker", "DummyController"]
