from gaze_unlock import DwellSequenceTracker, GazePoint
from gaze_unlock.models import ProgressSnapshot

VIEWPORT = (1000, 800)
CADENCE_MS = 50

TL = GazePoint(50, 50)
TR = GazePoint(950, 50)
BR = GazePoint(950, 750)
BL = GazePoint(50, 750)
CENTER = GazePoint(500, 400)

UNLOCK_SCRIPT = [(TL, 9), (TR, 9), (BR, 9), (TR, 9), (BL, 9)]


class Recorder:
    """Collects tracker notifications."""
    def __init__(self):
        self.progress: list[ProgressSnapshot] = []
        self.unlocks = 0

    def on_progress(self, snapshot: ProgressSnapshot) -> None:
        self.progress.append(snapshot)

    def on_unlock(self) -> None:
        self.unlocks += 1


class Feeder:
    """Feeds samples at a fixed cadence on a synthetic clock."""
    def __init__(self, tracker: DwellSequenceTracker, cadence_ms: float = CADENCE_MS):
        self.tracker = tracker
        self.cadence_ms = cadence_ms
        self.now = 0.0

    def feed(self, point, count: int = 1) -> None:
        for _ in range(count):
            self.tracker.on_sample(point, self.now)
            self.now += self.cadence_ms
