import pytest

from gaze_unlock import DwellSequenceTracker

from .helpers import VIEWPORT, Feeder, Recorder


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def tracker(recorder) -> DwellSequenceTracker:
    t = DwellSequenceTracker(lambda: VIEWPORT)
    t.add_progress_listener(recorder.on_progress)
    t.add_unlock_listener(recorder.on_unlock)
    return t


@pytest.fixture
def feeder(tracker) -> Feeder:
    return Feeder(tracker)
