from typing import List

from .configs import AppSettings
from .controllers import DummyController, GazeTrackerController
from .sinks import ProgressSink, ZMQProgressSink

def create_session_sinks(settings: AppSettings) -> List[ProgressSink]:
    """
    Creates fresh sink instances for a new unlock session.
    """
    sinks = []

    # ZMQ
    if settings.zmq.enabled:
        sinks.append(ZMQProgressSink(host=settings.zmq.host))

    return sinks


def create_controller(settings: AppSettings) -> GazeTrackerController:
    """
    Picks the gaze backend. The Tobii SDK is only imported when requested.
    """
    if settings.use_dummy_mode:
        return DummyController(unlock=settings.unlock, dummy=settings.dummy)

    from .controllers.tobii import TobiiController
    return TobiiController()
