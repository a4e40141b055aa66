import asyncio

from gaze_unlock import FlowState
from gaze_unlock.acquisition import ScriptedSampleSource
from gaze_unlock.configs import AppSettings, UnlockSettings, ViewportSettings
from gaze_unlock.controllers import DummyController
from gaze_unlock.core.manager import (
    CAMERA_FAILED_MESSAGE,
    READY_MESSAGE,
    STARTED_MESSAGE,
    UNLOCKED_MESSAGE,
    UnlockSession,
)
from gaze_unlock.models import ProgressSnapshot
from gaze_unlock.sinks import ProgressSink
from gaze_unlock.ui import LoggingUnlockView

from .helpers import CENTER, TL, UNLOCK_SCRIPT


class ListSink(ProgressSink):
    def __init__(self):
        self.started = False
        self.closed = False
        self.snapshots: list[ProgressSnapshot] = []

    async def start(self) -> None:
        self.started = True

    async def send(self, snapshot: ProgressSnapshot) -> None:
        self.snapshots.append(snapshot)

    async def close(self) -> None:
        self.closed = True


class StatusLog(LoggingUnlockView):
    def __init__(self):
        super().__init__()
        self.statuses: list[str] = []
        self.points: list[tuple[float, float]] = []

    async def show_status(self, text: str) -> None:
        self.statuses.append(text)
        await super().show_status(text)

    async def show_point(self, x: float, y: float) -> None:
        self.points.append((x, y))


def make_settings(**unlock) -> AppSettings:
    return AppSettings(
        viewport=ViewportSettings(width_px=1000, height_px=800),
        unlock=UnlockSettings(**unlock),
    )


def scripted(segments):
    return lambda queue, stop: ScriptedSampleSource(queue, stop, segments=segments)


async def open_session(segments, settings=None, sink_factory=list, camera_available=True):
    settings = settings or make_settings()
    controller = DummyController(
        unlock=settings.unlock, camera_available=camera_available, source_factory=scripted(segments)
    )
    await controller.connect(settings.viewport)
    view = StatusLog()
    return UnlockSession(controller, settings, view, sink_factory), view


def test_session_unlocks_with_scripted_gaze():
    sink = ListSink()

    async def scenario():
        session, view = await open_session(UNLOCK_SCRIPT, sink_factory=lambda: [sink])
        await session.show_ready()
        assert await session.start()
        unlocked = await session.wait_unlocked(timeout=5)
        await session.stop()
        return session, view, unlocked

    session, view, unlocked = asyncio.run(scenario())

    assert unlocked
    assert session.state is FlowState.UNLOCKED
    assert session.runner is None
    assert view.statuses == [
        READY_MESSAGE,
        "Preparing camera and tracker...",
        STARTED_MESSAGE,
        UNLOCKED_MESSAGE,
    ]
    assert view.progress.achieved_count == 4
    assert view.progress.unlocked
    assert view.navigated_to is None

    assert sink.started and sink.closed
    assert [s.achieved_count for s in sink.snapshots] == [0, 1, 2, 3, 4]


def test_session_redirects_after_unlock():
    settings = make_settings(redirect_url="https://example.com", redirect_delay_ms=10)

    async def scenario():
        session, view = await open_session(UNLOCK_SCRIPT, settings=settings)
        await session.start()
        await session.wait_unlocked(timeout=5)
        await session.stop()
        return view

    view = asyncio.run(scenario())
    assert view.navigated_to == "https://example.com"


def test_camera_denied_never_starts_tracker():
    async def scenario():
        session, view = await open_session(UNLOCK_SCRIPT, camera_available=False)
        started = await session.start()
        return session, view, started

    session, view, started = asyncio.run(scenario())
    assert not started
    assert session.state is FlowState.CAMERA_DENIED
    assert session.tracker is None
    assert session.runner is None
    assert view.statuses[-1] == CAMERA_FAILED_MESSAGE


def test_flow_restarts_after_camera_denial():
    async def scenario():
        session, view = await open_session(UNLOCK_SCRIPT, camera_available=False)
        assert not await session.start()

        session.controller.camera_available = True
        assert await session.start()
        unlocked = await session.wait_unlocked(timeout=5)
        await session.stop()
        return session, unlocked

    session, unlocked = asyncio.run(scenario())
    assert unlocked
    assert session.state is FlowState.UNLOCKED


def test_wait_unlocked_times_out_without_gesture():
    async def scenario():
        session, view = await open_session([(CENTER, 50), (TL, 3)])
        await session.start()
        unlocked = await session.wait_unlocked(timeout=0.2)
        await session.stop()
        return session, view, unlocked

    session, view, unlocked = asyncio.run(scenario())
    assert not unlocked
    assert session.state is FlowState.STOPPED
    assert view.progress.achieved_count == 0


def test_start_twice_keeps_running_flow():
    async def scenario():
        session, _ = await open_session([(CENTER, 1)])
        assert await session.start()
        tracker = session.tracker
        assert await session.start()
        same = session.tracker is tracker
        await session.stop()
        return same

    assert asyncio.run(scenario())


def test_restart_after_unlock_uses_fresh_tracker():
    async def scenario():
        session, _ = await open_session(UNLOCK_SCRIPT)
        await session.start()
        await session.wait_unlocked(timeout=5)
        first = session.tracker

        assert await session.start()
        fresh = session.tracker is not first and not session.tracker.unlocked
        await session.wait_unlocked(timeout=5)
        await session.stop()
        return fresh, session.state

    fresh, state = asyncio.run(scenario())
    assert fresh
    assert state is FlowState.UNLOCKED


def test_reset_without_flow_is_noop():
    async def scenario():
        session, _ = await open_session([])
        session.reset()
        return session

    assert asyncio.run(scenario()).state is FlowState.IDLE


def test_reset_rearms_running_tracker():
    async def scenario():
        session, view = await open_session([(TL, 9), (CENTER, 200)])
        await session.start()
        while session.tracker.snapshot().achieved_count == 0:
            await asyncio.sleep(0)
        session.reset()
        snapshot = session.tracker.snapshot()
        await session.stop()
        return snapshot, view

    snapshot, view = asyncio.run(scenario())
    assert snapshot.achieved_count == 0
    assert snapshot.target_index == 0
    assert view.progress.achieved_count == 0


def test_quick_calibration_shows_four_corner_dots():
    async def scenario():
        settings = make_settings()
        settings.calibration.point_duration_ms = 1
        session, view = await open_session([], settings=settings)
        ok = await session.calibrate()
        return ok, view

    ok, view = asyncio.run(scenario())
    assert ok
    assert view.points == [(60, 60), (940, 60), (940, 740), (60, 740)]
    assert view.statuses[0].startswith("Quick calibration")


class FailingSink(ListSink):
    async def start(self) -> None:
        raise OSError("Address already in use")


def test_restart_with_zmq_sink_builds_fresh_sockets():
    from gaze_unlock.sinks import ZMQProgressSink

    built = []

    def factory():
        sink = ZMQProgressSink(host="inproc://gaze-unlock-restart")
        built.append(sink)
        return [sink]

    async def scenario():
        session, _ = await open_session(UNLOCK_SCRIPT, sink_factory=factory)
        results = []
        for _ in range(2):
            started = await session.start()
            unlocked = await session.wait_unlocked(timeout=5)
            await session.stop()
            results.append((started, unlocked, session.state))
        return session, results

    session, results = asyncio.run(scenario())
    assert results == [(True, True, FlowState.UNLOCKED)] * 2
    assert len(built) == 2 and built[0] is not built[1]
    assert session.sinks == []


def test_failed_sink_start_closes_other_sinks():
    healthy = ListSink()

    async def scenario():
        session, _ = await open_session(UNLOCK_SCRIPT, sink_factory=lambda: [healthy, FailingSink()])
        started = await session.start()
        return session, started

    session, started = asyncio.run(scenario())
    assert not started
    assert session.state is FlowState.STOPPED
    assert session.tracker is None
    assert session.runner is None
    assert session.sinks == []
    assert healthy.started and healthy.closed


def test_reset_after_unlock_leaves_unlocked_flow_alone():
    async def scenario():
        session, _ = await open_session(UNLOCK_SCRIPT)
        await session.start()
        await session.wait_unlocked(timeout=5)
        session.reset()
        unlocked_after_reset = session.tracker.unlocked
        still_waiting_done = await session.wait_unlocked(timeout=1)
        await session.stop()
        return session, unlocked_after_reset, still_waiting_done

    session, unlocked_after_reset, still_waiting_done = asyncio.run(scenario())
    assert unlocked_after_reset
    assert still_waiting_done
    assert session.state is FlowState.UNLOCKED
