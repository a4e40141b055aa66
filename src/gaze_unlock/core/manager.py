import asyncio
import logging
from typing import Callable, Sequence

from .runner import UnlockRunner
from .state import FlowState
from .tracker import DwellSequenceTracker
from .protocols import UnlockView
from ..controllers import GazeTrackerController
from ..configs import AppSettings
from ..models import ProgressSnapshot
from ..pipeline import Distributor
from ..sinks import ProgressSink
from ..types import _END

logger = logging.getLogger(__name__)

SinkFactory = Callable[[], Sequence[ProgressSink]]

READY_MESSAGE = "Ready. Start the eye unlock."
PREPARING_MESSAGE = "Preparing camera and tracker..."
CAMERA_FAILED_MESSAGE = "Camera access failed. Allow camera and reload."
STARTED_MESSAGE = "Started. Align face and follow the corners."
UNLOCKED_MESSAGE = "Unlocked! Redirecting..."


class UnlockSession:
    """
    The Headless Core of the eye unlock flow.

    Wires a controller's sample source into a fresh DwellSequenceTracker and
    forwards the tracker's progress and unlock events to the view and the
    progress sinks, so the peripheral layer stays a thin shell.
    """
    def __init__(
        self,
        controller: GazeTrackerController,
        settings: AppSettings,
        view: UnlockView,
        sink_factory: SinkFactory = list,
    ):
        self.controller = controller
        self.settings = settings
        self.view = view
        # Sinks are built fresh for every flow and closed when it ends.
        self.sink_factory = sink_factory
        self.sinks: list[ProgressSink] = []

        self.state: FlowState = FlowState.IDLE
        self.tracker: DwellSequenceTracker | None = None
        self.runner: UnlockRunner | None = None

        self._progress_queue: asyncio.Queue | None = None
        self._distributor_task: asyncio.Task | None = None
        self._finish_task: asyncio.Task | None = None
        self._unlocked = asyncio.Event()
        self._tasks: set[asyncio.Task] = set()

    def run_task(self, coro) -> asyncio.Task:
        """
        Schedules a background coroutine and ensures that its errors are
        NEVER silent.
        """
        task = asyncio.create_task(coro)
        self._tasks.add(task)

        def _on_complete(t: asyncio.Task):
            self._tasks.discard(t)
            if t.cancelled():
                return
            if t.exception() is not None:
                logger.error("Background Task Crash", exc_info=t.exception())

        task.add_done_callback(_on_complete)
        return task

    @property
    def is_active(self) -> bool:
        return self.state is FlowState.ACTIVE

    @property
    def is_unlocked(self) -> bool:
        return self.state is FlowState.UNLOCKED

    # --- Actions ---

    async def show_ready(self) -> None:
        await self.view.show_status(READY_MESSAGE)

    async def calibrate(self) -> bool:
        logger.info("Starting quick calibration...")
        return await self.controller.calibrate(self.view, self.settings.calibration)

    async def start(self) -> bool:
        """
        Probes the camera and, if granted, starts a fresh unlock flow.
        Returns: True if samples are flowing into the tracker.
        """
        if self.is_active:
            logger.warning("Unlock flow already in progress.")
            return True

        await self._teardown()

        self.state = FlowState.PREPARING
        await self.view.show_status(PREPARING_MESSAGE)

        if not await self.controller.ensure_camera(self.settings.camera.facing):
            logger.warning("Camera access failed; unlock flow not started.")
            self.state = FlowState.CAMERA_DENIED
            await self.view.show_status(CAMERA_FAILED_MESSAGE)
            return False

        try:
            await self._start_pipeline()
        except Exception:
            logger.exception("Failed to initialize unlock flow")
            await self._teardown()
            self.tracker = None
            self.state = FlowState.STOPPED
            return False

        logger.info("Unlock flow started on %s.", self.controller.tracker_name)
        return True

    def reset(self) -> None:
        """
        Re-arms the tracker of the running flow. After an unlock the flow has
        already stopped delivering samples; call `start()` for a new attempt.
        """
        if self.tracker is None:
            return
        if self.is_unlocked:
            logger.warning("Reset ignored: flow already unlocked, start a new one instead.")
            return
        self.tracker.reset()

    async def wait_unlocked(self, timeout: float | None = None) -> bool:
        """Returns True once unlocked, False if `timeout` seconds pass first."""
        try:
            await asyncio.wait_for(self._unlocked.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def stop(self) -> None:
        """Stops delivering samples and waits for pending notifications."""
        await self._teardown()
        if self.state is not FlowState.UNLOCKED:
            self.state = FlowState.STOPPED
        logger.info("Unlock flow stopped.")

    def shutdown(self) -> None:
        """Graceful cleanup of hardware before application exit."""
        self.controller.shutdown()

    # --- Wiring ---

    async def _start_pipeline(self) -> None:
        self._unlocked.clear()
        self._finish_task = None

        self.tracker = DwellSequenceTracker(
            self.controller.viewport_size, self.settings.unlock.tracker_config()
        )
        self.tracker.add_progress_listener(self._on_progress)
        self.tracker.add_unlock_listener(self._on_unlock)

        self.sinks = list(self.sink_factory())
        started = await asyncio.gather(*(s.start() for s in self.sinks), return_exceptions=True)
        for result in started:
            if isinstance(result, Exception):
                raise result
        self._progress_queue = asyncio.Queue()
        consumers = [self.view.show_progress, *(s.send for s in self.sinks)]
        self._distributor_task = asyncio.create_task(
            Distributor(self._progress_queue, consumers).run()
        )

        # Zero progress for the peripheral layer.
        self.tracker.reset()

        self.state = FlowState.ACTIVE
        await self.view.show_status(STARTED_MESSAGE)

        source = self.controller.create_source(asyncio.Queue(), asyncio.Event())
        self.runner = UnlockRunner(source, self.tracker)
        await self.runner.start()

    async def _teardown(self) -> None:
        if self._finish_task:
            # Failures were already logged by run_task.
            await asyncio.gather(self._finish_task, return_exceptions=True)
            self._finish_task = None

        if self.runner:
            await self.runner.stop()
            self.runner = None

        try:
            if self._distributor_task:
                self._progress_queue.put_nowait(_END)
                await self._distributor_task
        finally:
            self._distributor_task = None
            self._progress_queue = None
            await self._close_sinks()

    async def _close_sinks(self) -> None:
        sinks, self.sinks = self.sinks, []
        results = await asyncio.gather(*(s.close() for s in sinks), return_exceptions=True)
        for sink, result in zip(sinks, results):
            if isinstance(result, Exception):
                logger.error("Failed to close %r", sink, exc_info=result)

    def _on_progress(self, snapshot: ProgressSnapshot) -> None:
        if self._progress_queue is not None:
            self._progress_queue.put_nowait(snapshot)

    def _on_unlock(self) -> None:
        self.state = FlowState.UNLOCKED
        self._unlocked.set()
        self._finish_task = self.run_task(self._finish_unlock())

    async def _finish_unlock(self) -> None:
        await self.view.show_status(UNLOCKED_MESSAGE)
        if self.runner:
            await self.runner.stop()

        url = self.settings.unlock.redirect_url
        if url:
            await asyncio.sleep(self.settings.unlock.redirect_delay_ms / 1000)
            await self.view.navigate(url)
