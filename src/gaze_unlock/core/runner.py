import asyncio
import logging

from ..acquisition import GazeSampleSource
from ..types import _END
from ..utils.logging import ThrottledLogger
from .tracker import DwellSequenceTracker
from .zones import InvalidViewportError

logger = logging.getLogger(__name__)
throttled = ThrottledLogger(logger)

class UnlockRunner:
    """
    Drives the sample flow from Source -> Tracker.
    Created fresh for every unlock flow; stops consuming once the tracker
    is unlocked or the source ends its stream.
    """
    def __init__(self, source: GazeSampleSource, tracker: DwellSequenceTracker):
        self.source = source
        self.tracker = tracker
        self.samples_seen = 0
        self._running = False
        self._loop_task: asyncio.Task | None = None
        self._source_task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return

        logger.info("Starting UnlockRunner...")
        self._running = True

        self._source_task = asyncio.create_task(self.source.run())
        self._loop_task = asyncio.create_task(self._process_loop())
        logger.info("UnlockRunner active.")

    async def stop(self) -> None:
        if not self._running:
            return

        logger.info("Stopping UnlockRunner...")
        self._running = False

        await self.source.stop()
        if self._source_task:
            await self._source_task

        if self._loop_task:
            await self._loop_task

        logger.info("UnlockRunner stopped after %d samples.", self.samples_seen)

    async def wait_exhausted(self) -> None:
        """Waits until the consuming loop has exited."""
        if self._loop_task:
            await asyncio.shield(self._loop_task)

    async def _process_loop(self) -> None:
        """Hot loop."""
        queue = self.source.output_queue

        try:
            while True:
                item = await queue.get()

                if item is _END:
                    break

                self.samples_seen += 1
                try:
                    self.tracker.on_sample(item.point, item.timestamp_ms)
                except InvalidViewportError as e:
                    throttled.warning("Dropping sample: %s", e)

                if self.tracker.unlocked:
                    logger.info("Tracker unlocked; runner loop exiting.")
                    break

        except asyncio.CancelledError:
            logger.info("Runner loop cancelled unexpectedly.")
