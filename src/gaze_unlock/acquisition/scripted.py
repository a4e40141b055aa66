import asyncio
import logging
from typing import Callable, Iterable, Optional

from gaze_unlock.models.gaze import GazePoint, GazeSample
from gaze_unlock.utils.clock import monotonic_ms
from .base import GazeSampleSource

logger = logging.getLogger(__name__)

Segment = tuple[Optional[GazePoint], int]


class ScriptedSampleSource(GazeSampleSource):
    """
    Replays a fixed script of gaze samples.

    The script is a sequence of `(point, count)` segments: `count` samples at
    `point` (None for "no detection"), one every `interval_ms`. In realtime
    mode samples are paced with `asyncio.sleep` and stamped with the clock;
    otherwise they are emitted back to back with synthetic timestamps
    `start_ms + k * interval_ms`, which makes runs deterministic.
    """

    def __init__(
        self,
        *args,
        segments: Iterable[Segment],
        interval_ms: float = 50.0,
        realtime: bool = False,
        start_ms: float = 0.0,
        clock: Callable[[], float] = monotonic_ms,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")

        self._segments = list(segments)
        self._interval_ms = interval_ms
        self._realtime = realtime
        self._start_ms = start_ms
        self._clock = clock

    async def run(self) -> None:
        emitted = 0
        try:
            for point, count in self._segments:
                for _ in range(count):
                    if self._stop_event.is_set():
                        return

                    if self._realtime:
                        timestamp = self._clock()
                    else:
                        timestamp = self._start_ms + emitted * self._interval_ms

                    await self._output_queue.put(GazeSample(point, timestamp))
                    emitted += 1

                    # Yield even when not pacing so consumers interleave.
                    await asyncio.sleep(self._interval_ms / 1000 if self._realtime else 0)
        except asyncio.CancelledError:
            logger.info("Scripted source run task was cancelled.")
        finally:
            logger.debug("ScriptedSampleSource finished after %d samples.", emitted)
            self._close_stream()
