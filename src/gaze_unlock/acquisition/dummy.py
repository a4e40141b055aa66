import asyncio
import logging
import random
import time
from typing import Optional, Sequence

from gaze_unlock.core.zones import zones_for
from gaze_unlock.models import CANONICAL_ORDER, Corner
from gaze_unlock.models.gaze import GazePoint, GazeSample
from gaze_unlock.utils.clock import monotonic_ms
from .base import GazeSampleSource

logger = logging.getLogger(__name__)


class DummySampleSource(GazeSampleSource):
    """
    A GazeSampleSource that simulates a user performing the unlock gesture.

    The simulated gaze fixates the centre of each corner zone in
    `corner_order` for `fixation_ms`, then jumps to the next corner, and
    starts over after the last one. Gaussian jitter and random dropouts
    (absent samples) can be added to mimic a noisy webcam estimator. It is
    useful for exercising the unlock flow without a camera.
    """

    def __init__(
        self,
        *args,
        viewport: tuple[int, int],
        corner_order: Sequence[Corner] = CANONICAL_ORDER,
        zone_percent: float = 0.20,
        fixation_ms: float = 600.0,
        frequency: int = 20,
        jitter_px: float = 0.0,
        dropout_rate: float = 0.0,
        seed: Optional[int] = None,
        **kwargs,
    ):
        """
        Initializes the DummySampleSource.

        Args:
            viewport: (width, height) of the viewport in pixels.
            corner_order: Rotation of corners the simulated user looks at.
            zone_percent: Zone size used to locate corner centres.
            fixation_ms: How long each corner is looked at.
            frequency: The frequency in Hz to emit samples.
            jitter_px: Standard deviation of the gaussian noise added to points.
            dropout_rate: Probability that a sample has no detection.
            seed: Seed for the noise generator.
        """
        super().__init__(*args, **kwargs)
        if frequency <= 0:
            raise ValueError("Frequency must be positive.")
        if not 0 <= dropout_rate < 1:
            raise ValueError("dropout_rate must be in [0, 1).")

        width, height = viewport
        zones = {zone.corner: zone for zone in zones_for(width, height, zone_percent)}
        self._targets = [zones[Corner(c)].center for c in corner_order]

        self._frequency = frequency
        self._interval_s = 1.0 / self._frequency
        self._fixation_ms = fixation_ms
        self._jitter_px = jitter_px
        self._dropout_rate = dropout_rate
        self._rng = random.Random(seed)

        logger.info(
            f"DummySampleSource initialized to run at {self._frequency} Hz."
        )

    def _point_at(self, elapsed_ms: float) -> Optional[GazePoint]:
        if self._dropout_rate and self._rng.random() < self._dropout_rate:
            return None

        step = int(elapsed_ms // self._fixation_ms) % len(self._targets)
        x, y = self._targets[step]
        if self._jitter_px:
            x += self._rng.gauss(0.0, self._jitter_px)
            y += self._rng.gauss(0.0, self._jitter_px)
        return GazePoint(x, y)

    async def run(self) -> None:
        """
        Main execution loop for the dummy source.

        Generates and queues samples at the configured frequency until the
        stop event is set.
        """
        start_time = time.monotonic()
        start_ms = monotonic_ms()
        frame_counter = 0

        logger.info("Starting dummy gaze sample stream...")
        try:
            while not self._stop_event.is_set():
                target_time = start_time + (frame_counter * self._interval_s)

                now_ms = monotonic_ms()
                sample = GazeSample(self._point_at(now_ms - start_ms), now_ms)
                await self._output_queue.put(sample)

                # Sleep until the next frame's target time
                sleep_duration = target_time + self._interval_s - time.monotonic()
                if sleep_duration > 0:
                    await asyncio.sleep(sleep_duration)
                else:
                    await asyncio.sleep(0)

                frame_counter += 1

        except asyncio.CancelledError:
            logger.info("Dummy source run task was cancelled.")
        finally:
            logger.info("DummySampleSource has stopped.")
            self._close_stream()
