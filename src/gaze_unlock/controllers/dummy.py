import asyncio
import logging
from typing import Callable, Optional

from .base import GazeTrackerController
from ..acquisition import DummySampleSource, GazeSampleSource
from ..configs import DummySourceSettings, UnlockSettings, ViewportSettings

logger = logging.getLogger(__name__)

SourceFactory = Callable[[asyncio.Queue, asyncio.Event], GazeSampleSource]


class DummyController(GazeTrackerController):
    """
    Simulated backend. Produces DummySampleSource streams unless a
    `source_factory` is given, and grants camera access unless told not to.
    """
    def __init__(
        self,
        unlock: Optional[UnlockSettings] = None,
        dummy: Optional[DummySourceSettings] = None,
        camera_available: bool = True,
        source_factory: Optional[SourceFactory] = None,
        connect_delay_s: float = 0.0,
    ):
        super().__init__()
        self._unlock = unlock or UnlockSettings()
        self._dummy = dummy or DummySourceSettings()
        self.camera_available = camera_available
        self._source_factory = source_factory
        self._connect_delay_s = connect_delay_s
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def tracker_name(self) -> str:
        return "DUM8-7RACKER"

    async def connect(self, cfg: ViewportSettings) -> bool:
        await asyncio.sleep(self._connect_delay_s)  # Simulate discovery
        self.screen_width, self.screen_height = cfg.width_px, cfg.height_px
        self._connected = True
        return True

    async def ensure_camera(self, facing: str) -> bool:
        logger.info("Requesting %s-facing camera (simulated).", facing)
        return self._connected and self.camera_available

    def create_source(self, output_queue, stop_event) -> GazeSampleSource:
        if self._source_factory is not None:
            return self._source_factory(output_queue, stop_event)

        return DummySampleSource(
            output_queue,
            stop_event,
            viewport=self.viewport_size(),
            corner_order=self._unlock.corner_order,
            zone_percent=self._unlock.zone_percent,
            # Hold each corner a little past the threshold, as a user would.
            fixation_ms=self._unlock.dwell_threshold_ms * 1.5,
            frequency=self._dummy.frequency_hz,
            jitter_px=self._dummy.jitter_px,
            dropout_rate=self._dummy.dropout_rate,
            seed=self._dummy.seed,
        )

    def shutdown(self) -> None:
        self._connected = False
