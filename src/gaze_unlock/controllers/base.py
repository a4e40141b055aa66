import asyncio
from abc import ABC, abstractmethod
from functools import wraps
import logging

from ..acquisition import GazeSampleSource
from ..configs import CalibrationSettings, ViewportSettings
from ..core.calibration import CALIBRATION_MESSAGE, quick_calibration_points
from ..core.protocols import UnlockView
from ..models.gaze import GazeSample
from ..types import EndOfSamples

logger = logging.getLogger(__name__)

def require_tracker(func):
    """Aborts a hardware coroutine with False while the tracker is disconnected."""
    @wraps(func)
    async def async_wrapper(self, *args, **kwargs):
        if not self.is_connected:
            logger.warning(f"Hardware action '{func.__name__}' aborted: Tracker disconnected.")
            return False
        return await func(self, *args, **kwargs)
    return async_wrapper

class GazeTrackerController(ABC):
    """
    Abstract gaze-estimation backend.
    AUTHORITY on: Connection, Camera permission, Calibration, and Viewport Geometry.
    """
    def __init__(self):
        # Geometry Authority
        self.screen_width: int = 0
        self.screen_height: int = 0

    def viewport_size(self) -> tuple[int, int]:
        """Current viewport size; read on every classification."""
        return self.screen_width, self.screen_height

    def resize(self, width: int, height: int) -> None:
        logger.info("Viewport resized to %dx%d.", width, height)
        self.screen_width, self.screen_height = width, height

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Returns True if the backend is initialized and ready."""
        ...

    @property
    @abstractmethod
    def tracker_name(self) -> str:
        """Returns a human-readable name of the backend."""
        ...

    @abstractmethod
    async def connect(self, cfg: ViewportSettings) -> bool:
        """Finds the backend and applies the viewport geometry. Returns success."""
        ...

    @abstractmethod
    async def ensure_camera(self, facing: str) -> bool:
        """Probes camera access. False means permission was denied or no camera exists."""
        ...

    @abstractmethod
    def create_source(
        self,
        output_queue: asyncio.Queue[GazeSample | EndOfSamples],
        stop_event: asyncio.Event,
    ) -> GazeSampleSource:
        """Factory: Returns a fresh GazeSampleSource for an unlock flow."""
        ...

    async def calibrate(self, view: UnlockView, cfg: CalibrationSettings) -> bool:
        """
        Runs the quick four-dot calibration: one dot near each corner,
        shown for `point_duration_ms` each.
        """
        await view.show_status(CALIBRATION_MESSAGE)
        try:
            for x, y in quick_calibration_points(self.screen_width, self.screen_height, cfg.inset_px):
                await view.show_point(x, y)
                await self.collect_calibration_point(x, y, cfg.point_duration_ms)
        finally:
            await view.hide_point()
        return True

    async def collect_calibration_point(self, x: float, y: float, duration_ms: float) -> None:
        """Waits while the user looks at a calibration dot."""
        await asyncio.sleep(duration_ms / 1000)

    @abstractmethod
    def shutdown(self) -> None:
        """Cleanup hardware resources."""
        ...
