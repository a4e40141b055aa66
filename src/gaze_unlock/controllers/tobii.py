import asyncio
import logging
from typing import Optional

import tobii_research as tr

from .base import GazeTrackerController, require_tracker
from ..acquisition.tobii import TobiiSampleSource
from ..configs import ViewportSettings

logger = logging.getLogger(__name__)


class TobiiController(GazeTrackerController):
    def __init__(self):
        super().__init__()
        self.tracker: Optional[tr.EyeTracker] = None
        self._calibration: Optional[tr.ScreenBasedCalibration] = None

    @property
    def is_connected(self) -> bool:
        return self.tracker is not None

    @property
    def tracker_name(self) -> str:
        return self.tracker.device_name if self.tracker else "N/A"

    async def connect(self, cfg: ViewportSettings) -> bool:
        try:
            self.screen_width, self.screen_height = cfg.width_px, cfg.height_px

            trackers = await asyncio.to_thread(tr.find_all_eyetrackers)
            if not trackers:
                logger.error("No eye trackers found.")
                return False

            self.tracker = trackers[0]
            logger.info(f"Found tracker: {self.tracker.device_name} ({self.tracker.serial_number})")
            return True
        except Exception as e:
            logger.error(f"Hardware connection failed: {e}")
            return False

    async def ensure_camera(self, facing: str) -> bool:
        # The tracker is the camera; facing does not apply.
        return self.is_connected

    def create_source(self, output_queue, stop_event) -> TobiiSampleSource:
        return TobiiSampleSource(
            output_queue,
            stop_event,
            tracker=self.tracker,
            viewport=self.viewport_size(),
        )

    @require_tracker
    async def calibrate(self, view, cfg) -> bool:
        """
        Runs the quick calibration while the tracker is in calibration mode,
        collecting hardware data at each dot.
        """
        self._calibration = tr.ScreenBasedCalibration(self.tracker)
        try:
            await asyncio.to_thread(self._calibration.enter_calibration_mode)
            await super().calibrate(view, cfg)
            result = await asyncio.to_thread(self._calibration.compute_and_apply)
            ok = result.status == tr.CALIBRATION_STATUS_SUCCESS
            if not ok:
                logger.warning("Calibration result: %s", result.status)
            return ok
        except tr.EyeTrackerException:
            logger.exception("Calibration sequence failed.")
            return False
        finally:
            await asyncio.to_thread(self._calibration.leave_calibration_mode)
            self._calibration = None

    async def collect_calibration_point(self, x: float, y: float, duration_ms: float) -> None:
        # Stabilization wait, then sample at normalized coordinates.
        await asyncio.sleep(duration_ms / 1000)
        nx, ny = x / self.screen_width, y / self.screen_height
        status = await asyncio.to_thread(self._calibration.collect_data, nx, ny)
        if status != tr.CALIBRATION_STATUS_SUCCESS:
            logger.warning(f"Calibration point ({x}, {y}) failed.")

    def shutdown(self) -> None:
        self.tracker = None
