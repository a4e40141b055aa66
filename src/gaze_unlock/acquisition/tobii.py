import asyncio
import logging
from typing import Optional

import tobii_research as tr

from gaze_unlock.models.gaze import GazePoint, GazeSample
from gaze_unlock.utils.clock import us_to_ms
from .base import GazeSampleSource

logger = logging.getLogger(__name__)


def _average_valid_point(gaze_data: dict) -> Optional[tuple[float, float]]:
    """Mean of the valid eyes' normalized display-area points, None if none."""
    points = [
        gaze_data[f"{eye}_gaze_point_on_display_area"]
        for eye in ("left", "right")
        if gaze_data[f"{eye}_gaze_point_validity"]
    ]
    if not points:
        return None
    return (
        sum(p[0] for p in points) / len(points),
        sum(p[1] for p in points) / len(points),
    )


class TobiiSampleSource(GazeSampleSource):
    """
    A GazeSampleSource that acquires data from a connected Tobii eye tracker.

    Normalized display-area coordinates are scaled to viewport pixels.
    """

    def __init__(self, *args, tracker: "tr.EyeTracker", viewport: tuple[int, int], **kwargs):
        super().__init__(*args, **kwargs)
        self.tracker = tracker
        self._width, self._height = viewport
        self._loop = asyncio.get_running_loop()

    def to_sample(self, gaze_data: dict) -> GazeSample:
        normalized = _average_valid_point(gaze_data)
        point = None
        if normalized is not None:
            point = GazePoint(normalized[0] * self._width, normalized[1] * self._height)
        return GazeSample(point, us_to_ms(gaze_data["system_time_stamp"]))

    def _gaze_data_callback(self, gaze_data: dict) -> None:
        """
        Thread-safe callback bridge from the Tobii SDK to the asyncio world.

        This method is called by a background thread from the Tobii SDK.
        """
        try:
            sample = self.to_sample(gaze_data)
            self._loop.call_soon_threadsafe(self._output_queue.put_nowait, sample)
        except RuntimeError:
            # Event loop closed during shutdown.
            pass
        except Exception:
            logger.exception("Error processing gaze data from Tobii callback.")

    async def run(self) -> None:
        """
        Subscribes to the tracker's gaze stream and waits until the stop
        event is set before cleaning up.
        """
        subscribed = False
        try:
            logger.info("Subscribing to gaze data stream...")
            self.tracker.subscribe_to(
                tr.EYETRACKER_GAZE_DATA, self._gaze_data_callback, as_dictionary=True
            )
            subscribed = True

            await self._stop_event.wait()
            logger.info("Stop event received, shutting down Tobii source.")

        except tr.EyeTrackerException as e:
            logger.error(f"A Tobii SDK error occurred: {e}", exc_info=True)

        except Exception:
            logger.exception("An unexpected error occurred in the Tobii source run loop.")

        finally:
            if subscribed:
                logger.info("Unsubscribing from gaze data stream...")
                self.tracker.unsubscribe_from(
                    tr.EYETRACKER_GAZE_DATA, self._gaze_data_callback
                )
            self._close_stream()
            logger.info("Tobii source has been cleaned up.")
