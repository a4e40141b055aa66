import asyncio
import logging
import webbrowser

from ..models import ProgressSnapshot

logger = logging.getLogger(__name__)


class LoggingUnlockView:
    """
    Headless peripheral layer: renders status, corner markers and the
    progress readout to the log instead of a screen.
    """
    def __init__(self, open_browser: bool = False):
        self._open_browser = open_browser
        self.status: str = ""
        self.progress: ProgressSnapshot | None = None
        self.navigated_to: str | None = None

    async def show_status(self, text: str) -> None:
        self.status = text
        logger.info("Status: %s", text)

    async def show_progress(self, snapshot: ProgressSnapshot) -> None:
        self.progress = snapshot
        logger.info("%s  [%s]", snapshot.progress_text, self.render_markers(snapshot))

    async def show_point(self, x: float, y: float) -> None:
        logger.info("Calibration dot at (%.0f, %.0f).", x, y)

    async def hide_point(self) -> None:
        logger.debug("Calibration dot hidden.")

    async def navigate(self, url: str) -> None:
        self.navigated_to = url
        logger.info("Navigating to %s", url)
        if self._open_browser:
            await asyncio.to_thread(webbrowser.open, url)

    @staticmethod
    def render_markers(snapshot: ProgressSnapshot) -> str:
        """One marker per step: '*' achieved, '>' current target, '.' pending."""
        marks = []
        for i in range(len(snapshot.achieved)):
            if snapshot.achieved[i]:
                marks.append("*")
            elif i == snapshot.target_index and not snapshot.unlocked:
                marks.append(">")
            else:
                marks.append(".")
        return "".join(marks)
