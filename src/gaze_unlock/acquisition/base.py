from abc import ABC, abstractmethod
from asyncio import Queue, Event
from typing import final

from gaze_unlock.models.gaze import GazeSample
from gaze_unlock.types import _END, EndOfSamples


class GazeSampleSource(ABC):
    """
    Abstract Base Class for all gaze sample sources.

    A GazeSampleSource is a runnable component that acquires point-of-regard
    estimates from a specific origin (e.g., hardware, a script, a simulation)
    and puts `GazeSample` objects into an output queue. Once it stops it puts
    the `_END` sentinel so consumers can drain and exit.
    """

    def __init__(self, output_queue: Queue[GazeSample | EndOfSamples], stop_event: Event):
        self._output_queue = output_queue
        self._stop_event = stop_event

    @property
    def output_queue(self) -> Queue[GazeSample | EndOfSamples]:
        return self._output_queue

    @abstractmethod
    async def run(self) -> None:
        """
        Starts the data acquisition process.

        This method should run until the `stop_event` is set or the source is
        exhausted, and must call `_close_stream()` before returning.
        """
        raise NotImplementedError

    @final
    async def stop(self) -> None:
        """
        Signals the source to stop acquiring data.

        This is a final method and should not be overridden. Subclasses can
        perform cleanup in their 'run' method's finally block.
        """
        self._stop_event.set()

    @final
    def _close_stream(self) -> None:
        self._output_queue.put_nowait(_END)
