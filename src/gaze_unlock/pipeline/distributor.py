import asyncio
import logging
from asyncio import Queue
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from ..types import _END, EndOfSamples

T = TypeVar("T")  # Generic type for the data being distributed
logger = logging.getLogger(__name__)


class Distributor(Generic[T]):
    """
    A pipeline component that fans-out items from a single input queue
    to multiple async consumers, in order, until the `_END` sentinel.
    """

    def __init__(self, input_queue: Queue[T | EndOfSamples], consumers: Sequence[Callable[[T], Awaitable[None]]]):
        self._input_queue = input_queue
        self._consumers = list(consumers)
        logger.info(f"Distributor initialized to fan-out to {len(self._consumers)} consumers.")

    async def run(self) -> None:
        """
        Continuously reads from the input queue and hands each item to
        every consumer. A failing consumer is logged and skipped.
        """
        while True:
            try:
                item = await self._input_queue.get()
                if item is _END:
                    break

                for consumer in self._consumers:
                    try:
                        await consumer(item)
                    except Exception:
                        logger.exception("Consumer %r failed in the Distributor.", consumer)

            except asyncio.CancelledError:
                logger.info("Distributor process cancelled.")
                break
