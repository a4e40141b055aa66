from abc import ABC, abstractmethod

from ..models import ProgressSnapshot


class ProgressSink(ABC):
    """
    Abstract Base Class for consumers of unlock progress.

    A sink is started once per flow, receives every ProgressSnapshot the
    tracker emits, and is closed when the flow ends.
    """

    async def start(self) -> None:
        """Acquire resources. Default: nothing to do."""

    @abstractmethod
    async def send(self, snapshot: ProgressSnapshot) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        """Release resources. Default: nothing to do."""
