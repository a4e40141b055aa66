import logging
import struct
from typing import Final

import zmq
import zmq.asyncio

from .base import ProgressSink
from ..models import ProgressSnapshot

logger = logging.getLogger(__name__)

class ZMQProgressSink(ProgressSink):
    """
    Real-time broadcast of unlock progress using ZMQ PUB/SUB.

    Wire Format (6 bytes + 4 byte topic):
    - Topic: 'unlk' (4 bytes)
    - Target index: int8 (1 byte)
    - Achieved: 4 x bool (4 bytes)
    - Unlocked: bool (1 byte)
    """

    # ! = Network (Big Endian)
    # b = int8 (target index)
    # 4? = bool x4 (achieved flags)
    # ? = bool (unlocked)
    _PACKER: Final[struct.Struct] = struct.Struct("!b4??")
    _TOPIC: Final[bytes] = b"unlk"

    def __init__(self, host: str = "tcp://*:5556"):
        """
        Args:
            host: The ZMQ binding address. Default binds to all interfaces on port 5556.
        """
        self.host = host

        self._ctx = zmq.asyncio.Context()
        self._sock = self._ctx.socket(zmq.PUB)
        # Progress is low-rate; a small high water mark is plenty.
        self._sock.setsockopt(zmq.SNDHWM, 100)

    @classmethod
    def encode(cls, snapshot: ProgressSnapshot) -> bytes:
        return cls._TOPIC + cls._PACKER.pack(
            snapshot.target_index, *snapshot.achieved, snapshot.unlocked
        )

    @classmethod
    def decode(cls, message: bytes) -> ProgressSnapshot:
        if not message.startswith(cls._TOPIC):
            raise ValueError(f"Unexpected topic in message {message[:4]!r}.")
        target, *flags = cls._PACKER.unpack(message[len(cls._TOPIC):])
        return ProgressSnapshot(target_index=target, achieved=tuple(flags[:4]), unlocked=flags[4])

    async def start(self) -> None:
        """Bind the publisher socket."""
        try:
            self._sock.bind(self.host)
            logger.info(f"ZMQProgressSink bound to {self.host}")
        except Exception as e:
            logger.error(f"Failed to bind ZMQProgressSink to {self.host}: {e}")
            raise e

    async def send(self, snapshot: ProgressSnapshot) -> None:
        """Serializes and broadcasts a progress snapshot."""
        try:
            await self._sock.send(self.encode(snapshot))
        except Exception as e:
            logger.error(f"ZMQ broadcast failed: {e}")

    async def close(self) -> None:
        """Shut down the ZMQ context."""
        logger.info("Closing ZMQProgressSink...")
        # Close immediately, don't wait for unsent messages
        self._sock.close(linger=0)
        self._ctx.term()
