from .base import ProgressSink
from .zmq import ZMQProgressSink

__all__ = ["ProgressSink", "ZMQProgressSink"]
