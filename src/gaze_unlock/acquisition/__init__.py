from .base import GazeSampleSource
from .dummy import DummySampleSource
from .scripted import ScriptedSampleSource

__all__ = ["GazeSampleSource", "DummySampleSource", "ScriptedSampleSource"]
