from .app import (
    AppSettings,
    CalibrationSettings,
    CameraSettings,
    DummySourceSettings,
    UnlockSettings,
    ViewportSettings,
    ZmqSinkConfig,
)
from .utils import LoggingConfig

__all__ = [
    "AppSettings",
    "CalibrationSettings",
    "CameraSettings",
    "DummySourceSettings",
    "UnlockSettings",
    "ViewportSettings",
    "ZmqSinkConfig",
    "LoggingConfig",
]
