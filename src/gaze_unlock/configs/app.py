import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, PositiveInt, field_validator, Field

from .utils import LoggingConfig
from ..core.tracker import TrackerConfig
from ..models import CANONICAL_ORDER, Corner

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("gaze-unlock")
    except PackageNotFoundError:
        return "0.0.0"


class UnlockSettings(BaseModel):
    """Settings of the corner-dwell unlock gesture."""
    zone_percent: float = Field(0.20, gt=0, le=1, description="Fraction of each viewport edge covered by a corner zone.")
    dwell_threshold_ms: float = Field(400.0, gt=0, description="Continuous occupancy required per corner.")
    corner_order: list[Corner] = Field(default_factory=lambda: list(CANONICAL_ORDER), description="Rotation the corners must be visited in.")
    redirect_url: Optional[str] = Field(None, description="Where to navigate after unlocking.")
    redirect_delay_ms: float = Field(750.0, ge=0)

    @field_validator("corner_order")
    @classmethod
    def validate_corner_order(cls, value: list[Corner]) -> list[Corner]:
        if len(value) != len(CANONICAL_ORDER) or set(value) != set(Corner):
            raise ValueError("corner_order must list each of the four corners exactly once.")
        return value

    def tracker_config(self) -> TrackerConfig:
        return TrackerConfig(
            zone_percent=self.zone_percent,
            dwell_threshold_ms=self.dwell_threshold_ms,
            corner_order=tuple(self.corner_order),
        )

class ViewportSettings(BaseModel):
    """Size of the viewport gaze points are expressed in, in pixels."""
    width_px: PositiveInt = 1920
    height_px: PositiveInt = 1080

class CameraSettings(BaseModel):
    facing: Literal["user", "environment"] = "user"

class CalibrationSettings(BaseModel):
    """Settings for the quick four-dot calibration."""
    inset_px: int = Field(60, ge=0, description="Distance of each dot from its corner.")
    point_duration_ms: float = Field(700.0, gt=0, description="How long each dot is shown.")

class DummySourceSettings(BaseModel):
    frequency_hz: PositiveInt = 20
    jitter_px: float = Field(0.0, ge=0)
    dropout_rate: float = Field(0.0, ge=0, lt=1)
    seed: Optional[int] = None

class ZmqSinkConfig(BaseModel):
    enabled: bool = False
    host: str = "tcp://*:5556"

class AppSettings(BaseSettings):
    """
    Main application settings, loaded from environment variables and defaults.
    """
    use_dummy_mode: bool = True

    unlock: UnlockSettings = Field(default_factory=UnlockSettings)
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)
    camera: CameraSettings = Field(default_factory=CameraSettings)
    calibration: CalibrationSettings = Field(default_factory=CalibrationSettings)
    dummy: DummySourceSettings = Field(default_factory=DummySourceSettings)

    # Sinks
    zmq: ZmqSinkConfig = Field(default_factory=ZmqSinkConfig)

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    __version__: str = _package_version()

    model_config = SettingsConfigDict(
        env_prefix="GAZE_UNLOCK__",
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False
    )
