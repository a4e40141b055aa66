import logging
from typing import Optional

from pydantic import BaseModel, field_validator

class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)-8s] [%(name)s] %(message)s"
    datefmt: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        level = value.upper()
        # getLevelName maps known names to their numeric level.
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level {value!r}.")
        return level
