from .console import LoggingUnlockView

__all__ = ["LoggingUnlockView"]
