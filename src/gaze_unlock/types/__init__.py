from .end import EndOfSamples, _END

__all__ = ["EndOfSamples", "_END"]
