class EndOfSamples:
    """Sentinel placed on a queue after its producer's last item."""
    __slots__ = ()

    def __repr__(self) -> str:
        return "<EndOfSamples>"

_END = EndOfSamples()
