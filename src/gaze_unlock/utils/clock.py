import time


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic_ns() / 1_000_000


def us_to_ms(timestamp_us: int) -> float:
    """Converts a microsecond device/system timestamp to milliseconds."""
    return timestamp_us / 1_000
