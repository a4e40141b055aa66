import math
from typing import Any, Sequence

from ..models import NO_ZONE, Corner, Zone


class InvalidViewportError(ValueError):
    """Raised when zones are requested for a viewport with no area."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def zones_for(
    viewport_width: float,
    viewport_height: float,
    zone_percent: float = 0.20,
) -> tuple[Zone, ...]:
    """
    Computes the four corner zones for the current viewport.

    Zones are returned in canonical order (top-left, top-right, bottom-right,
    bottom-left). Each zone spans `zone_percent` of the viewport width and
    height, rounded to whole pixels, anchored to its corner.

    Raises:
        InvalidViewportError: if either dimension is zero or negative.
        ValueError: if `zone_percent` is not in (0, 1].
    """
    if not viewport_width > 0 or not viewport_height > 0:
        raise InvalidViewportError(
            f"Viewport must have positive dimensions, got {viewport_width}x{viewport_height}."
        )
    if not 0 < zone_percent <= 1:
        raise ValueError(f"zone_percent must be in (0, 1], got {zone_percent}.")

    w, h = viewport_width, viewport_height
    px = _round_half_up(w * zone_percent)
    py = _round_half_up(h * zone_percent)

    return (
        Zone(Corner.TOP_LEFT, x_min=0, x_max=px, y_min=0, y_max=py),
        Zone(Corner.TOP_RIGHT, x_min=w - px, x_max=w, y_min=0, y_max=py),
        Zone(Corner.BOTTOM_RIGHT, x_min=w - px, x_max=w, y_min=h - py, y_max=h),
        Zone(Corner.BOTTOM_LEFT, x_min=0, x_max=px, y_min=h - py, y_max=h),
    )


def _coerce_point(sample: Any) -> tuple[float, float] | None:
    """Extracts finite (x, y) from a sample, or None if it has none."""
    if sample is None:
        return None
    try:
        x = float(sample.x)
        y = float(sample.y)
    except (AttributeError, TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return x, y


def classify(sample: Any, zones: Sequence[Zone]) -> int:
    """
    Returns the index of the first zone containing the sample, or -1.

    Absent and malformed samples classify as -1. When zones overlap the
    first match in sequence order wins.
    """
    point = _coerce_point(sample)
    if point is None:
        return NO_ZONE

    x, y = point
    for i, zone in enumerate(zones):
        if zone.contains(x, y):
            return i
    return NO_ZONE
