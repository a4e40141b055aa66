from ..models import CANONICAL_ORDER, Corner

CALIBRATION_MESSAGE = (
    "Quick calibration: look at the four white dots on screen for a second each when they appear."
)


def quick_calibration_points(width: float, height: float, inset: float = 60) -> list[tuple[float, float]]:
    """
    Dot positions of the quick calibration, one per corner in canonical
    order, each `inset` pixels in from both edges.
    """
    anchors = {
        Corner.TOP_LEFT: (inset, inset),
        Corner.TOP_RIGHT: (width - inset, inset),
        Corner.BOTTOM_RIGHT: (width - inset, height - inset),
        Corner.BOTTOM_LEFT: (inset, height - inset),
    }
    return [anchors[c] for c in CANONICAL_ORDER]
