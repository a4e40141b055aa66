from enum import Enum, auto


class FlowState(Enum):
    """
    Operational states of one unlock flow.

    The session moves through these in order; CAMERA_DENIED and STOPPED
    may be followed by a fresh start.
    """
    IDLE = auto()  # Nothing started yet.
    PREPARING = auto()  # Waiting for camera permission.
    CAMERA_DENIED = auto()  # Camera probe failed, tracker never invoked.
    ACTIVE = auto()  # Samples are flowing into the tracker.
    UNLOCKED = auto()  # All four corners achieved.
    STOPPED = auto()  # Torn down before unlocking.
