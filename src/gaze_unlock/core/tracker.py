import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from ..models import (
    CANONICAL_ORDER,
    NO_ZONE,
    ZONE_COUNT,
    Corner,
    ProgressSnapshot,
    SequenceState,
)
from .zones import classify, zones_for

logger = logging.getLogger(__name__)

ProgressListener = Callable[[ProgressSnapshot], None]
UnlockListener = Callable[[], None]
ViewportProvider = Callable[[], tuple[float, float]]


@dataclass(frozen=True)
class TrackerConfig:
    """Tunables of the dwell-sequence state machine."""
    zone_percent: float = 0.20
    dwell_threshold_ms: float = 400.0
    corner_order: tuple[Corner, ...] = field(default=CANONICAL_ORDER)

    def __post_init__(self):
        if not 0 < self.zone_percent <= 1:
            raise ValueError("zone_percent must be in (0, 1].")
        if self.dwell_threshold_ms <= 0:
            raise ValueError("dwell_threshold_ms must be positive.")
        order = tuple(Corner(c) for c in self.corner_order)
        if len(order) != ZONE_COUNT or set(order) != set(Corner):
            raise ValueError("corner_order must list each of the four corners exactly once.")
        object.__setattr__(self, "corner_order", order)


class DwellSequenceTracker:
    """
    Order-enforcing, time-gated corner unlock state machine.

    Feed it one call to `on_sample` per gaze delivery. The target corner must
    be occupied continuously for `dwell_threshold_ms` before the next corner
    in `corner_order` becomes the target. Any sample outside the target,
    including an absent one, restarts the dwell clock. After the fourth corner
    the tracker is unlocked and ignores further samples until `reset()`.

    Not thread-safe: all calls must come from the same logical thread.
    """

    def __init__(
        self,
        viewport_size: ViewportProvider,
        config: TrackerConfig | None = None,
    ):
        self._viewport_size = viewport_size
        self.config = config or TrackerConfig()
        # canonical zone index -> step in the configured rotation
        self._step_of = {c.position: step for step, c in enumerate(self.config.corner_order)}

        self._state = SequenceState()
        self._progress_listeners: list[ProgressListener] = []
        self._unlock_listeners: list[UnlockListener] = []

    # --- Subscriptions ---

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def remove_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.remove(listener)

    def add_unlock_listener(self, listener: UnlockListener) -> None:
        self._unlock_listeners.append(listener)

    def remove_unlock_listener(self, listener: UnlockListener) -> None:
        self._unlock_listeners.remove(listener)

    # --- State ---

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def unlocked(self) -> bool:
        return self._state.unlocked

    @property
    def target_corner(self) -> Corner:
        return self.config.corner_order[self._state.target_index]

    def snapshot(self) -> ProgressSnapshot:
        return self._state.snapshot()

    def reset(self) -> None:
        """Re-arms the machine with a fresh SequenceState. Safe in any state."""
        self._state = SequenceState()
        logger.debug("Sequence reset.")
        self._emit_progress()

    # --- Transitions ---

    def observe(self, sample: Any) -> int:
        """Classifies a sample into a rotation step, -1 for none."""
        width, height = self._viewport_size()
        zone = classify(sample, zones_for(width, height, self.config.zone_percent))
        return NO_ZONE if zone == NO_ZONE else self._step_of[zone]

    def on_sample(self, sample: Any, now: float) -> None:
        """
        Applies one gaze observation taken at monotonic time `now` (ms).

        Raises:
            InvalidViewportError: if the viewport currently has no area.
        """
        st = self._state
        if st.unlocked:
            return

        observed = self.observe(sample)

        if observed != st.target_index:
            st.dwell_start_ms = None
            st.last_observed_zone = observed
            return

        if st.last_observed_zone != observed or st.dwell_start_ms is None:
            st.dwell_start_ms = now
            st.last_observed_zone = observed
            logger.debug("Dwell started on %s.", self.target_corner.value)
            return

        if now - st.dwell_start_ms < self.config.dwell_threshold_ms:
            return

        logger.info("Corner %s achieved (%d / %d).", self.target_corner.value, st.target_index + 1, ZONE_COUNT)
        st.achieved[st.target_index] = True
        st.target_index = min(st.target_index + 1, ZONE_COUNT - 1)
        st.dwell_start_ms = None
        st.last_observed_zone = NO_ZONE

        # Set before notifying so the final snapshot already reads unlocked.
        if all(st.achieved):
            st.unlocked = True

        self._emit_progress()

        if st.unlocked:
            logger.info("Unlock sequence completed.")
            self._emit_unlock()

    # --- Notifications ---

    def _emit_progress(self) -> None:
        snapshot = self._state.snapshot()
        self._notify(self._progress_listeners, snapshot)

    def _emit_unlock(self) -> None:
        self._notify(self._unlock_listeners)

    @staticmethod
    def _notify(listeners: Sequence[Callable[..., None]], *args) -> None:
        for listener in list(listeners):
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener %r failed.", listener)
