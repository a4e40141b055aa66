from dataclasses import dataclass, field
from typing import Optional

ZONE_COUNT = 4
NO_ZONE = -1


@dataclass(slots=True)
class SequenceState:
    """
    Mutable progress of one unlock attempt.

    Owned by a single DwellSequenceTracker; replaced wholesale on reset.
    """
    target_index: int = 0
    achieved: list[bool] = field(default_factory=lambda: [False] * ZONE_COUNT)
    dwell_start_ms: Optional[float] = None
    last_observed_zone: int = NO_ZONE
    unlocked: bool = False

    def snapshot(self) -> "ProgressSnapshot":
        return ProgressSnapshot(
            target_index=self.target_index,
            achieved=tuple(self.achieved),
            unlocked=self.unlocked,
        )


@dataclass(slots=True, frozen=True)
class ProgressSnapshot:
    """Immutable view of SequenceState handed to progress listeners."""
    target_index: int
    achieved: tuple[bool, ...]
    unlocked: bool

    @property
    def achieved_count(self) -> int:
        return sum(self.achieved)

    @property
    def progress_text(self) -> str:
        return f"Progress: {self.achieved_count} / {len(self.achieved)}"
