from dataclasses import dataclass
from enum import Enum

from staylimit.models.rules import WindowPolicy


class StayStatus(str, Enum):
    """Classification of a day count against a rule's threshold."""

    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def label(self) -> str:
        """Human-readable status text."""
        return _STATUS_LABELS[self]


_STATUS_LABELS: dict[StayStatus, str] = {
    StayStatus.SAFE: "Safe",
    StayStatus.WARNING: "Approaching Limit",
    StayStatus.DANGER: "Over Threshold",
}


@dataclass(frozen=True, slots=True)
class StaySummary:
    """
    Days spent in one country, classified against its rule.

    Summaries are derived values. They are recomputed from entries and
    rules on every evaluation and never stored.
    """

    code: str
    country: str
    days: int
    status: StayStatus
    threshold: int
    window: WindowPolicy

    @property
    def days_remaining(self) -> int:
        """Days left before the threshold is reached (never negative)."""
        return max(self.threshold - self.days, 0)
