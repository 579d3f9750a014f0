from dataclasses import dataclass
from datetime import date
from enum import Enum


class WindowPolicy(str, Enum):
    """How a jurisdiction measures the period its threshold applies to."""

    CALENDAR_YEAR = "calendar-year"
    ROLLING_12_MONTH = "rolling-12-month"

    @property
    def label(self) -> str:
        if self is WindowPolicy.CALENDAR_YEAR:
            return "Calendar Year"
        return "Rolling 12mo"


@dataclass(frozen=True, slots=True)
class CountryRule:
    """
    One jurisdiction's residency test.

    Attributes:
        code: Country code, unique key in a rule mapping (e.g., "AU")
        name: Display name
        threshold: Days of presence that make the traveler resident
        window: Period the threshold is measured over
        description: Free-text summary of the test
        is_custom: False for built-in rules, which cannot be deleted
    """

    code: str
    name: str
    threshold: int
    window: WindowPolicy
    description: str = ""
    is_custom: bool = False


@dataclass(frozen=True, slots=True)
class ObservationWindow:
    """Closed range of days a rule's threshold is measured over."""

    start: date
    end: date
