from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class TravelEntry:
    """
    A single border crossing.

    Dates are local calendar dates with no time of day. The arrival date
    is expected to be on or after the departure date, but this is not
    enforced.

    Attributes:
        id: Opaque identifier assigned by the caller
        departure_country: Country code the traveler left
        arrival_country: Country code the traveler entered
        departure_date: Day the traveler left
        arrival_date: Day the traveler arrived
    """

    id: str
    departure_country: str
    arrival_country: str
    departure_date: date
    arrival_date: date

    @property
    def is_domestic(self) -> bool:
        """True if the entry starts and ends in the same country."""
        return self.departure_country == self.arrival_country


@dataclass(frozen=True, slots=True)
class PresenceInterval:
    """Closed range of days spent in one country."""

    start: date
    end: date

    @property
    def is_inverted(self) -> bool:
        """True if malformed input produced an end before the start."""
        return self.end < self.start
