"""
Stay reconstruction.

Turns a log of border crossings into the day ranges spent in one country.
"""

from collections.abc import Iterable
from datetime import date

from staylimit.models.travel import PresenceInterval, TravelEntry


def sort_entries(entries: Iterable[TravelEntry]) -> list[TravelEntry]:
    """
    Order entries by departure date.

    The sort is stable, so entries departing on the same day keep the
    order they were given in.
    """
    return sorted(entries, key=lambda entry: entry.departure_date)


def presence_intervals(
    entries: Iterable[TravelEntry],
    country_code: str,
    open_end: date,
    *,
    require_matching_departure: bool = False,
) -> list[PresenceInterval]:
    """
    Reconstruct the stays in one country from an entry log.

    Each arrival into the country opens one interval. By default the
    interval is closed by the departure date of the next entry in date
    order, whatever country that entry departs from. An arrival with no
    later entry is still in progress and runs until `open_end`.

    Domestic entries (same departure and arrival country) are dropped
    before scanning and neither open nor close a stay.

    Args:
        entries: Entry log in any order
        country_code: Country to reconstruct stays for
        open_end: End date for a stay that has not been closed
        require_matching_departure: Only close a stay at a later entry
            departing from `country_code`; fall back to `open_end`

    Returns:
        One interval per qualifying arrival, in departure-date order.
        Overlapping intervals from malformed logs are kept as-is.
    """
    ordered = sort_entries(entry for entry in entries if not entry.is_domestic)
    intervals: list[PresenceInterval] = []

    for i, entry in enumerate(ordered):
        if entry.arrival_country != country_code:
            continue

        end = _closing_date(ordered, i, country_code, open_end, require_matching_departure)
        intervals.append(PresenceInterval(start=entry.arrival_date, end=end))

    return intervals


def _closing_date(
    ordered: list[TravelEntry],
    index: int,
    country_code: str,
    open_end: date,
    require_matching_departure: bool,
) -> date:
    """Find the day the stay opened by ordered[index] ends."""
    if not require_matching_departure:
        if index + 1 < len(ordered):
            return ordered[index + 1].departure_date
        return open_end

    for later in ordered[index + 1 :]:
        if later.departure_country == country_code:
            return later.departure_date
    return open_end
