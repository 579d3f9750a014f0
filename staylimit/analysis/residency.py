"""
Residency evaluation.

Counts days of presence per country inside a rule's observation window
and classifies the count against the rule's threshold. Evaluation is a
pure recomputation: the same entries, rules and reference date always
produce the same summaries.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime

from staylimit.analysis.intervals import presence_intervals
from staylimit.analysis.windows import (
    historical_window_for_rule,
    window_for_rule,
    year_end,
)
from staylimit.config import WARNING_RATIO
from staylimit.models.rules import CountryRule, ObservationWindow
from staylimit.models.stay import StayStatus, StaySummary
from staylimit.models.travel import PresenceInterval, TravelEntry

logger = logging.getLogger(__name__)


def days_present(
    entries: Iterable[TravelEntry],
    country_code: str,
    window_start: date,
    window_end: date,
    *,
    open_end: date | None = None,
    require_matching_departure: bool = False,
) -> int:
    """
    Count days spent in a country within [window_start, window_end].

    Each stay is clipped to the window and counted inclusively, so
    arriving and leaving on the same day counts as one day. Stays that
    miss the window, or whose end precedes their start, add nothing.

    Args:
        entries: Entry log in any order
        country_code: Country to count
        window_start: First day of the window
        window_end: Last day of the window
        open_end: End date for a stay still in progress (defaults to window_end)
        require_matching_departure: See presence_intervals()

    Returns:
        Non-negative day count. Overlapping stays are each counted.
    """
    intervals = presence_intervals(
        entries,
        country_code,
        window_end if open_end is None else open_end,
        require_matching_departure=require_matching_departure,
    )

    total = 0
    for interval in intervals:
        clipped = PresenceInterval(
            start=max(interval.start, window_start),
            end=min(interval.end, window_end),
        )
        if not clipped.is_inverted:
            total += (clipped.end - clipped.start).days + 1

    return total


def classify(days: float, threshold: float) -> StayStatus:
    """
    Classify a day count against a threshold.

    DANGER at or above the threshold, WARNING at or above WARNING_RATIO of
    it. The warning boundary is compared as a real number, not rounded.
    """
    if days >= threshold:
        return StayStatus.DANGER
    if days >= threshold * WARNING_RATIO:
        return StayStatus.WARNING
    return StayStatus.SAFE


def evaluate(
    entries: Sequence[TravelEntry],
    rules: Mapping[str, CountryRule],
    reference: date,
    *,
    require_matching_departure: bool = False,
) -> list[StaySummary]:
    """
    Current view: every rule measured up to `reference`.

    Calendar-year rules count the reference's year; rolling rules count
    the twelve months ending on it. A stay still in progress counts
    through `reference` and no further.

    Returns:
        One summary per rule, most days first. Ties keep rule order.
    """
    reference = _as_date(reference)
    return _evaluate_rules(
        entries,
        rules,
        lambda rule: window_for_rule(rule, reference),
        reference,
        require_matching_departure,
    )


def evaluate_for_year(
    entries: Sequence[TravelEntry],
    rules: Mapping[str, CountryRule],
    year: int,
    *,
    require_matching_departure: bool = False,
) -> list[StaySummary]:
    """
    Historical view: every rule as it stood on Dec 31 of `year`.

    Calendar-year rules count `year`; rolling rules count the twelve
    months ending on Dec 31. A stay still in progress counts through
    Dec 31.
    """
    return _evaluate_rules(
        entries,
        rules,
        lambda rule: historical_window_for_rule(rule, year),
        year_end(year),
        require_matching_departure,
    )


def available_years(entries: Iterable[TravelEntry], today: date) -> list[int]:
    """
    Years that have travel data, most recent first.

    Falls back to the current year when there are no entries.
    """
    years: set[int] = set()
    for entry in entries:
        years.add(entry.arrival_date.year)
        years.add(entry.departure_date.year)

    if not years:
        return [today.year]
    return sorted(years, reverse=True)


def _evaluate_rules(
    entries: Sequence[TravelEntry],
    rules: Mapping[str, CountryRule],
    window_for: Callable[[CountryRule], ObservationWindow],
    open_end: date,
    require_matching_departure: bool,
) -> list[StaySummary]:
    """Summarize each rule independently, then rank by days."""
    summaries: list[StaySummary] = []

    for rule in rules.values():
        window = window_for(rule)
        days = days_present(
            entries,
            rule.code,
            window.start,
            window.end,
            open_end=open_end,
            require_matching_departure=require_matching_departure,
        )
        status = classify(days, rule.threshold)
        logger.debug(
            "%s: %d days in %s..%s (threshold %d, %s)",
            rule.code,
            days,
            window.start,
            window.end,
            rule.threshold,
            status.value,
        )
        summaries.append(
            StaySummary(
                code=rule.code,
                country=rule.name,
                days=days,
                status=status,
                threshold=rule.threshold,
                window=rule.window,
            )
        )

    # sorted() is stable, so equal counts keep rule iteration order
    return sorted(summaries, key=lambda summary: summary.days, reverse=True)


def _as_date(value: date) -> date:
    """Drop any time of day; counting works on calendar dates."""
    if isinstance(value, datetime):
        return value.date()
    return value
