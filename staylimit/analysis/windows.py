"""
Observation windows.

Every function takes the reference date explicitly; nothing here reads
the clock.
"""

from datetime import date

from staylimit.models.rules import CountryRule, ObservationWindow, WindowPolicy


def calendar_year_window(year: int) -> ObservationWindow:
    """Jan 1 through Dec 31 of `year`, inclusive."""
    return ObservationWindow(start=date(year, 1, 1), end=date(year, 12, 31))


def one_year_before(day: date) -> date:
    """
    Same month and day, one year earlier.

    Feb 29 has no counterpart in the previous year and rolls over to Mar 1.
    """
    if day.month == 2 and day.day == 29:
        return date(day.year - 1, 3, 1)
    return day.replace(year=day.year - 1)


def rolling_window(reference: date) -> ObservationWindow:
    """The twelve months ending on `reference`, inclusive."""
    return ObservationWindow(start=one_year_before(reference), end=reference)


def year_end(year: int) -> date:
    return date(year, 12, 31)


def window_for_rule(rule: CountryRule, reference: date) -> ObservationWindow:
    """Window for the current view: the reference's year, or the year up to it."""
    if rule.window == WindowPolicy.CALENDAR_YEAR:
        return calendar_year_window(reference.year)
    return rolling_window(reference)


def historical_window_for_rule(rule: CountryRule, year: int) -> ObservationWindow:
    """Window for a past year, as it stood on Dec 31 of that year."""
    if rule.window == WindowPolicy.CALENDAR_YEAR:
        return calendar_year_window(year)
    return rolling_window(year_end(year))
