from datetime import date

import pytest

from staylimit.analysis.windows import (
    calendar_year_window,
    historical_window_for_rule,
    one_year_before,
    rolling_window,
    window_for_rule,
)
from staylimit.models.rules import CountryRule, ObservationWindow, WindowPolicy

CALENDAR_RULE = CountryRule("AU", "Australia", 183, WindowPolicy.CALENDAR_YEAR)
ROLLING_RULE = CountryRule("NZ", "New Zealand", 183, WindowPolicy.ROLLING_12_MONTH)


class TestCalendarYearWindow:
    def test_covers_whole_year(self) -> None:
        window = calendar_year_window(2024)

        assert window == ObservationWindow(date(2024, 1, 1), date(2024, 12, 31))


class TestRollingWindow:
    def test_one_year_back_to_reference(self) -> None:
        window = rolling_window(date(2024, 3, 1))

        assert window == ObservationWindow(date(2023, 3, 1), date(2024, 3, 1))

    def test_leap_day_rolls_to_march(self) -> None:
        """Feb 29 has no counterpart a year earlier."""
        assert one_year_before(date(2024, 2, 29)) == date(2023, 3, 1)

    def test_ordinary_day(self) -> None:
        assert one_year_before(date(2024, 7, 15)) == date(2023, 7, 15)

    def test_day_before_leap_day(self) -> None:
        assert one_year_before(date(2024, 2, 28)) == date(2023, 2, 28)

    def test_first_year_has_no_prior_year(self) -> None:
        """Only Feb 29 rolls over; other out-of-range dates are not masked."""
        with pytest.raises(ValueError, match="year 0 is out of range"):
            rolling_window(date(1, 6, 1))


class TestWindowForRule:
    def test_calendar_rule_uses_reference_year(self) -> None:
        window = window_for_rule(CALENDAR_RULE, date(2024, 6, 15))

        assert window == ObservationWindow(date(2024, 1, 1), date(2024, 12, 31))

    def test_rolling_rule_ends_at_reference(self) -> None:
        window = window_for_rule(ROLLING_RULE, date(2024, 6, 15))

        assert window == ObservationWindow(date(2023, 6, 15), date(2024, 6, 15))

    def test_plain_string_policy(self) -> None:
        """Rules built from stored strings behave like enum-built rules."""
        rule = CountryRule("JP", "Japan", 183, "rolling-12-month")  # type: ignore[arg-type]

        window = window_for_rule(rule, date(2024, 6, 15))

        assert window.start == date(2023, 6, 15)


class TestHistoricalWindowForRule:
    def test_calendar_rule_uses_requested_year(self) -> None:
        window = historical_window_for_rule(CALENDAR_RULE, 2022)

        assert window == ObservationWindow(date(2022, 1, 1), date(2022, 12, 31))

    def test_rolling_rule_ends_at_year_end(self) -> None:
        window = historical_window_for_rule(ROLLING_RULE, 2023)

        assert window == ObservationWindow(date(2022, 12, 31), date(2023, 12, 31))
