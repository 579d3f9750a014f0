from staylimit.analysis.intervals import presence_intervals, sort_entries
from staylimit.analysis.residency import (
    available_years,
    classify,
    days_present,
    evaluate,
    evaluate_for_year,
)
from staylimit.analysis.windows import (
    calendar_year_window,
    historical_window_for_rule,
    rolling_window,
    window_for_rule,
)

__all__ = [
    "available_years",
    "calendar_year_window",
    "classify",
    "days_present",
    "evaluate",
    "evaluate_for_year",
    "historical_window_for_rule",
    "presence_intervals",
    "rolling_window",
    "sort_entries",
    "window_for_rule",
]
