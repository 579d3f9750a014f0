from staylimit.models.failure import (
    BuiltinRuleError,
    DuplicateRuleError,
    EntryImportError,
    FailureKind,
    InvalidRuleError,
    KnownError,
    RuleNotFoundError,
)
from staylimit.models.rules import CountryRule, ObservationWindow, WindowPolicy
from staylimit.models.stay import StayStatus, StaySummary
from staylimit.models.travel import PresenceInterval, TravelEntry

__all__ = [
    "BuiltinRuleError",
    "CountryRule",
    "DuplicateRuleError",
    "EntryImportError",
    "FailureKind",
    "InvalidRuleError",
    "KnownError",
    "ObservationWindow",
    "PresenceInterval",
    "RuleNotFoundError",
    "StayStatus",
    "StaySummary",
    "TravelEntry",
    "WindowPolicy",
]
