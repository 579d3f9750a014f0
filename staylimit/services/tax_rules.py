"""
Country rule registry.

Rule mappings are read-only. Every edit returns a new mapping and leaves
the one it was given untouched, so an evaluation can keep working on a
snapshot while the rules are being edited.
"""

import dataclasses
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from staylimit.config import DEFAULT_THRESHOLD
from staylimit.models.failure import (
    BuiltinRuleError,
    DuplicateRuleError,
    InvalidRuleError,
    RuleNotFoundError,
)
from staylimit.models.rules import CountryRule, WindowPolicy

logger = logging.getLogger(__name__)

RuleMap = Mapping[str, CountryRule]

# Fields a caller may change on an existing rule
EDITABLE_FIELDS = frozenset({"name", "threshold", "window", "description"})


def _builtin(
    code: str, name: str, threshold: int, window: WindowPolicy, description: str
) -> CountryRule:
    return CountryRule(
        code=code,
        name=name,
        threshold=threshold,
        window=window,
        description=description,
        is_custom=False,
    )


BUILTIN_RULES: RuleMap = MappingProxyType(
    {
        "AU": _builtin(
            "AU",
            "Australia",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Tax resident if physically present for more than 183 days in a calendar year",
        ),
        "NZ": _builtin(
            "NZ",
            "New Zealand",
            183,
            WindowPolicy.ROLLING_12_MONTH,
            "Tax resident if present for more than 183 days in any 12-month period",
        ),
        "US": _builtin(
            "US",
            "United States",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Substantial presence test: 183 days in calendar year (weighted calculation applies)",
        ),
        "KR": _builtin(
            "KR",
            "South Korea",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Tax resident if staying for 183 days or more in a calendar year",
        ),
        "HK": _builtin(
            "HK",
            "Hong Kong",
            180,
            WindowPolicy.CALENDAR_YEAR,
            "Tax resident if ordinarily residing or present for 180+ days in a year",
        ),
        "IT": _builtin(
            "IT",
            "Italy",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Tax resident if present for more than 183 days in a calendar year",
        ),
        "AE": _builtin(
            "AE",
            "UAE",
            183,
            WindowPolicy.ROLLING_12_MONTH,
            "Tax resident if present for 183+ days in a 12-month period "
            "(no personal income tax)",
        ),
        "MC": _builtin(
            "MC",
            "Monaco",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Tax residency based on primary residence (no personal income tax for residents)",
        ),
        "GB": _builtin(
            "GB",
            "United Kingdom",
            183,
            WindowPolicy.CALENDAR_YEAR,
            "Automatic UK resident if present for 183+ days in a tax year (April 6 - April 5)",
        ),
        "JP": _builtin(
            "JP",
            "Japan",
            183,
            WindowPolicy.ROLLING_12_MONTH,
            "Tax resident if having domicile or residence in Japan for 1 year or more",
        ),
    }
)


def normalize_code(code: str) -> str:
    return code.strip().upper()


def seed_rules(custom: Mapping[str, CountryRule] | None = None) -> RuleMap:
    """
    Built-in rules overlaid with caller-supplied ones.

    A caller rule with a built-in's code replaces it rather than adding a
    second entry for the same country.
    """
    rules = dict(BUILTIN_RULES)
    if custom:
        for rule in custom.values():
            rules[rule.code] = rule
    return MappingProxyType(rules)


def add_rule(
    rules: RuleMap,
    code: str,
    name: str,
    threshold: int = DEFAULT_THRESHOLD,
    window: WindowPolicy = WindowPolicy.CALENDAR_YEAR,
    description: str | None = None,
) -> RuleMap:
    """
    Return a new mapping with a custom rule added.

    Raises:
        DuplicateRuleError: If the code is already present
        InvalidRuleError: If the code or name is blank, or threshold <= 0
    """
    code = normalize_code(code)
    if not code:
        raise InvalidRuleError("Country code cannot be empty")
    if code in rules:
        raise DuplicateRuleError(code)
    if not name or not name.strip():
        raise InvalidRuleError("Country name cannot be empty")
    _check_threshold(threshold)

    rule = CountryRule(
        code=code,
        name=name.strip(),
        threshold=threshold,
        window=_parse_window(window),
        description=description or f"Custom: Tax resident if present for {threshold}+ days",
        is_custom=True,
    )
    logger.info("Added custom rule %s (%s, %d days)", code, rule.name, threshold)
    return MappingProxyType({**rules, code: rule})


def update_rule(rules: RuleMap, code: str, /, **changes: Any) -> RuleMap:
    """
    Return a new mapping with one rule's fields replaced.

    Only name, threshold, window and description can change; the code and
    custom flag are fixed for the life of a rule.

    Raises:
        RuleNotFoundError: If the code is not present
        InvalidRuleError: If an unknown or invalid field is given
    """
    code = normalize_code(code)
    existing = rules.get(code)
    if existing is None:
        raise RuleNotFoundError(code)

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise InvalidRuleError(
            "Cannot change rule fields", detail=", ".join(sorted(unknown))
        )

    if "threshold" in changes:
        _check_threshold(changes["threshold"])
    if "name" in changes:
        if not changes["name"] or not changes["name"].strip():
            raise InvalidRuleError("Country name cannot be empty")
        changes["name"] = changes["name"].strip()
    if "window" in changes:
        changes["window"] = _parse_window(changes["window"])

    updated = dataclasses.replace(existing, **changes)
    logger.info("Updated rule %s: %s", code, ", ".join(sorted(changes)))
    return MappingProxyType({**rules, code: updated})


def delete_rule(rules: RuleMap, code: str) -> RuleMap:
    """
    Return a new mapping without a custom rule.

    Raises:
        RuleNotFoundError: If the code is not present
        BuiltinRuleError: If the rule is built-in
    """
    code = normalize_code(code)
    existing = rules.get(code)
    if existing is None:
        raise RuleNotFoundError(code)
    if not existing.is_custom:
        raise BuiltinRuleError(code)

    logger.info("Deleted custom rule %s", code)
    return MappingProxyType({key: rule for key, rule in rules.items() if key != code})


def _check_threshold(threshold: int) -> None:
    if threshold <= 0:
        raise InvalidRuleError("Threshold must be positive", detail=f"got {threshold}")


def _parse_window(window: WindowPolicy | str) -> WindowPolicy:
    try:
        return WindowPolicy(window)
    except ValueError:
        raise InvalidRuleError("Unknown window policy", detail=str(window)) from None
