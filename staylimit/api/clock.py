"""
Request clock.

The wall clock is read here, once per request, and passed into the
residency calculations as an explicit reference date. Tests override
`get_today` to pin it.
"""

from datetime import date


def get_today() -> date:
    """Dependency providing today's local date."""
    return date.today()
