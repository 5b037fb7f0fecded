"""Revalidation interval parsing.

Intervals are written as one or more ``<integer><unit>`` groups::

    "10s"     ten seconds
    "1w"      one week
    "1h30m"   ninety minutes

Months and years are fixed-length (30 and 365 days); the interval only
has to be stable, not calendar-exact.
"""

import re
from datetime import timedelta

from wren.errors import ConfigurationError

UNITS: dict[str, timedelta] = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "M": timedelta(days=30),
    "y": timedelta(days=365),
}

_GROUP_RE = re.compile(r"(\d+)([a-zA-Z])")


def parse_interval(value: str) -> timedelta:
    """Parse an interval string into a ``timedelta``.

    Raises:
        ConfigurationError: On an empty string, a unit without a number,
            a number without a unit, or an unknown unit.
    """
    text = value.strip()
    if not text:
        msg = "Revalidation interval is empty."
        raise ConfigurationError(msg)

    total = timedelta()
    pos = 0
    for match in _GROUP_RE.finditer(text):
        if match.start() != pos:
            break
        amount, unit = match.groups()
        if unit not in UNITS:
            msg = (
                f"Unknown unit {unit!r} in revalidation interval {value!r}. "
                f"Expected one of: {', '.join(UNITS)}"
            )
            raise ConfigurationError(msg)
        total += int(amount) * UNITS[unit]
        pos = match.end()

    if pos != len(text):
        msg = f"Invalid revalidation interval {value!r}: expected groups like '10s' or '1h30m'."
        raise ConfigurationError(msg)
    return total
