"""
Relative duration parsing for silence windows.

A duration is an integer magnitude followed by an optional unit:
``h`` (hours), ``d`` (days) or ``w`` (weeks). A missing or unrecognised
unit means hours. The unit token is everything after the magnitude, taken
literally, so ``"4 d"`` is four hours. Zero and negative magnitudes are
passed through.
"""

from __future__ import annotations

import re
from datetime import timedelta

from silence_manager.core.constants import DURATION_UNITS, MS_PER_HOUR
from silence_manager.core.exceptions import InvalidDurationError

_DURATION_RE = re.compile(r"^\s*([+-]?\d+)(.*)$", re.DOTALL)


def split_duration(text: str) -> tuple[int, str]:
    """Split ``text`` into its integer magnitude and unit token.

    Raises:
        InvalidDurationError: If ``text`` does not start with an integer.
    """
    match = _DURATION_RE.match(text or "")
    if match is None:
        raise InvalidDurationError(text)
    return int(match.group(1)), match.group(2)


def parse_duration(text: str) -> int:
    """Resolve a relative duration string to milliseconds.

    Examples:
        >>> parse_duration("6h")
        21600000
        >>> parse_duration("2d")
        172800000
        >>> parse_duration("5")
        18000000
    """
    magnitude, unit = split_duration(text)
    return magnitude * DURATION_UNITS.get(unit, MS_PER_HOUR)


def duration_to_timedelta(text: str) -> timedelta:
    """Same as :func:`parse_duration` but as a ``timedelta``."""
    return timedelta(milliseconds=parse_duration(text))
