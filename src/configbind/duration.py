"""Duration token parsing for ``<number><unit>`` configuration values."""

from __future__ import annotations

import re
from typing import Optional

DURATION_PATTERN = re.compile(r"^(?P<number>\d{1,19})(?P<unit>ms|s|m|h|d)$", re.ASCII)

_UNIT_MILLISECONDS = {
    "ms": 1,
    "s": 1_000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(value: str) -> Optional[int]:
    """
    Parse a duration token such as ``30s`` or ``44h`` into milliseconds.

    Args:
        value: Candidate token; must match the whole pattern with no
            surrounding whitespace, sign or decimal part, and at most 19 digits

    Returns:
        Milliseconds, or None when the value is not a duration token
    """
    match = DURATION_PATTERN.fullmatch(value)
    if match is None:
        return None
    return int(match.group("number")) * _UNIT_MILLISECONDS[match.group("unit")]


__all__ = ["DURATION_PATTERN", "parse_duration"]
