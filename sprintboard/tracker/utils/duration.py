# -*- coding: utf-8 -*-
"""
Work-time strings <-> integer minutes.

Accepted input is one or more ``<number><unit>`` tokens (``w``, ``d``, ``h``,
``m``; case-insensitive, fractional numbers allowed) separated by optional
whitespace, or a bare integer meaning minutes. A working day is 8h and a
working week is 5 days.
"""
from __future__ import annotations
import math
import re
from typing import Optional

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 8 * MINUTES_PER_HOUR
MINUTES_PER_WEEK = 5 * MINUTES_PER_DAY

UNIT_MINUTES = {
    "w": MINUTES_PER_WEEK,
    "d": MINUTES_PER_DAY,
    "h": MINUTES_PER_HOUR,
    "m": 1,
}

_BARE_MINUTES_RE = re.compile(r"\d+", re.ASCII)
_TOKEN_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([wdhm])", re.ASCII)
_DURATION_RE = re.compile(r"(?:\s*\d+(?:\.\d+)?\s*[wdhm])+\s*", re.ASCII)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_duration(text) -> Optional[int]:
    """
    "1h 30m" -> 90, "1.5h" -> 90, "1d" -> 480, "1w" -> 2400, "45" -> 45.
    Returns None for empty input or anything that is not made of duration tokens.
    """
    if text is None:
        return None
    value = str(text).strip().lower()
    if not value:
        return None

    if _BARE_MINUTES_RE.fullmatch(value):
        return int(value)

    if not _DURATION_RE.fullmatch(value):
        return None

    total = sum(float(number) * UNIT_MINUTES[unit] for number, unit in _TOKEN_RE.findall(value))
    return round_half_up(total)


def format_duration(minutes: Optional[int]) -> str:
    """135 -> "2h 15m", 120 -> "2h", 45 -> "45m", 0/None -> "0m"."""
    if not minutes:
        return "0m"
    minutes = int(minutes)
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
