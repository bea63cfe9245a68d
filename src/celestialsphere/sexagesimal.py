"""Sexagesimal angle and time notation — the only string <-> float boundary.

Accepted input forms::

    "125 30 40"          degrees, arc-minutes, arc-seconds
    "125° 30' 40\""      same, with symbols
    "12h 30m 5s"         hours, minutes, seconds
    "125.5"              decimal value
"""

import math
import re

_SEPARATORS = re.compile(r"[°'\"hms\s]+")
_MAX_FIELDS = 3


def _to_float(field: str) -> float:
    try:
        value = float(field)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def parse(value: str | float) -> float:
    """Parse a sexagesimal string (or pass a number through) to decimal units.

    Fields beyond the third are ignored, missing fields count as 0 and a
    field that is not a number contributes 0. The sign of the first field
    applies to the whole value, so ``"-12 30"`` is -12.5.

    Args:
        value: Number, or string with up to three separated fields.

    Returns:
        Decimal degrees (or hours). 0.0 for empty input.
    """
    if isinstance(value, (int, float)):
        return float(value)
    if not value or not value.strip():
        return 0.0

    fields = [f for f in _SEPARATORS.split(value.strip()) if f][:_MAX_FIELDS]
    if not fields:
        return 0.0

    negative = fields[0].startswith("-")
    total = abs(_to_float(fields[0]))
    for power, field in enumerate(fields[1:], start=1):
        total += abs(_to_float(field)) / 60**power
    return -total if negative else total


def _split(value: float, precision: int) -> tuple[str, int, int, float]:
    """Decompose into (sign, whole units, minutes, seconds) with carries applied."""
    sign = "-" if value < 0 else ""
    total_seconds = round(abs(value) * 3600.0, precision)
    whole = int(total_seconds // 3600)
    remainder = total_seconds - whole * 3600
    minutes = int(remainder // 60)
    seconds = round(remainder - minutes * 60, precision)
    # 59.96s at precision 1 rounds to 60.0 and must carry
    if seconds >= 60.0:
        seconds -= 60.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        whole += 1
    if whole == 0 and minutes == 0 and seconds == 0.0:
        sign = ""
    return sign, whole, minutes, abs(seconds)


def format_dms(value: float, precision: int = 1) -> str:
    """Format decimal degrees as ``D° M' S.S"``."""
    sign, d, m, s = _split(value, precision)
    return f"{sign}{d}° {m}' {s:.{precision}f}\""


def format_hms(value: float, precision: int = 1) -> str:
    """Format decimal hours as ``Hh Mm S.Ss``."""
    sign, h, m, s = _split(value, precision)
    return f"{sign}{h}h {m}m {s:.{precision}f}s"


def format_degrees(value: float) -> str:
    return f"{value:.2f}°"


def format_hours(value: float) -> str:
    """Short ``Hh Mm`` form; seconds are dropped after rounding."""
    sign, h, m, _ = _split(value, 0)
    return f"{sign}{h}h {m}m"
