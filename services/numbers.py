"""Rounding helpers shared by the scorers."""

from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    # round() is banker's rounding; scores and percentages round .5 upwards
    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float = 0, hi: float = 100) -> float:
    return max(lo, min(hi, x))
