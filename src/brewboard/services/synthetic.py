"""
Seeded Noise Generators
=======================
Deterministic pseudo-random helpers shared by the synthetic metrics.

All generators hash their integer inputs through ``sin`` and keep the
fractional part, so the same calendar coordinates always produce the
same value in [0, 1).
"""

import math


def _fract(x: float) -> float:
    return x - math.floor(x)


def seeded_noise(year: int, month0: int, day: int, hour: int) -> float:
    """
    Noise for a calendar hour.

    Parameters
    ----------
    year : int
        Four-digit year
    month0 : int
        Zero-based month (0 = January)
    day : int
        Day of month
    hour : int
        Hour of day (0-23)
    """
    s = year * 1_000_000 + (month0 + 1) * 10_000 + day * 100 + hour
    return _fract(math.sin(s) * 43758.5453)


def segment_noise(year: int, month0: int, day: int, k: int = 1) -> float:
    """Noise keyed by a segment channel ``k`` instead of an hour."""
    s = year * 1_000_000 + (month0 + 1) * 10_000 + day * 100 + k * 7
    return _fract(math.sin(s) * 43758.5453)


def sine_rand(seed: float) -> float:
    """Cheap deterministic generator used for invoices and stock demand."""
    return _fract(math.sin(seed) * 10000)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves going up (towards +inf).

    Python's built-in ``round`` uses banker's rounding, which would move
    generated totals by a unit on exact halves.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def clamp(n: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, n))
