from __future__ import annotations

import math


# Absolute tolerance for shape equality (degrees or meters).
DEFAULT_PRECISION = 1e-6


def equals_eps(d1: float, d2: float, epsilon: float = DEFAULT_PRECISION) -> bool:
    return abs(d1 - d2) < epsilon


def round_half_up(value: float, decimals: int) -> float:
    """
    Round like GeoJSON writers usually do (half away from -inf), not banker's rounding.
    """
    factor = 10.0**decimals
    # Sentinel and NaN bounds pass through unchanged.
    if not math.isfinite(value * factor):
        return value
    return math.floor(value * factor + 0.5) / factor


def round6(value: float) -> float:
    return round_half_up(value, 6)


def round2(value: float) -> float:
    return round_half_up(value, 2)


def quantize(value: float, decimals: int) -> float:
    # NaN never equals itself; map it to a single key so empty elevation hashes stably.
    if math.isnan(value):
        return 0.0
    q = round(value, decimals)
    # Fold -0.0 into 0.0.
    return q + 0.0
