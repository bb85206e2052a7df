from __future__ import annotations

import os
from functools import lru_cache


_DISTANCE_CALC_NAMES = {"earth", "plane", "geod"}


def distance_calc_name() -> str:
    """
    Name of the distance strategy used when a Circle is built without one.

    One of `earth` (haversine, default), `plane` or `geod` (WGS84 ellipsoid).
    """
    v = (os.getenv("GEOSHAPES_DISTANCE_CALC") or "earth").strip().lower()
    if v not in _DISTANCE_CALC_NAMES:
        raise ValueError(
            f"Unknown GEOSHAPES_DISTANCE_CALC={v!r}; expected one of {sorted(_DISTANCE_CALC_NAMES)}"
        )
    return v


def hash_decimals() -> int:
    # 6 decimals is ~0.1m in latitude; coarser than the equality epsilon.
    v = (os.getenv("GEOSHAPES_HASH_DECIMALS") or "6").strip()
    try:
        return max(0, int(v))
    except ValueError:
        return 6


@lru_cache(maxsize=1)
def hash_precision() -> int:
    """
    `hash_decimals()` resolved once per process, so hashes of shapes already
    stored in sets and dicts never change under them.
    """
    return hash_decimals()
