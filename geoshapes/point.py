from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """
    WGS84 point in degrees, latitude first.
    """

    lat: float
    lon: float

    def to_geojson(self) -> list[float]:
        # GeoJSON is lon,lat.
        return [self.lon, self.lat]

    def __str__(self) -> str:
        return f"{self.lat},{self.lon}"
