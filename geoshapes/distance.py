from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import TYPE_CHECKING, Protocol

from pyproj import Geod

from geoshapes.config import distance_calc_name

if TYPE_CHECKING:
    from geoshapes.bbox import BBox


logger = logging.getLogger(__name__)

# Mean earth radius in meters, the usual value for haversine.
R = 6_371_000.0
# Equatorial circumference of that sphere.
C = 2 * math.pi * R


class DistanceCalc(Protocol):
    """
    Distance strategy used by the shapes.

    `calc_normalized_dist` is a cheaper, monotonic proxy for `calc_dist` and
    `normalize` maps meters onto the same scale, so comparisons never need
    the inverse transform.
    """

    def calc_dist(self, from_lat: float, from_lon: float, to_lat: float, to_lon: float) -> float: ...

    def calc_normalized_dist(
        self, from_lat: float, from_lon: float, to_lat: float, to_lon: float
    ) -> float: ...

    def normalize(self, dist: float) -> float: ...

    def denormalize(self, normed_dist: float) -> float: ...

    def calc_circumference(self, lat: float) -> float: ...

    def create_bbox(self, lat: float, lon: float, radius_in_meter: float) -> "BBox": ...


class DistanceEarth:
    """
    Great-circle distance on a sphere (haversine).
    """

    def calc_dist(self, from_lat: float, from_lon: float, to_lat: float, to_lon: float) -> float:
        normed = self.calc_normalized_dist(from_lat, from_lon, to_lat, to_lon)
        return self.denormalize(normed)

    def calc_normalized_dist(
        self, from_lat: float, from_lon: float, to_lat: float, to_lon: float
    ) -> float:
        sin_delta_lat = math.sin(math.radians(to_lat - from_lat) / 2)
        sin_delta_lon = math.sin(math.radians(to_lon - from_lon) / 2)
        return (
            sin_delta_lat * sin_delta_lat
            + sin_delta_lon
            * sin_delta_lon
            * math.cos(math.radians(from_lat))
            * math.cos(math.radians(to_lat))
        )

    def normalize(self, dist: float) -> float:
        tmp = math.sin(dist / 2 / R)
        return tmp * tmp

    def denormalize(self, normed_dist: float) -> float:
        # Rounding can push the haversine term a hair above 1 for antipodes.
        return R * 2 * math.asin(math.sqrt(min(1.0, normed_dist)))

    def calc_circumference(self, lat: float) -> float:
        return 2 * math.pi * R * math.cos(math.radians(lat))

    def create_bbox(self, lat: float, lon: float, radius_in_meter: float) -> "BBox":
        """
        Axis-aligned box around a circle, widened by the radius in degrees per axis.

        Not meant for circles crossing a pole or the antimeridian.
        """
        from geoshapes.bbox import BBox

        d_lon = 360 / (self.calc_circumference(lat) / radius_in_meter) if radius_in_meter else 0.0
        d_lat = 360 / (C / radius_in_meter) if radius_in_meter else 0.0
        return BBox(lon - d_lon, lon + d_lon, lat - d_lat, lat + d_lat)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DistancePlane(DistanceEarth):
    """
    Equirectangular approximation: fast and fine for short distances away from the poles.
    """

    def calc_normalized_dist(
        self, from_lat: float, from_lon: float, to_lat: float, to_lon: float
    ) -> float:
        d_lat = math.radians(to_lat - from_lat)
        d_lon = math.radians(to_lon - from_lon)
        left = math.cos(math.radians((from_lat + to_lat) / 2)) * d_lon
        return d_lat * d_lat + left * left

    def normalize(self, dist: float) -> float:
        tmp = dist / R
        return tmp * tmp

    def denormalize(self, normed_dist: float) -> float:
        return R * math.sqrt(normed_dist)


@lru_cache(maxsize=1)
def wgs84_geod() -> Geod:
    return Geod(ellps="WGS84")


class DistanceGeod:
    """
    Ellipsoidal distance on WGS84 via pyproj's geodesic solver.

    There is no cheaper proxy for the geodesic length, so the normalized
    distance is the distance itself.
    """

    def __init__(self, geod: Geod | None = None) -> None:
        self.geod = geod or wgs84_geod()

    def calc_dist(self, from_lat: float, from_lon: float, to_lat: float, to_lon: float) -> float:
        # pyproj is lon,lat.
        _az12, _az21, dist = self.geod.inv(from_lon, from_lat, to_lon, to_lat)
        return float(dist)

    def calc_normalized_dist(
        self, from_lat: float, from_lon: float, to_lat: float, to_lon: float
    ) -> float:
        return self.calc_dist(from_lat, from_lon, to_lat, to_lon)

    def normalize(self, dist: float) -> float:
        return dist

    def denormalize(self, normed_dist: float) -> float:
        return normed_dist

    def calc_circumference(self, lat: float) -> float:
        # Length of the parallel at `lat`.
        a = self.geod.a
        e2 = self.geod.es
        phi = math.radians(lat)
        return 2 * math.pi * a * math.cos(phi) / math.sqrt(1 - e2 * math.sin(phi) ** 2)

    def create_bbox(self, lat: float, lon: float, radius_in_meter: float) -> "BBox":
        from geoshapes.bbox import BBox

        lons, lats, _back = self.geod.fwd(
            [lon, lon, lon, lon],
            [lat, lat, lat, lat],
            [0.0, 90.0, 180.0, 270.0],
            [radius_in_meter] * 4,
        )
        return BBox(min(lons), max(lons), min(lats), max(lats))

    def __repr__(self) -> str:
        return "DistanceGeod(ellps='WGS84')"


DIST_EARTH = DistanceEarth()
DIST_PLANE = DistancePlane()


def distance_calc_for(name: str) -> DistanceCalc:
    key = (name or "").strip().lower()
    if key == "earth":
        return DIST_EARTH
    if key == "plane":
        return DIST_PLANE
    if key == "geod":
        return DistanceGeod()
    raise ValueError(f"Unknown distance calc: {name!r}")


def default_distance_calc() -> DistanceCalc:
    name = distance_calc_name()
    logger.debug("Using %s distance calc as default", name)
    return distance_calc_for(name)
