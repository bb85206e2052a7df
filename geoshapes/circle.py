from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from geoshapes.bbox import BBox
from geoshapes.config import hash_precision
from geoshapes.distance import DistanceCalc, default_distance_calc
from geoshapes.numeric import equals_eps, quantize
from geoshapes.point import GeoPoint

if TYPE_CHECKING:
    from geoshapes.shape import AnyShape


@dataclass(frozen=True, eq=False)
class Circle:
    """
    Immutable geodesic circle: a center in degrees and a radius in meters.

    The radius in normalized units and the enclosing bounding box are computed
    once with `calc`, so point tests never take a square root.
    """

    lat: float
    lon: float
    radius_in_meter: float
    calc: DistanceCalc = field(default_factory=default_distance_calc, repr=False)

    def __post_init__(self) -> None:
        # `not >=` also rejects NaN.
        if not self.radius_in_meter >= 0:
            raise ValueError(f"Circle radius must be >= 0, got {self.radius_in_meter}")

        # Using object.__setattr__ for frozen dataclass
        for name in ("lat", "lon", "radius_in_meter"):
            object.__setattr__(self, name, float(getattr(self, name)))
        object.__setattr__(self, "_normed_dist", self.calc.normalize(self.radius_in_meter))
        object.__setattr__(
            self, "_bbox", self.calc.create_bbox(self.lat, self.lon, self.radius_in_meter)
        )

    @property
    def normalized_radius(self) -> float:
        return self._normed_dist

    @property
    def bounds(self) -> BBox:
        # A copy, so callers cannot widen the cached box.
        return self._bbox.copy()

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lon)

    def _norm_dist(self, lat: float, lon: float) -> float:
        return self.calc.calc_normalized_dist(self.lat, self.lon, lat, lon)

    def contains_point(self, lat: float, lon: float) -> bool:
        return self._norm_dist(lat, lon) <= self._normed_dist

    def intersects(self, shape: "AnyShape") -> bool:
        from geoshapes.shape import intersects

        return intersects(self, shape)

    def contains(self, shape: "AnyShape") -> bool:
        from geoshapes.shape import contains

        return contains(self, shape)

    def intersects_bbox(self, b: BBox) -> bool:
        """
        Test against the nine regions around the box.

        Corner regions compare the distance to the nearest corner; side regions
        only check that our own bounding box reaches into the box, which is an
        approximation and not exact for every latitude.
        """
        bbox = self._bbox

        # center above the box
        if self.lat > b.max_lat:
            if self.lon < b.min_lon:
                return self._norm_dist(b.max_lat, b.min_lon) <= self._normed_dist
            if self.lon > b.max_lon:
                return self._norm_dist(b.max_lat, b.max_lon) <= self._normed_dist
            return b.max_lat - bbox.min_lat > 0

        # center below the box
        if self.lat < b.min_lat:
            if self.lon < b.min_lon:
                return self._norm_dist(b.min_lat, b.min_lon) <= self._normed_dist
            if self.lon > b.max_lon:
                return self._norm_dist(b.min_lat, b.max_lon) <= self._normed_dist
            return bbox.max_lat - b.min_lat > 0

        # center within the latitude band
        if self.lon < b.min_lon:
            return bbox.max_lon - b.min_lon > 0
        if self.lon > b.max_lon:
            return b.max_lon - bbox.min_lon > 0
        return True

    def intersects_circle(self, c: "Circle") -> bool:
        # Inclusive pre-filter: touching circles have touching bounding boxes.
        if not _bboxes_touch(self._bbox, c._bbox):
            return False
        return self._norm_dist(c.lat, c.lon) <= self.calc.normalize(
            self.radius_in_meter + c.radius_in_meter
        )

    def contains_bbox(self, b: BBox) -> bool:
        if not self._bbox.contains_bbox(b):
            return False
        return (
            self.contains_point(b.max_lat, b.min_lon)
            and self.contains_point(b.min_lat, b.min_lon)
            and self.contains_point(b.max_lat, b.max_lon)
            and self.contains_point(b.min_lat, b.max_lon)
        )

    def contains_circle(self, c: "Circle") -> bool:
        res = self.radius_in_meter - c.radius_in_meter
        if res < 0:
            return False
        return self.calc.calc_dist(self.lat, self.lon, c.lat, c.lon) <= res

    def area(self) -> float:
        """Planar disc area in m²."""
        return math.pi * self.radius_in_meter * self.radius_in_meter

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circle):
            return NotImplemented
        return (
            equals_eps(self.lat, other.lat)
            and equals_eps(self.lon, other.lon)
            and equals_eps(self.radius_in_meter, other.radius_in_meter)
        )

    def __hash__(self) -> int:
        d = hash_precision()
        return hash(
            (
                quantize(self.lat, d),
                quantize(self.lon, d),
                quantize(self.radius_in_meter, d),
            )
        )

    def __str__(self) -> str:
        return f"{self.lat},{self.lon}, radius:{self.radius_in_meter}"


def _bboxes_touch(a: BBox, b: BBox) -> bool:
    return (
        a.min_lon <= b.max_lon
        and a.min_lat <= b.max_lat
        and b.min_lon <= a.max_lon
        and b.min_lat <= a.max_lat
    )
