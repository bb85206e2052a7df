from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
from shapely.geometry import Polygon
from shapely.geometry import box as shapely_box

from geoshapes.config import hash_precision
from geoshapes.errors import InvalidFormatError, InvalidStateError
from geoshapes.numeric import equals_eps, quantize, round2, round6
from geoshapes.point import GeoPoint

if TYPE_CHECKING:
    from geoshapes.circle import Circle
    from geoshapes.distance import DistanceCalc
    from geoshapes.shape import AnyShape


logger = logging.getLogger(__name__)

# Bounds of an inverse box; nothing real can be this far out.
MAX_VALUE = sys.float_info.max


@dataclass(eq=False)
class BBox:
    """
    WGS84 bounding box in degrees, optionally with an elevation range in meters.

    Field order is minLon, maxLon, minLat, maxLat (then minEle, maxEle), i.e.
    x-range first, then y-range. Note this differs from GeoJSON's
    minLon, minLat, maxLon, maxLat which `to_geojson()` produces.

    The box is mutable through `update()`; clone it with `copy()` before sharing
    if it will keep growing. `BBoxAccumulator` wraps that pattern.
    """

    min_lon: float
    max_lon: float
    min_lat: float
    max_lat: float
    min_ele: float = math.nan
    max_ele: float = math.nan
    # Inferred from the elevation bounds when not given.
    elevation: bool | None = None

    def __post_init__(self) -> None:
        for name in ("min_lon", "max_lon", "min_lat", "max_lat", "min_ele", "max_ele"):
            setattr(self, name, float(getattr(self, name)))
        if self.elevation is None:
            self.elevation = not (math.isnan(self.min_ele) or math.isnan(self.max_ele))
        elif self.elevation:
            # Missing elevation bounds start out inverse so update() can widen them.
            if math.isnan(self.min_ele):
                self.min_ele = MAX_VALUE
            if math.isnan(self.max_ele):
                self.max_ele = -MAX_VALUE

    @classmethod
    def from_coords(cls, coords: Sequence[float]) -> "BBox":
        """
        Build from `[lon0, lat0, lon1, lat1]`, e.g. a GeoJSON 2-D bbox.
        """
        if len(coords) != 4:
            raise ValueError(f"BBox coords should have 4 values but had {len(coords)}")
        return cls(float(coords[0]), float(coords[2]), float(coords[1]), float(coords[3]))

    @classmethod
    def create_inverse(cls, elevation: bool) -> "BBox":
        """
        Prefilled with extreme values so that every `update()` widens it.

        Not valid until it has absorbed at least two distinct points.
        """
        if elevation:
            return cls(MAX_VALUE, -MAX_VALUE, MAX_VALUE, -MAX_VALUE, MAX_VALUE, -MAX_VALUE, True)
        return cls(MAX_VALUE, -MAX_VALUE, MAX_VALUE, -MAX_VALUE, math.nan, math.nan, False)

    @classmethod
    def parse_two_points(cls, text: str) -> "BBox":
        """
        Parse `lat1,lon1,lat2,lon2`; the two corners may come in any order.
        """
        lat1, lon1, lat2, lon2 = _parse_four(text)
        if lat1 > lat2:
            lat1, lat2 = lat2, lat1
        if lon1 > lon2:
            lon1, lon2 = lon2, lon1
        return cls(lon1, lon2, lat1, lat2)

    @classmethod
    def parse_bbox_string(cls, text: str) -> "BBox":
        """
        Parse `minLon,maxLon,minLat,maxLat` verbatim (no reordering).
        """
        min_lon, max_lon, min_lat, max_lat = _parse_four(text)
        return cls(min_lon, max_lon, min_lat, max_lat)

    @property
    def has_elevation(self) -> bool:
        return bool(self.elevation)

    @property
    def is_valid(self) -> bool:
        # Equal elevation is fine, equal lat or lon is not.
        if self.min_lon >= self.max_lon:
            return False
        if self.min_lat >= self.max_lat:
            return False

        if self.has_elevation:
            if math.isnan(self.min_ele) or math.isnan(self.max_ele):
                return False
            if self.min_ele > self.max_ele:
                return False
            if self.max_ele == -MAX_VALUE or self.min_ele == MAX_VALUE:
                return False

        return (
            self.max_lat != -MAX_VALUE
            and self.min_lat != MAX_VALUE
            and self.max_lon != -MAX_VALUE
            and self.min_lon != MAX_VALUE
        )

    def update(self, lat: float, lon: float, ele: float | None = None) -> None:
        """
        Widen the box so it includes the given point.
        """
        if ele is not None:
            if not self.has_elevation:
                raise InvalidStateError("No BBox with elevation to update")
            if ele > self.max_ele:
                self.max_ele = ele
            if ele < self.min_ele:
                self.min_ele = ele

        if lat > self.max_lat:
            self.max_lat = lat
        if lat < self.min_lat:
            self.min_lat = lat

        if lon > self.max_lon:
            self.max_lon = lon
        if lon < self.min_lon:
            self.min_lon = lon

    def calculate_intersection(self, other: "BBox") -> "BBox | None":
        """
        The overlapping 2-D box, or None when the boxes do not intersect.
        """
        if not self.intersects_bbox(other):
            return None
        return BBox(
            max(self.min_lon, other.min_lon),
            min(self.max_lon, other.max_lon),
            max(self.min_lat, other.min_lat),
            min(self.max_lat, other.max_lat),
        )

    def copy(self) -> "BBox":
        return BBox(
            self.min_lon,
            self.max_lon,
            self.min_lat,
            self.max_lat,
            self.min_ele,
            self.max_ele,
            self.has_elevation,
        )

    def intersects(self, shape: "AnyShape") -> bool:
        # Lazily import to avoid a cycle: the dispatcher knows both shapes.
        from geoshapes.shape import intersects

        return intersects(self, shape)

    def contains(self, shape: "AnyShape") -> bool:
        from geoshapes.shape import contains

        return contains(self, shape)

    def intersects_bbox(self, o: "BBox") -> bool:
        # Strict: boxes sharing only an edge or a corner do not intersect.
        return (
            self.min_lon < o.max_lon
            and self.min_lat < o.max_lat
            and o.min_lon < self.max_lon
            and o.min_lat < self.max_lat
        )

    def intersects_circle(self, c: "Circle") -> bool:
        return c.intersects_bbox(self)

    def contains_point(self, lat: float, lon: float) -> bool:
        # Inclusive: boundary points are contained.
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon

    def contains_bbox(self, b: "BBox") -> bool:
        return (
            self.max_lat >= b.max_lat
            and self.min_lat <= b.min_lat
            and self.max_lon >= b.max_lon
            and self.min_lon <= b.min_lon
        )

    def contains_circle(self, c: "Circle") -> bool:
        """
        True if the circle's bounding box fits inside this box.

        This is stricter than real containment: near the corners a circle can
        lie inside the box while its bounding box does not.
        """
        return self.contains_bbox(c.bounds)

    @property
    def bounds(self) -> "BBox":
        return self

    @property
    def center(self) -> GeoPoint:
        return GeoPoint((self.max_lat + self.min_lat) / 2, (self.max_lon + self.min_lon) / 2)

    def area(self, calc: "DistanceCalc | None" = None) -> float:
        """
        Estimated area in m².

        Width is measured along the mean latitude, height along one meridian
        (both sides have the same length). Only meaningful for small boxes.
        """
        if calc is None:
            from geoshapes.distance import DIST_PLANE

            calc = DIST_PLANE
        mean_lat = (self.max_lat + self.min_lat) / 2
        return calc.calc_dist(mean_lat, self.min_lon, mean_lat, self.max_lon) * calc.calc_dist(
            self.min_lat, self.min_lon, self.max_lat, self.min_lon
        )

    def normalized(self) -> "BBox":
        min_lon = min(self.min_lon, self.max_lon)
        max_lon = max(self.min_lon, self.max_lon)
        min_lat = min(self.min_lat, self.max_lat)
        max_lat = max(self.min_lat, self.max_lat)
        return BBox(
            min_lon, max_lon, min_lat, max_lat, self.min_ele, self.max_ele, self.has_elevation
        )

    def rounded_key(self, decimals: int = 4) -> tuple[float, float, float, float]:
        """
        A stable, hashable key (minLon, minLat, maxLon, maxLat) for caching.

        decimals=4 is ~11m-ish in latitude.
        """
        b = self.normalized()
        return (
            quantize(b.min_lon, decimals),
            quantize(b.min_lat, decimals),
            quantize(b.max_lon, decimals),
            quantize(b.max_lat, decimals),
        )

    def to_geojson(self) -> list[float]:
        """
        Attention: GeoJSON is lon,lat and in 3-D lon,lat,ele per corner.
        """
        out = [round6(self.min_lon), round6(self.min_lat)]
        if self.has_elevation:
            out.append(round2(self.min_ele))
        out.extend([round6(self.max_lon), round6(self.max_lat)])
        if self.has_elevation:
            out.append(round2(self.max_ele))
        return out

    def to_polygon(self) -> Polygon:
        return shapely_box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def to_less_precision_string(self) -> str:
        # float32 round-trip, printed with the shortest repr that survives it.
        return ",".join(
            str(np.float32(v)) for v in (self.min_lon, self.max_lon, self.min_lat, self.max_lat)
        )

    def __str__(self) -> str:
        s = f"{self.min_lon},{self.max_lon},{self.min_lat},{self.max_lat}"
        if self.has_elevation:
            s += f",{self.min_ele},{self.max_ele}"
        return s

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BBox):
            return NotImplemented
        # Elevation is not compared.
        return (
            equals_eps(self.min_lat, other.min_lat)
            and equals_eps(self.max_lat, other.max_lat)
            and equals_eps(self.min_lon, other.min_lon)
            and equals_eps(self.max_lon, other.max_lon)
        )

    def __hash__(self) -> int:
        return hash(self.rounded_key(hash_precision()))


def _parse_four(text: str) -> tuple[float, float, float, float]:
    parts = text.split(",")
    # Trailing separators are tolerated ("1,2,3,4,").
    while parts and parts[-1] == "":
        parts.pop()
    if len(parts) != 4:
        logger.debug("Rejecting bbox text with %d parts: %r", len(parts), text)
        raise InvalidFormatError(f"BBox should have 4 parts but was {text}")
    try:
        a, b, c, d = (float(p) for p in parts)
    except ValueError as e:
        logger.debug("Rejecting bbox text with a non-numeric part: %r", text)
        raise InvalidFormatError(f"BBox parts should be numbers but was {text}") from e
    return a, b, c, d
