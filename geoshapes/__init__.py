"""
Geographic shape algebra: bounding boxes and geodesic circles.

Both shapes answer containment and intersection against each other, report
their bounds, center and area, and compare with a small epsilon.
"""

from geoshapes.accumulator import BBoxAccumulator
from geoshapes.bbox import BBox
from geoshapes.circle import Circle
from geoshapes.distance import (
    DIST_EARTH,
    DIST_PLANE,
    DistanceCalc,
    DistanceEarth,
    DistanceGeod,
    DistancePlane,
    default_distance_calc,
)
from geoshapes.errors import InvalidFormatError, InvalidStateError, UnsupportedShapeError
from geoshapes.point import GeoPoint
from geoshapes.shape import AnyShape, Shape, contains, intersects

__all__ = [
    "AnyShape",
    "BBox",
    "BBoxAccumulator",
    "Circle",
    "DIST_EARTH",
    "DIST_PLANE",
    "DistanceCalc",
    "DistanceEarth",
    "DistanceGeod",
    "DistancePlane",
    "GeoPoint",
    "InvalidFormatError",
    "InvalidStateError",
    "Shape",
    "UnsupportedShapeError",
    "contains",
    "default_distance_calc",
    "intersects",
]
