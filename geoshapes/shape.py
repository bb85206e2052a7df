"""
Shape capability shared by `BBox` and `Circle`, and the dispatch between them.

The set of shapes is closed: both dispatchers below know every pairing, and
anything else is rejected. A new shape means a new branch in each of them.
"""

from __future__ import annotations

from typing import Protocol, TypeAlias, Union

from geoshapes.bbox import BBox
from geoshapes.circle import Circle
from geoshapes.errors import UnsupportedShapeError
from geoshapes.point import GeoPoint


AnyShape: TypeAlias = Union[BBox, Circle]


class Shape(Protocol):
    @property
    def bounds(self) -> BBox: ...

    @property
    def center(self) -> GeoPoint: ...

    def area(self) -> float: ...

    def contains_point(self, lat: float, lon: float) -> bool: ...

    def contains(self, shape: AnyShape) -> bool: ...

    def intersects(self, shape: AnyShape) -> bool: ...


def intersects(a: AnyShape, b: AnyShape) -> bool:
    """
    Whether two shapes overlap. Symmetric for every supported pairing.
    """
    if isinstance(a, BBox):
        if isinstance(b, BBox):
            return a.intersects_bbox(b)
        if isinstance(b, Circle):
            return b.intersects_bbox(a)
    elif isinstance(a, Circle):
        if isinstance(b, Circle):
            return a.intersects_circle(b)
        if isinstance(b, BBox):
            return a.intersects_bbox(b)
    raise UnsupportedShapeError(_unsupported(a, b))


def contains(a: AnyShape, b: AnyShape) -> bool:
    """
    Whether `a` fully contains `b`.
    """
    if isinstance(a, BBox):
        if isinstance(b, BBox):
            return a.contains_bbox(b)
        if isinstance(b, Circle):
            return a.contains_circle(b)
    elif isinstance(a, Circle):
        if isinstance(b, Circle):
            return a.contains_circle(b)
        if isinstance(b, BBox):
            return a.contains_bbox(b)
    raise UnsupportedShapeError(_unsupported(a, b))


def _unsupported(a: object, b: object) -> str:
    return f"unsupported shape pairing: {type(a).__name__} and {type(b).__name__}"
